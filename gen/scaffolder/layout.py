"""Project directory layout.

The only part of the scaffolder that creates directories.  Everything else
writes files into directories created here.
"""

from __future__ import annotations

from pathlib import Path

from gen.errors import ErrorKind, GenError
from gen.models import Language


class DirectoryMaterializer:
    """Creates the project root and, where the language uses one, ``src/``."""

    def __init__(self, project_root: str | Path, language: Language) -> None:
        self.project_root = Path(project_root)
        self.language = language

    @property
    def src_dir(self) -> Path:
        return self.project_root / "src"

    def planned_dirs(self) -> list[Path]:
        dirs = [self.project_root]
        if self.language.traits.uses_src_dir:
            dirs.append(self.src_dir)
        return dirs

    def create_layout(self) -> list[Path]:
        """Create the project layout from scratch.

        Raises:
            GenError: ``ALREADY_EXISTS`` if the project root appeared since
                paths were resolved, ``IO`` for any other failure.  Nothing
                created before the failure is removed.
        """
        created: list[Path] = []
        for directory in self.planned_dirs():
            try:
                directory.mkdir()
            except FileExistsError as exc:
                raise GenError(
                    ErrorKind.ALREADY_EXISTS,
                    f"Directory {directory} already exists! Refusing to overwrite",
                    path=directory,
                ) from exc
            except OSError as exc:
                raise GenError(
                    ErrorKind.IO,
                    f"Error creating directory {directory}: {exc}",
                    path=directory,
                ) from exc
            created.append(directory)
        return created

    def ensure_layout(self) -> list[Path]:
        """Create whatever part of the layout is still missing.

        Used after a toolchain that normally creates the project root itself
        (``cargo new``, ``mvn archetype:generate``) has run, whether or not it
        succeeded.

        Returns:
            Only the directories that did not exist before the call.
        """
        created: list[Path] = []
        for directory in self.planned_dirs():
            if directory.is_dir():
                continue
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise GenError(
                    ErrorKind.IO,
                    f"Error creating directory {directory}: {exc}",
                    path=directory,
                ) from exc
            created.append(directory)
        return created
