"""Main scaffolding orchestrator.

Takes a ``ProjectSpec`` and materializes the project in one linear pass:

1. language-specific steps (directory layout, toolchain run, entry stub),
2. the common tail (``.gitignore`` and ``Makefile``).

Local file operations are fail-fast: the first error stops the run and is
re-raised.  External toolchain runs are best-effort: their output is printed
and a failure only produces a warning.  Files written before a failure are
left in place.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from gen.config import Config
from gen.errors import ErrorKind, GenError
from gen.models import Language, ProjectKind, ProjectSpec
from gen.resolver import resolve_domain, resolve_paths
from gen.toolchain import (
    CapturedOutput,
    cargo_new_args,
    clang_format_dump_args,
    go_mod_init_args,
    invoke,
    mvn_archetype_args,
)
from gen.utils import (
    console,
    print_created,
    print_running,
    print_tool_output,
    print_warning,
)

from .layout import DirectoryMaterializer
from .templates import TemplateRenderer

T = TypeVar("T")

GITIGNORE = ".gitignore"
MAKEFILE_TEMPLATES = {
    ProjectKind.LIBRARY: "Makefile.lib",
    ProjectKind.EXECUTABLE: "Makefile.bin",
}
JAVA_MANIFEST = "manifest.txt"


class GenerationState(str, Enum):
    """Progress of a single ``generate()`` call."""

    START = "start"
    DIRECTORY_CREATED = "directory_created"
    LANGUAGE_ARTIFACTS_WRITTEN = "language_artifacts_written"
    COMMON_ARTIFACTS_WRITTEN = "common_artifacts_written"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """What a generation run produced."""

    project_root: Path
    state: GenerationState
    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    tool_runs: list[CapturedOutput] = field(default_factory=list)

    @property
    def tool_failures(self) -> list[CapturedOutput]:
        return [run for run in self.tool_runs if not run.ok]


class ProjectGenerator:
    """Generates a project for one ``ProjectSpec``.

    Paths are resolved and validated in the constructor, so an existing
    project directory or a missing template subtree fails before anything is
    written.  A generator is meant to be used for a single ``generate()``
    call.
    """

    def __init__(self, spec: ProjectSpec, config: Config | None = None) -> None:
        self.spec = spec
        self.config = config or Config()
        self.paths = resolve_paths(spec, self.config)
        self.renderer = TemplateRenderer(self.paths.template_root)
        self.layout = DirectoryMaterializer(self.paths.project_root, spec.language)
        self.state = GenerationState.START
        self.error: GenError | None = None
        self.domain: str | None = spec.domain
        self.result = GenerationResult(
            project_root=self.paths.project_root, state=self.state
        )

        self._pipelines: dict[Language, Callable[[], None]] = {
            Language.C: self._c_artifacts,
            Language.CPP: self._cpp_artifacts,
            Language.JAVA: self._java_artifacts,
            Language.RUST: self._rust_artifacts,
            Language.GO: self._go_artifacts,
        }

    @property
    def project_root(self) -> Path:
        return self.paths.project_root

    @property
    def template_root(self) -> Path:
        return self.paths.template_root

    # -- Public API --------------------------------------------------------

    def generate(self) -> GenerationResult:
        """Run the full pipeline for the spec's language.

        Returns:
            The ``GenerationResult`` in state ``DONE``.

        Raises:
            GenError: The first local failure.  ``self.state`` is ``FAILED``
                and ``self.result`` lists what was written before it.
        """
        pipeline = self._pipelines[self.spec.language]
        try:
            pipeline()
            self._advance(GenerationState.LANGUAGE_ARTIFACTS_WRITTEN)
            self._common_artifacts()
            self._advance(GenerationState.COMMON_ARTIFACTS_WRITTEN)
        except GenError as exc:
            self.error = exc
            self._advance(GenerationState.FAILED)
            raise

        self._advance(GenerationState.DONE)
        return self.result

    # -- Result-handling policies ------------------------------------------

    def _best_effort(self, tool: str, args: list[str], working_dir: Path) -> CapturedOutput:
        """Run an external tool; report failures, never raise."""
        print_running(" ".join([tool, *args]))
        run = invoke(tool, args, working_dir, timeout=self.config.tool_timeout)
        self.result.tool_runs.append(run)
        print_tool_output(run.stdout)
        print_tool_output(run.stderr)
        if not run.ok:
            print_warning(f"{ErrorKind.EXTERNAL_TOOL_FAILURE.value}: {run.describe()}")
        return run

    def _fail_fast(self, step: Callable[[], T], path: Path) -> T:
        """Run a local file operation; any failure halts the pipeline."""
        try:
            return step()
        except GenError:
            raise
        except OSError as exc:
            raise GenError(ErrorKind.IO, f"{path}: {exc}", path=path) from exc

    # -- Steps -------------------------------------------------------------

    def _advance(self, state: GenerationState) -> None:
        self.state = state
        self.result.state = state

    def _record_dirs(self, directories: list[Path]) -> None:
        for directory in directories:
            self.result.directories.append(directory)
            print_created(directory, directory=True)

    def _record_file(self, path: Path) -> Path:
        self.result.files.append(path)
        print_created(path)
        return path

    def _create_layout(self) -> None:
        self._record_dirs(self._fail_fast(self.layout.create_layout, self.project_root))
        self._advance(GenerationState.DIRECTORY_CREATED)

    def _ensure_layout(self) -> None:
        self._record_dirs(self._fail_fast(self.layout.ensure_layout, self.project_root))
        self._advance(GenerationState.DIRECTORY_CREATED)

    def _resolve_domain(self) -> str:
        domain = resolve_domain(self.spec, self.template_root)
        if self.spec.domain is None:
            console.print(f"No domain specified, using default domain {domain}", markup=False)
        self.domain = domain
        return domain

    def _context(self) -> dict[str, Any]:
        return self.spec.template_context(self.domain)

    def _render(self, template_name: str, output: Path) -> Path:
        written = self._fail_fast(
            lambda: self.renderer.render_to_file(template_name, output, self._context()),
            output,
        )
        return self._record_file(written)

    def _copy(self, template_name: str, output: Path) -> Path:
        written = self._fail_fast(lambda: self.renderer.copy(template_name, output), output)
        return self._record_file(written)

    def _touch(self, output: Path) -> Path:
        written = self._fail_fast(lambda: self.renderer.touch(output), output)
        return self._record_file(written)

    def _clang_format(self) -> None:
        """Write ``.clang-format`` from ``clang-format --dump-config`` when available."""
        run = self._best_effort(
            self.config.tools.clang_format,
            clang_format_dump_args(self.config.clang_format_style),
            self.project_root,
        )
        if run.ok and run.stdout:
            target = self.project_root / ".clang-format"
            self._fail_fast(lambda: target.write_bytes(run.stdout), target)
            self._record_file(target)

    # -- Per-language pipelines --------------------------------------------

    def _c_artifacts(self) -> None:
        self._create_layout()
        self._clang_format()
        if self.spec.is_executable:
            entry = self.spec.language.traits.entry_point
            self._copy(entry, self.project_root / entry)

    def _cpp_artifacts(self) -> None:
        self._create_layout()
        self._clang_format()
        if self.spec.is_executable:
            entry = self.spec.language.traits.entry_point
            self._render(entry, self.project_root / entry)

    def _java_artifacts(self) -> None:
        domain = self._resolve_domain()
        self._best_effort(
            self.config.tools.mvn,
            mvn_archetype_args(domain, self.spec.name),
            Path(self.config.output_dir),
        )
        self._ensure_layout()
        self._render(JAVA_MANIFEST, self.project_root / JAVA_MANIFEST)

    def _rust_artifacts(self) -> None:
        self._best_effort(
            self.config.tools.cargo,
            cargo_new_args(self.spec.name, self.spec.kind),
            Path(self.config.output_dir),
        )
        self._ensure_layout()
        if self.spec.is_executable:
            entry = self.spec.language.traits.entry_point
            self._copy(entry, self.project_root / entry)
        self._touch(self.layout.src_dir / "lib.rs")

    def _go_artifacts(self) -> None:
        domain = self._resolve_domain()
        self._create_layout()
        self._best_effort(
            self.config.tools.go,
            go_mod_init_args(domain, self.spec.name),
            self.project_root,
        )
        if self.spec.is_executable:
            entry = self.spec.language.traits.entry_point
            self._render(entry, self.project_root / entry)

    def _common_artifacts(self) -> None:
        self._copy(GITIGNORE, self.project_root / GITIGNORE)
        makefile = MAKEFILE_TEMPLATES[self.spec.kind]
        self._render(makefile, self.project_root / "Makefile")
