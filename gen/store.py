"""Bundled template store.

The package ships a default template tree under ``gen/templates/``; this
module installs it into the user's template root (``gen --install-templates``)
and reports which language subtrees a template root provides.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from gen.errors import ErrorKind, GenError
from gen.models import Language

BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "templates"


def install_templates(dest: str | Path, overwrite: bool = False) -> list[Path]:
    """Copy the bundled template tree to *dest*.

    Args:
        dest: Target template root, e.g. ``~/.config/gen/templates``.
        overwrite: Replace files in an existing *dest*.  Files in *dest*
            that have no bundled counterpart are kept.

    Returns:
        Sorted list of the files written.

    Raises:
        GenError: ``ALREADY_EXISTS`` if *dest* exists and *overwrite* is false,
            ``IO`` if the copy fails.
    """
    target = Path(dest)
    if target.exists() and not overwrite:
        raise GenError(
            ErrorKind.ALREADY_EXISTS,
            f"Template directory {target} already exists (use --force to overwrite)",
            path=target,
        )

    try:
        shutil.copytree(BUNDLED_TEMPLATE_DIR, target, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise GenError(ErrorKind.IO, f"Could not install templates to {target}: {exc}", path=target) from exc

    return sorted(
        target / path.relative_to(BUNDLED_TEMPLATE_DIR)
        for path in BUNDLED_TEMPLATE_DIR.rglob("*")
        if path.is_file()
    )


def template_status(template_root: str | Path) -> dict[Language, bool]:
    """Return ``{language: subtree_present}`` for every supported language."""
    root = Path(template_root)
    return {lang: (root / lang.traits.subtree).is_dir() for lang in Language}
