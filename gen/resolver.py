"""Turns raw CLI input into a validated generation request.

Parses the language and kind strings into their enums, derives the project
and template paths (checking them before anything is written), and resolves
the domain for ecosystems whose manifests embed one.
"""

from __future__ import annotations

from pathlib import Path

from gen.config import Config
from gen.errors import ErrorKind, GenError
from gen.models import Language, ProjectKind, ProjectSpec, ResolvedPaths

LANGUAGE_ALIASES: dict[str, Language] = {
    "c": Language.C,
    "cpp": Language.CPP,
    "c++": Language.CPP,
    "cc": Language.CPP,
    "java": Language.JAVA,
    "rust": Language.RUST,
    "rs": Language.RUST,
    "go": Language.GO,
}

KIND_ALIASES: dict[str, ProjectKind] = {
    "lib": ProjectKind.LIBRARY,
    "library": ProjectKind.LIBRARY,
    "bin": ProjectKind.EXECUTABLE,
    "binary": ProjectKind.EXECUTABLE,
    "exe": ProjectKind.EXECUTABLE,
    "executable": ProjectKind.EXECUTABLE,
}

DOMAIN_FILE = "domain"


def parse_language(raw: str) -> Language:
    """Map a language alias to its ``Language``.

    Matching is exact and case-sensitive (``"cpp"``, ``"c++"`` and ``"cc"``
    all map to C++, but ``"CPP"`` does not).

    Raises:
        GenError: ``UNKNOWN_LANGUAGE`` for anything not in the alias table.
    """
    try:
        return LANGUAGE_ALIASES[raw]
    except KeyError:
        known = ", ".join(sorted(LANGUAGE_ALIASES))
        raise GenError(
            ErrorKind.UNKNOWN_LANGUAGE,
            f"Unknown language {raw!r} (expected one of: {known})",
        ) from None


def parse_kind(raw: str | None) -> ProjectKind:
    """Map a kind alias to its ``ProjectKind``; unknown or missing input is Executable."""
    if raw is None:
        return ProjectKind.EXECUTABLE
    return KIND_ALIASES.get(raw, ProjectKind.EXECUTABLE)


def resolve_paths(spec: ProjectSpec, config: Config) -> ResolvedPaths:
    """Derive and validate the project and template paths for *spec*.

    Raises:
        GenError: ``ALREADY_EXISTS`` if the project root is already taken,
            ``TEMPLATE_DIRECTORY_MISSING`` if the language's template subtree
            is not a directory.
    """
    project_root = Path(config.output_dir) / spec.name
    if project_root.exists() or project_root.is_symlink():
        raise GenError(
            ErrorKind.ALREADY_EXISTS,
            f"Directory {project_root} already exists! Refusing to overwrite",
            path=project_root,
        )

    template_root = config.resolve_template_root() / spec.language.traits.subtree
    if not template_root.is_dir():
        raise GenError(
            ErrorKind.TEMPLATE_DIRECTORY_MISSING,
            f"Template directory {template_root} does not exist!",
            path=template_root,
        )

    return ResolvedPaths(project_root=project_root, template_root=template_root)


def resolve_domain(spec: ProjectSpec, template_root: Path) -> str:
    """Return the domain for *spec*.

    An explicit domain wins; otherwise the trimmed contents of the ``domain``
    file in the language's template subtree are used.

    Raises:
        GenError: ``DOMAIN_NOT_FOUND`` if there is no explicit domain and the
            default file is absent, unreadable or blank.
    """
    if spec.domain is not None:
        return spec.domain

    domain_file = Path(template_root) / DOMAIN_FILE
    try:
        domain = domain_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        raise GenError(
            ErrorKind.DOMAIN_NOT_FOUND,
            f"No domain given and could not read default domain file {domain_file}: {exc}",
            path=domain_file,
        ) from exc

    if not domain:
        raise GenError(
            ErrorKind.DOMAIN_NOT_FOUND,
            f"No domain given and default domain file {domain_file} is empty",
            path=domain_file,
        )
    return domain
