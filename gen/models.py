"""Data model for project generation.

``Language`` and ``ProjectKind`` are closed enumerations; everything that
varies per language (template subtree, ``src/`` usage, which tool owns the
project root) is looked up from ``LANGUAGE_TRAITS`` rather than compared as
strings.  ``ProjectSpec`` is the immutable request, and ``ResolvedPaths`` the
validated paths derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Bump when a key is added, renamed or removed from the template context.
TEMPLATE_CONTEXT_VERSION = 1


class Language(str, Enum):
    """Supported source languages."""

    C = "c"
    CPP = "cpp"
    JAVA = "java"
    RUST = "rust"
    GO = "go"

    @property
    def traits(self) -> LanguageTraits:
        return LANGUAGE_TRAITS[self]

    @property
    def display_name(self) -> str:
        return self.traits.display_name


class ProjectKind(str, Enum):
    """Library or executable project."""

    LIBRARY = "lib"
    EXECUTABLE = "bin"

    @property
    def display_name(self) -> str:
        return "Library" if self is ProjectKind.LIBRARY else "Executable"


@dataclass(frozen=True)
class LanguageTraits:
    """Static per-language facts used by the generator."""

    display_name: str
    subtree: str
    extension: str
    uses_src_dir: bool
    tool_creates_root: bool
    requires_domain: bool

    @property
    def entry_point(self) -> str:
        """Template-relative path of the entry-point stub."""
        stub = f"main.{self.extension}"
        return f"src/{stub}" if self.uses_src_dir else stub


LANGUAGE_TRAITS: dict[Language, LanguageTraits] = {
    Language.C: LanguageTraits("C", "c", "c", True, False, False),
    Language.CPP: LanguageTraits("Cpp", "cpp", "cpp", True, False, False),
    Language.JAVA: LanguageTraits("Java", "java", "java", False, True, True),
    Language.RUST: LanguageTraits("Rust", "rust", "rs", True, True, False),
    Language.GO: LanguageTraits("Go", "go", "go", False, False, True),
}


class ProjectSpec(BaseModel):
    """The project to generate.  Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project directory name (a single path segment)")
    language: Language
    kind: ProjectKind = ProjectKind.EXECUTABLE
    domain: str | None = Field(
        default=None,
        description="Reverse-domain namespace (Java group id / Go module prefix)",
    )

    @field_validator("name")
    @classmethod
    def _single_path_segment(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("project name must not be empty")
        if value in (".", ".."):
            raise ValueError(f"project name {value!r} is not a valid directory name")
        if any(ch in value for ch in ("/", "\\", "\0")):
            raise ValueError(f"project name {value!r} must be a single path segment")
        return value

    @property
    def is_executable(self) -> bool:
        return self.kind is ProjectKind.EXECUTABLE

    def template_context(self, domain: str | None = None) -> dict[str, Any]:
        """Return the mapping exposed to templates.

        Args:
            domain: The resolved domain.  Falls back to the explicit
                ``domain`` on the spec, then to an empty string.
        """
        return {
            "context_version": TEMPLATE_CONTEXT_VERSION,
            "name": self.name,
            "lang": self.language.display_name,
            "language": self.language.value,
            "kind": self.kind.display_name,
            "kind_tag": self.kind.value,
            "domain": domain if domain is not None else (self.domain or ""),
        }


class ResolvedPaths(BaseModel):
    """Paths derived from a ``ProjectSpec``; validated before any mutation."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    template_root: Path
