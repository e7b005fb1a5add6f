"""Error taxonomy for the scaffolder.

Every failure raised by the lower layers is a ``GenError`` carrying an
``ErrorKind``.  Nothing below the CLI calls ``sys.exit``; the CLI is the only
place that turns an error into an exit status and a printed diagnostic.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    UNKNOWN_LANGUAGE = "unknown_language"
    ALREADY_EXISTS = "already_exists"
    TEMPLATE_DIRECTORY_MISSING = "template_directory_missing"
    DOMAIN_NOT_FOUND = "domain_not_found"
    TEMPLATE_MISSING = "template_missing"
    TEMPLATE_SYNTAX = "template_syntax"
    IO = "io"
    # Reported for failed toolchain runs, never raised.
    EXTERNAL_TOOL_FAILURE = "external_tool_failure"


class GenError(Exception):
    """Raised when a scaffolding step fails.

    Attributes:
        kind: The failure category.
        path: The file or directory involved, when there is one.
    """

    def __init__(self, kind: ErrorKind, message: str, path: str | Path | None = None) -> None:
        self.kind = kind
        self.path = Path(path) if path is not None else None
        super().__init__(message)

    def __repr__(self) -> str:
        return f"GenError({self.kind.value}, {str(self)!r})"
