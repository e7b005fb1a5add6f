"""Scaffolder configuration.

Typed settings for where templates live, where projects are written, and
which toolchain binaries to run.  Uses Pydantic v2 models so values are
validated at construction time and can be built from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from gen.errors import ErrorKind, GenError

# Relative to $HOME when no template root is configured.
DEFAULT_TEMPLATE_SUBDIR = Path(".config") / "gen" / "templates"

DEFAULT_CLANG_FORMAT_STYLE = "{BasedOnStyle: Google, IndentWidth: 4}"


class ToolConfig(BaseModel):
    """Executable names for the external toolchains."""

    cargo: str = Field(default="cargo")
    go: str = Field(default="go")
    mvn: str = Field(default="mvn")
    clang_format: str = Field(default="clang-format")


class Config(BaseModel):
    """Global scaffolder configuration.

    Created once by the CLI (usually through :meth:`from_env`) and handed to
    the generator.
    """

    template_root: Path | None = Field(
        default=None,
        description="Template store root; defaults to $HOME/.config/gen/templates",
    )
    output_dir: Path = Field(default=Path("."))
    tool_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before an external tool is killed; None waits forever",
    )
    clang_format_style: str = Field(default=DEFAULT_CLANG_FORMAT_STYLE)
    tools: ToolConfig = Field(default_factory=ToolConfig)

    def resolve_template_root(self) -> Path:
        """Return the template store root.

        Raises:
            GenError: ``TEMPLATE_DIRECTORY_MISSING`` when no root is configured
                and ``$HOME`` is unset.
        """
        if self.template_root is not None:
            return self.template_root
        home = os.environ.get("HOME")
        if not home:
            raise GenError(
                ErrorKind.TEMPLATE_DIRECTORY_MISSING,
                "Could not locate the template directory: $HOME is not set "
                "(pass --template-dir or set GEN_TEMPLATE_DIR)",
            )
        return Path(home) / DEFAULT_TEMPLATE_SUBDIR

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GEN_TEMPLATE_DIR, GEN_OUTPUT_DIR, GEN_TOOL_TIMEOUT,
            GEN_CLANG_FORMAT_STYLE, GEN_CARGO, GEN_GO, GEN_MVN,
            GEN_CLANG_FORMAT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GEN_TEMPLATE_DIR"):
            kwargs["template_root"] = Path(os.environ["GEN_TEMPLATE_DIR"])
        if os.environ.get("GEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["GEN_OUTPUT_DIR"])
        if os.environ.get("GEN_TOOL_TIMEOUT"):
            kwargs["tool_timeout"] = float(os.environ["GEN_TOOL_TIMEOUT"])
        if os.environ.get("GEN_CLANG_FORMAT_STYLE"):
            kwargs["clang_format_style"] = os.environ["GEN_CLANG_FORMAT_STYLE"]

        tool_kwargs: dict[str, Any] = {}
        for field_name, env_name in (
            ("cargo", "GEN_CARGO"),
            ("go", "GEN_GO"),
            ("mvn", "GEN_MVN"),
            ("clang_format", "GEN_CLANG_FORMAT"),
        ):
            if os.environ.get(env_name):
                tool_kwargs[field_name] = os.environ[env_name]

        return cls(tools=ToolConfig(**tool_kwargs), **kwargs)
