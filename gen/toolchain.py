"""External toolchain invocation.

Runs the native project-initialisation commands (``cargo new``,
``go mod init``, ``mvn archetype:generate``, ``clang-format``) and captures
their output.  Invocation is best-effort: a missing binary, a non-zero exit
or a timeout is recorded in the returned ``CapturedOutput`` instead of being
raised, and the caller decides how to report it.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from gen.models import ProjectKind


@dataclass
class CapturedOutput:
    """Result of one external tool run.

    ``returncode`` is ``None`` when the process could not be started or was
    killed after a timeout; ``error`` then holds the reason.
    """

    command: list[str]
    returncode: int | None
    stdout: bytes = b""
    stderr: bytes = b""
    error: str | None = None
    cwd: Path | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)

    def describe(self) -> str:
        """One-line summary of how the run ended, and where it ran."""
        outcome = self.error if self.error is not None else f"exited with status {self.returncode}"
        if self.cwd is not None:
            return f"{self.command_line} (in {self.cwd}): {outcome}"
        return f"{self.command_line}: {outcome}"


def invoke(
    tool: str,
    args: list[str],
    working_dir: str | Path | None = None,
    timeout: float | None = None,
) -> CapturedOutput:
    """Run *tool* with *args* and capture stdout/stderr as bytes.

    Blocks until the process exits.  With ``timeout=None`` there is no upper
    bound, so a hung tool hangs the caller.

    Args:
        tool: Executable name or path.
        args: Arguments passed after the executable.
        working_dir: Working directory for the child process.
        timeout: Optional wall-clock limit in seconds.

    Returns:
        A ``CapturedOutput``; never raises for launch failures or non-zero
        exits.
    """
    cmd = [tool, *args]
    cwd = Path(working_dir) if working_dir is not None else None

    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        return CapturedOutput(
            command=cmd,
            returncode=None,
            stdout=exc.stdout or b"",
            stderr=exc.stderr or b"",
            error=f"timed out after {timeout}s",
            cwd=cwd,
        )
    except OSError as exc:
        return CapturedOutput(
            command=cmd,
            returncode=None,
            error=f"could not start {tool!r}: {exc}",
            cwd=cwd,
        )

    return CapturedOutput(
        command=cmd,
        returncode=completed.returncode,
        stdout=completed.stdout or b"",
        stderr=completed.stderr or b"",
        cwd=cwd,
    )


# ---------------------------------------------------------------------------
# Command builders
# ---------------------------------------------------------------------------


def cargo_new_args(name: str, kind: ProjectKind) -> list[str]:
    """Arguments for ``cargo new`` selecting the library or binary layout."""
    flag = "--lib" if kind is ProjectKind.LIBRARY else "--bin"
    return ["new", name, flag]


def go_mod_init_args(domain: str, name: str) -> list[str]:
    """Arguments for ``go mod init <domain>/<name>``."""
    return ["mod", "init", f"{domain}/{name}"]


def mvn_archetype_args(domain: str, name: str) -> list[str]:
    """Arguments for a non-interactive quickstart ``mvn archetype:generate``."""
    return [
        "archetype:generate",
        f"-DgroupId={domain}.{name}",
        f"-DartifactId={name}",
        "-DarchetypeArtifactId=maven-archetype-quickstart",
        "-DinteractiveMode=false",
    ]


def clang_format_dump_args(style: str) -> list[str]:
    """Arguments for ``clang-format -style=<style> --dump-config``."""
    return [f"-style={style}", "--dump-config"]
