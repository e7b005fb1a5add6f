"""Shared pytest fixtures for the gen test suite.

Provides reusable fixtures for:
- A writable copy of the bundled template tree
- An empty output directory and a matching ``Config``
- A fake toolchain standing in for cargo, mvn, go and clang-format
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from gen.config import Config
from gen.store import BUNDLED_TEMPLATE_DIR
from gen.toolchain import CapturedOutput

CLANG_FORMAT_DUMP = b"---\nLanguage: Cpp\nBasedOnStyle: Google\nIndentWidth: 4\n...\n"


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A private copy of the bundled templates that tests may modify."""
    root = tmp_path / "templates"
    shutil.copytree(BUNDLED_TEMPLATE_DIR, root)
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty directory in which projects are generated."""
    out = tmp_path / "work"
    out.mkdir()
    return out


@pytest.fixture
def config(template_root: Path, output_dir: Path) -> Config:
    return Config(template_root=template_root, output_dir=output_dir)


# ---------------------------------------------------------------------------
# Fake toolchain
# ---------------------------------------------------------------------------

class FakeToolchain:
    """Drop-in replacement for ``gen.toolchain.invoke``.

    Mimics the file-system side effects of ``cargo new``,
    ``mvn archetype:generate``, ``go mod init`` and
    ``clang-format --dump-config``.  Tools named in ``failing`` exit with
    status 1 and do nothing.
    """

    clang_format_dump = CLANG_FORMAT_DUMP

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], Path | None]] = []
        self.failing: set[str] = set()

    def tools_called(self) -> list[str]:
        return [tool for tool, _, _ in self.calls]

    def __call__(
        self,
        tool: str,
        args: list[str],
        working_dir: str | Path | None = None,
        timeout: float | None = None,
    ) -> CapturedOutput:
        cwd = Path(working_dir) if working_dir is not None else None
        self.calls.append((tool, list(args), cwd))
        cmd = [tool, *args]

        if tool in self.failing:
            return CapturedOutput(cmd, 1, b"", f"{tool}: simulated failure\n".encode(), cwd=cwd)

        if tool == "cargo":
            return self._cargo_new(cmd, args, cwd)
        if tool == "mvn":
            return self._mvn_archetype(cmd, args, cwd)
        if tool == "go":
            module = args[2]
            (cwd / "go.mod").write_text(f"module {module}\n\ngo 1.22\n", encoding="utf-8")
            return CapturedOutput(cmd, 0, b"", f"go: creating new go.mod: module {module}\n".encode(), cwd=cwd)
        if tool == "clang-format":
            return CapturedOutput(cmd, 0, CLANG_FORMAT_DUMP, b"", cwd=cwd)
        return CapturedOutput(cmd, None, error=f"could not start {tool!r}", cwd=cwd)

    @staticmethod
    def _cargo_new(cmd: list[str], args: list[str], cwd: Path) -> CapturedOutput:
        name = args[1]
        src = cwd / name / "src"
        src.mkdir(parents=True)
        (cwd / name / "Cargo.toml").write_text(
            f'[package]\nname = "{name}"\nversion = "0.1.0"\n', encoding="utf-8"
        )
        if "--lib" in args:
            (src / "lib.rs").write_text("pub fn add(a: u64, b: u64) -> u64 { a + b }\n")
        else:
            (src / "main.rs").write_text('fn main() { println!("from cargo"); }\n')
        return CapturedOutput(cmd, 0, b"", f"    Creating `{name}` package\n".encode(), cwd=cwd)

    @staticmethod
    def _mvn_archetype(cmd: list[str], args: list[str], cwd: Path) -> CapturedOutput:
        group = next(a.split("=", 1)[1] for a in args if a.startswith("-DgroupId="))
        artifact = next(a.split("=", 1)[1] for a in args if a.startswith("-DartifactId="))
        root = cwd / artifact
        package_dir = root / "src" / "main" / "java" / Path(*group.split("."))
        package_dir.mkdir(parents=True)
        (root / "pom.xml").write_text(f"<project><groupId>{group}</groupId></project>\n")
        (package_dir / "App.java").write_text(f"package {group};\npublic class App {{}}\n")
        return CapturedOutput(cmd, 0, b"[INFO] BUILD SUCCESS\n", b"", cwd=cwd)


@pytest.fixture
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeToolchain:
    """Replace toolchain invocation in the generator with ``FakeToolchain``."""
    fake = FakeToolchain()
    monkeypatch.setattr("gen.scaffolder.generator.invoke", fake)
    return fake
