"""Tests for the command-line boundary (gen.cli).

Covers:
- Successful generation via positional arguments and options
- Exit status 1 with a diagnostic for every fatal error category
- Usage errors (exit status 2)
- --install-templates and --list
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gen.cli import build_parser, main

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GEN_TEMPLATE_DIR", "GEN_OUTPUT_DIR", "GEN_TOOL_TIMEOUT", "GEN_CARGO", "GEN_MVN"):
        monkeypatch.delenv(name, raising=False)


def _flags(template_root: Path, output_dir: Path) -> list[str]:
    return ["--template-dir", str(template_root), "--output", str(output_dir)]


def _output(capsys: pytest.CaptureFixture[str]) -> str:
    """Captured stdout with Rich's line wrapping collapsed."""
    return " ".join(capsys.readouterr().out.split())


class TestParser:
    def test_positionals(self):
        args = build_parser().parse_args(["c++", "demo", "lib", "--domain", "org.acme"])
        assert (args.language, args.name, args.kind, args.domain) == ("c++", "demo", "lib", "org.acme")

    def test_kind_optional(self):
        args = build_parser().parse_args(["rs", "demo"])
        assert args.kind is None


class TestGenerate:
    def test_rust_executable(self, template_root, output_dir, fake_tools, capsys):
        main(["rs", "demo", "bin", *_flags(template_root, output_dir)])

        root = output_dir / "demo"
        assert (root / "src" / "main.rs").is_file()
        assert (root / "src" / "lib.rs").read_bytes() == b""
        assert (root / "Makefile").is_file()
        out = _output(capsys)
        assert "Created file" in out
        assert "Executable Rust project: demo" in out

    def test_domain_option(self, template_root, output_dir, fake_tools):
        main(["java", "svc", "lib", "--domain", "org.acme", *_flags(template_root, output_dir)])
        assert "-DgroupId=org.acme.svc" in fake_tools.calls[0][1]

    def test_unknown_kind_defaults_to_executable(self, template_root, output_dir, fake_tools):
        main(["c", "demo", "plugin", *_flags(template_root, output_dir)])
        assert (output_dir / "demo" / "src" / "main.c").is_file()

    def test_tool_failure_is_reported_not_fatal(self, template_root, output_dir, fake_tools, capsys):
        fake_tools.failing.add("cargo")
        main(["rust", "demo", *_flags(template_root, output_dir)])
        assert "toolchain command(s) failed" in _output(capsys)
        assert (output_dir / "demo" / "Makefile").is_file()


class TestFatalErrors:
    def _exit_code(self, argv: list[str]) -> int:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        return exc_info.value.code

    def test_unknown_language(self, template_root, output_dir, capsys):
        assert self._exit_code(["fortran", "demo", *_flags(template_root, output_dir)]) == 1
        assert "Unknown language" in _output(capsys)
        assert list(output_dir.iterdir()) == []

    def test_existing_directory(self, template_root, output_dir, capsys):
        (output_dir / "demo").mkdir()
        assert self._exit_code(["c", "demo", *_flags(template_root, output_dir)]) == 1
        assert "Refusing to overwrite" in _output(capsys)

    def test_missing_template_directory(self, tmp_path, output_dir, capsys):
        argv = ["go", "demo", "--template-dir", str(tmp_path / "none"), "--output", str(output_dir)]
        assert self._exit_code(argv) == 1
        assert "does not exist" in _output(capsys)

    def test_missing_domain(self, template_root, output_dir, fake_tools, capsys):
        (template_root / "java" / "domain").unlink()
        assert self._exit_code(["java", "demo", *_flags(template_root, output_dir)]) == 1
        assert "domain" in _output(capsys)
        assert fake_tools.calls == []

    def test_invalid_name(self, template_root, output_dir, capsys):
        assert self._exit_code(["c", "..", *_flags(template_root, output_dir)]) == 1
        assert "not a valid directory name" in _output(capsys)

    def test_home_unset(self, output_dir, monkeypatch, capsys):
        monkeypatch.delenv("HOME", raising=False)
        assert self._exit_code(["c", "demo", "--output", str(output_dir)]) == 1
        assert "$HOME is not set" in _output(capsys)

    def test_partial_generation_lists_leftovers(self, template_root, output_dir, fake_tools, capsys):
        (template_root / "c" / "Makefile.lib").unlink()
        assert self._exit_code(["c", "demo", "lib", *_flags(template_root, output_dir)]) == 1
        out = _output(capsys)
        assert "already created" in out
        assert (output_dir / "demo" / ".gitignore").is_file()

    def test_template_expression_error_is_diagnosed(
        self, template_root, output_dir, fake_tools, capsys
    ):
        (template_root / "c" / "Makefile.bin").write_text("{{ context_version | first }}")
        assert self._exit_code(["c", "demo", *_flags(template_root, output_dir)]) == 1
        out = _output(capsys)
        assert "failed to render" in out
        assert "already created" in out

    def test_bad_timeout_env(self, template_root, output_dir, monkeypatch, capsys):
        monkeypatch.setenv("GEN_TOOL_TIMEOUT", "soon")
        assert self._exit_code(["c", "demo", *_flags(template_root, output_dir)]) == 1
        assert "invalid configuration" in _output(capsys)

    def test_missing_positionals_is_usage_error(self):
        assert self._exit_code(["c"]) == 2


class TestTemplateCommands:
    def test_install_templates(self, tmp_path, capsys):
        dest = tmp_path / "tpl"
        main(["--install-templates", "--template-dir", str(dest)])
        assert (dest / "rust" / "src" / "main.rs").is_file()
        assert "Installed" in _output(capsys)

    def test_install_refuses_then_forces(self, tmp_path):
        dest = tmp_path / "tpl"
        main(["--install-templates", "--template-dir", str(dest)])
        (dest / "c" / "Makefile.bin").write_text("edited")

        with pytest.raises(SystemExit) as exc_info:
            main(["--install-templates", "--template-dir", str(dest)])
        assert exc_info.value.code == 1
        assert (dest / "c" / "Makefile.bin").read_text() == "edited"

        main(["--install-templates", "--force", "--template-dir", str(dest)])
        assert (dest / "c" / "Makefile.bin").read_text() != "edited"

    def test_install_into_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        main(["--install-templates"])
        assert (tmp_path / ".config" / "gen" / "templates" / "java" / "manifest.txt").is_file()

    def test_list(self, tmp_path, capsys):
        (tmp_path / "rust").mkdir()
        main(["--list", "--template-dir", str(tmp_path)])
        out = _output(capsys)
        assert "present" in out
        assert "missing" in out
