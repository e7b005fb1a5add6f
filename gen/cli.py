"""Command-line entry point.

Usage::

    gen rust demo bin
    gen java demo lib --domain com.example
    gen --install-templates
    gen --list

This is the only module that turns a ``GenError`` into an exit status.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from gen import __version__
from gen.config import Config
from gen.errors import GenError
from gen.models import ProjectSpec
from gen.resolver import parse_kind, parse_language
from gen.scaffolder import ProjectGenerator
from gen.store import install_templates, template_status
from gen.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gen",
        description="gen -- create a new C, C++, Java, Rust or Go project from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  gen c hello\n"
            "  gen cpp engine lib\n"
            "  gen rs demo bin\n"
            "  gen java service --domain com.example\n"
            "  gen --install-templates\n"
        ),
    )
    parser.add_argument(
        "language",
        nargs="?",
        help="Project language: c, cpp|c++|cc, java, rust|rs, go",
    )
    parser.add_argument("name", nargs="?", help="Project (and directory) name")
    parser.add_argument(
        "kind",
        nargs="?",
        default=None,
        help="lib|library or bin|binary|exe|executable (default: executable)",
    )
    parser.add_argument(
        "--domain",
        default=None,
        help="Namespace for Java group ids / Go module paths (default: the template's domain file)",
    )
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Template root (default: $GEN_TEMPLATE_DIR or ~/.config/gen/templates)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory in which the project directory is created (default: .)",
    )
    parser.add_argument(
        "--install-templates",
        action="store_true",
        help="Copy the bundled templates into the template root and exit",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="With --install-templates, overwrite an existing template root",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Show which languages the template root provides and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _build_config(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    updates: dict[str, Path] = {}
    if args.template_dir:
        updates["template_root"] = Path(args.template_dir).expanduser()
    if args.output:
        updates["output_dir"] = Path(args.output).expanduser()
    return config.model_copy(update=updates) if updates else config


def _install(config: Config, force: bool) -> None:
    root = config.resolve_template_root()
    written = install_templates(root, overwrite=force)
    print_success(f"Installed {len(written)} template files into {root}")


def _list(config: Config) -> None:
    root = config.resolve_template_root()
    status = template_status(root)
    print_summary_table(
        {lang.value: ("present" if present else "missing") for lang, present in status.items()},
        title=f"Templates in {root}",
    )


def _generate(config: Config, args: argparse.Namespace) -> None:
    language = parse_language(args.language)
    spec = ProjectSpec(
        name=args.name,
        language=language,
        kind=parse_kind(args.kind),
        domain=args.domain,
    )
    generator = ProjectGenerator(spec, config)
    print_header(f"{spec.kind.display_name} {language.display_name} project: {spec.name}")

    try:
        result = generator.generate()
    except GenError:
        leftovers = generator.result.directories + generator.result.files
        if leftovers:
            print_warning("Generation stopped; these paths were already created:")
            for path in leftovers:
                console.print(f"  {path}", markup=False, highlight=False)
        raise

    if result.tool_failures:
        print_warning(
            f"{len(result.tool_failures)} toolchain command(s) failed; "
            "template files were generated anyway"
        )
    print_success(f"Created {result.project_root}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``gen`` and ``python -m gen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.install_templates or args.list) and not (args.language and args.name):
        parser.error("the following arguments are required: language, name")

    try:
        config = _build_config(args)
        if args.install_templates:
            _install(config, args.force)
        elif args.list:
            _list(config)
        else:
            _generate(config, args)
    except GenError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        print_error(f"Error: {messages}")
        sys.exit(1)
    except ValueError as exc:
        # Malformed GEN_* environment values.
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
