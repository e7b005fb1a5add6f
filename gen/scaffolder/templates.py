"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads templates from one language's
template subtree and either renders them with the project context or copies
them verbatim.  Templates are logic-less: they may reference context fields
(optionally through Jinja2's built-in filters) but any statement tag such as
``{% if %}`` or ``{% for %}`` is rejected.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    nodes,
)

from gen.errors import ErrorKind, GenError


class TemplateRenderer:
    """Renders and copies template artifacts for one language.

    Template names are paths relative to *template_dir* (e.g.
    ``"src/main.cpp"`` or ``"Makefile.bin"``).  Output paths are written as
    given; parent directories must already exist.
    """

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    # -- Rendering ---------------------------------------------------------

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Raises:
            GenError: ``TEMPLATE_MISSING`` if the template does not exist,
                ``TEMPLATE_SYNTAX`` for malformed markup, statement tags or
                references to fields missing from *context*, and for any
                error raised while evaluating an expression (a filter applied
                to the wrong type, bad filter arguments, arithmetic errors).
        """
        template = self._load(template_name)
        path = self.template_dir / template_name
        try:
            return template.render(**context)
        except UndefinedError as exc:
            raise GenError(
                ErrorKind.TEMPLATE_SYNTAX,
                f"Template {template_name} references an unknown field: {exc}",
                path=path,
            ) from exc
        except Exception as exc:
            # Templates are user-maintained; expression errors surface here.
            raise GenError(
                ErrorKind.TEMPLATE_SYNTAX,
                f"Template {template_name} failed to render: "
                f"{type(exc).__name__}: {exc}",
                path=path,
            ) from exc

    def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *template_name* and write the result to *output_path*.

        Any existing file at *output_path* is overwritten.
        """
        content = self.render(template_name, context)
        out = Path(output_path)
        try:
            out.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise GenError(ErrorKind.IO, f"Could not write {out}: {exc}", path=out) from exc
        return out

    # -- Static artifacts --------------------------------------------------

    def copy(self, template_name: str, output_path: str | Path) -> Path:
        """Copy *template_name* byte-for-byte to *output_path*."""
        source = self.template_dir / template_name
        out = Path(output_path)
        if not source.is_file():
            raise GenError(
                ErrorKind.TEMPLATE_MISSING,
                f"Template file {source} does not exist",
                path=source,
            )
        try:
            shutil.copyfile(source, out)
        except OSError as exc:
            raise GenError(
                ErrorKind.IO, f"Could not copy {source} to {out}: {exc}", path=out
            ) from exc
        return out

    @staticmethod
    def touch(output_path: str | Path) -> Path:
        """Create *output_path* as an empty file, truncating any existing content."""
        out = Path(output_path)
        try:
            out.write_bytes(b"")
        except OSError as exc:
            raise GenError(ErrorKind.IO, f"Could not create {out}: {exc}", path=out) from exc
        return out

    # -- Utility -----------------------------------------------------------

    def _load(self, template_name: str) -> Template:
        path = self.template_dir / template_name
        try:
            source, filename, _ = self.env.loader.get_source(self.env, template_name)
        except TemplateNotFound as exc:
            raise GenError(
                ErrorKind.TEMPLATE_MISSING,
                f"Template file {path} does not exist",
                path=path,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise GenError(ErrorKind.IO, f"Could not read template {path}: {exc}", path=path) from exc

        try:
            ast = self.env.parse(source, template_name, filename)
            _reject_statements(ast, template_name)
            return self.env.from_string(ast)
        except TemplateSyntaxError as exc:
            raise GenError(
                ErrorKind.TEMPLATE_SYNTAX,
                f"Malformed template {path}: {exc}",
                path=path,
            ) from exc


def _reject_statements(ast: nodes.Template, template_name: str) -> None:
    """Raise ``TemplateSyntaxError`` on the first statement tag in *ast*."""
    for node in ast.find_all(nodes.Stmt):
        if isinstance(node, nodes.Output):
            continue
        tag = type(node).__name__.lower()
        raise TemplateSyntaxError(
            f"control-flow tag '{tag}' is not allowed, templates may only reference fields",
            node.lineno,
            name=template_name,
        )

