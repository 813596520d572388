"""Canonical-form renderer for parsed modules."""

from idtool.dsl.ast import DEFAULT_INDENT, Module, comment_lines
from idtool.dsl.base import BaseRenderer
from idtool.errors import InternalError
from idtool.models import Entry


class DslRenderer(BaseRenderer):
    """Renders modules back to spec-file text.

    Canonical layout: imports first, one per line, then declarations
    separated by exactly one blank line, then any trailing comments. The
    output always ends with a single newline, except for an empty module.
    """

    def __init__(self, indent: int = DEFAULT_INDENT):
        self.indent = indent

    def render_text(self, module: Module) -> str:
        sections = []
        if module.imports:
            sections.append("\n".join(imp.render() for imp in module.imports))
        for decl in module.decls():
            sections.append(decl.canonical_text(self.indent))
        if module.trailing_comments:
            sections.append("\n".join(comment_lines(module.trailing_comments)))

        if not sections:
            return ""
        return "\n\n".join(sections) + "\n"

    def render(self, module: Module) -> bytes:
        return self.render_text(module).encode("utf-8")

    def render_entries(self, entries: list[Entry]) -> str:
        lines = []
        for entry in entries:
            if entry.kind == "decl":
                lines.append(entry.decl.canonical_text(self.indent))
            elif entry.kind == "empty":
                lines.append("")
            else:
                raise InternalError(f"unknown entry kind: {entry.kind!r}")
        return "".join(line + "\n" for line in lines)
