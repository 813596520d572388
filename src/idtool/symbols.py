"""Extraction of named declarations from a spec file."""

from collections.abc import Sequence
from pathlib import Path

from idtool.dsl import Toolchain, get_toolchain, parse_module_from_file
from idtool.dsl.ast import Decl, Module
from idtool.errors import SymbolNotFoundError
from idtool.models import Entry


def build_symbol_table(module: Module) -> dict[str, Decl]:
    """Map declaration names to declarations.

    When a name is declared more than once, the last declaration wins.
    """
    table = {}
    for decl in module.decls():
        table[decl.name] = decl
    return table


def select_entries(module: Module, symbols: Sequence[str]) -> list[Entry]:
    """Resolve requested symbols into printable entries.

    Entries follow request order, with one blank separator between
    consecutive symbols. Repeated requests are repeated in the output.

    Raises:
        SymbolNotFoundError: For the first requested symbol that is not
            declared; no entries are returned in that case
    """
    table = build_symbol_table(module)
    entries = []
    for i, symbol in enumerate(symbols):
        decl = table.get(symbol)
        if decl is None:
            raise SymbolNotFoundError(symbol, module.file_path)
        if i > 0:
            entries.append(Entry.empty())
        entries.append(Entry.of(decl))
    return entries


def print_symbols(file_path: Path, symbols: Sequence[str], toolchain: Toolchain | None = None) -> str:
    """Return the canonical text of the requested declarations of a file."""
    if toolchain is None:
        toolchain = get_toolchain()

    module = parse_module_from_file(file_path, toolchain.parser)
    return toolchain.renderer.render_entries(select_entries(module, symbols))
