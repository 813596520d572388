"""Tests for symbol extraction."""

import pytest

from idtool.dsl.parser import DslParser
from idtool.errors import ParseError, SymbolNotFoundError
from idtool.models import Entry
from idtool.symbols import build_symbol_table, print_symbols, select_entries

SOURCE = """type A struct {
    x int
}

// The B type.
type B string
"""


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "ab.id"
    path.write_text(SOURCE)
    return path


class TestBuildSymbolTable:
    """Tests for build_symbol_table."""

    def test_maps_names_to_declarations(self):
        module = DslParser().parse(SOURCE.encode())
        table = build_symbol_table(module)

        assert list(table) == ["A", "B"]
        assert table["B"].kind == "alias"

    def test_last_declaration_wins(self):
        module = DslParser().parse(b"type A int\ntype A string\n")
        table = build_symbol_table(module)

        assert table["A"].target.name == "string"


class TestSelectEntries:
    """Tests for select_entries."""

    def test_separators_between_symbols_only(self):
        module = DslParser().parse(SOURCE.encode())
        a, b = module.decls()

        entries = select_entries(module, ["B", "A"])

        assert entries == [Entry.of(b), Entry.empty(), Entry.of(a)]

    def test_single_symbol_has_no_separator(self):
        module = DslParser().parse(SOURCE.encode())

        assert [e.kind for e in select_entries(module, ["A"])] == ["decl"]

    def test_repeated_symbols_are_repeated(self):
        module = DslParser().parse(SOURCE.encode())

        entries = select_entries(module, ["A", "A"])

        assert [e.kind for e in entries] == ["decl", "empty", "decl"]

    def test_missing_symbol_raises(self):
        module = DslParser().parse(SOURCE.encode(), "ab.id")

        with pytest.raises(SymbolNotFoundError) as exc_info:
            select_entries(module, ["A", "MISSING", "B"])

        assert exc_info.value.symbol == "MISSING"
        assert "symbol not found: MISSING" in str(exc_info.value)
        assert isinstance(exc_info.value, LookupError)


class TestPrintSymbols:
    """Tests for print_symbols."""

    def test_request_order_not_declaration_order(self, spec_file):
        module = DslParser().parse(spec_file.read_bytes())
        a, b = module.decls()

        output = print_symbols(spec_file, ["B", "A"])

        assert output == b.canonical_text() + "\n\n" + a.canonical_text() + "\n"
        assert output == "// The B type.\ntype B string\n\ntype A struct {\n    x int\n}\n"

    def test_missing_symbol_produces_no_output(self, spec_file):
        with pytest.raises(SymbolNotFoundError) as exc_info:
            print_symbols(spec_file, ["A", "MISSING"])

        assert "MISSING" in str(exc_info.value)

    def test_duplicate_declaration_prints_last(self, tmp_path):
        path = tmp_path / "dup.id"
        path.write_text("type A int\n\ntype A string\n")

        assert print_symbols(path, ["A"]) == "type A string\n"

    def test_parse_error_propagates(self, tmp_path):
        path = tmp_path / "bad.id"
        path.write_text("type\n")

        with pytest.raises(ParseError):
            print_symbols(path, ["A"])
