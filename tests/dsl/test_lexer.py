import pytest

from idtool.dsl.lexer import tokenize
from idtool.errors import ParseError


def _kinds(tokens):
    return [(t.kind, t.value) for t in tokens]


def test_tokenize_struct_header():
    tokens = tokenize("type Foo struct {")

    assert _kinds(tokens) == [
        ("NAME", "type"),
        ("NAME", "Foo"),
        ("NAME", "struct"),
        ("PUNCT", "{"),
        ("EOF", ""),
    ]


def test_tokenize_dotted_name_is_single_token():
    tokens = tokenize("abi.ChainEpoch")

    assert _kinds(tokens)[0] == ("NAME", "abi.ChainEpoch")


def test_tokenize_string_strips_quotes():
    tokens = tokenize('import abi "github.com/x/abi"')

    assert tokens[2].kind == "STRING"
    assert tokens[2].value == "github.com/x/abi"


def test_tokenize_comment_text_is_stripped():
    tokens = tokenize("//   hello world  \n")

    assert _kinds(tokens) == [("COMMENT", "hello world"), ("NEWLINE", "\n"), ("EOF", "")]


def test_tokenize_tracks_lines_and_columns():
    tokens = tokenize("type A int\n  type B int")

    second_type = [t for t in tokens if t.value == "type"][1]
    assert second_type.line == 2
    assert second_type.column == 3


def test_tokenize_map_and_list_punctuation():
    tokens = tokenize("{K: [V]}")

    assert [t.value for t in tokens[:-1]] == ["{", "K", ":", "[", "V", "]", "}"]


def test_tokenize_rejects_unknown_character():
    with pytest.raises(ParseError) as exc_info:
        tokenize("type A int\ntype B = int", "x.id")

    assert exc_info.value.line == 2
    assert exc_info.value.column == 8
    assert "unexpected character '='" in str(exc_info.value)
    assert str(exc_info.value).startswith("x.id:2:8:")


def test_tokenize_rejects_unterminated_string():
    with pytest.raises(ParseError) as exc_info:
        tokenize('import abi "oops\n')

    assert "unterminated string" in str(exc_info.value)
