"""Tokenizer for the interface definition language.

Produces a flat token list with 1-indexed line/column positions. Newlines
are significant (they terminate imports and block members) and comments are
kept so the parser can attach them to the following item.
"""

import re
from dataclasses import dataclass

from idtool.errors import ParseError

_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"

_TOKEN_PATTERN = re.compile(
    rf"""
    (?P<COMMENT>//[^\n]*)
  | (?P<NEWLINE>\n)
  | (?P<SPACE>[ \t\r]+)
  | (?P<STRING>"(?:[^"\\\n]|\\.)*")
  | (?P<NAME>{_IDENT}(?:\.{_IDENT})*)
  | (?P<PUNCT>[{{}}\[\](),:])
  | (?P<MISMATCH>.)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str  # COMMENT, NEWLINE, STRING, NAME, PUNCT or EOF
    value: str
    line: int
    column: int

    def describe(self) -> str:
        if self.kind == "EOF":
            return "end of file"
        if self.kind == "NEWLINE":
            return "end of line"
        return repr(self.value)


def tokenize(text: str, file_path: str = "<input>") -> list[Token]:
    """Split spec-file text into tokens.

    Args:
        text: Decoded file contents
        file_path: Path used in error messages

    Returns:
        Tokens in source order, terminated by a single EOF token

    Raises:
        ParseError: On characters that cannot start any token
    """
    tokens = []
    line = 1
    line_start = 0

    for match in _TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup
        value = match.group()
        column = match.start() - line_start + 1

        if kind == "MISMATCH":
            if value == '"':
                raise ParseError("unterminated string literal", file_path, line, column)
            raise ParseError(f"unexpected character {value!r}", file_path, line, column)

        if kind == "COMMENT":
            value = value[2:].strip()
        elif kind == "STRING":
            value = value[1:-1]

        if kind != "SPACE":
            tokens.append(Token(kind, value, line, column))

        if kind == "NEWLINE":
            line += 1
            line_start = match.end()

    tokens.append(Token("EOF", "", line, len(text) - line_start + 1))
    return tokens
