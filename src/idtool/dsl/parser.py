"""Recursive-descent parser for spec files."""

from idtool.dsl.ast import (
    Decl,
    Field,
    Import,
    ListType,
    MapType,
    Member,
    Method,
    Module,
    NamedType,
    Param,
    TypeRef,
)
from idtool.dsl.base import BaseParser
from idtool.dsl.lexer import Token, tokenize
from idtool.errors import ParseError

BLOCK_KINDS = ("struct", "union")


class DslParser(BaseParser):
    """Parser for the interface definition language."""

    def parse(self, source: bytes, file_path: str = "<input>") -> Module:
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"invalid UTF-8 ({e.reason})", file_path, 1, 1) from e

        return _Parser(tokenize(text, file_path), file_path).parse_module()


class _Parser:
    def __init__(self, tokens: list[Token], file_path: str):
        self.tokens = tokens
        self.pos = 0
        self.file_path = file_path

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != "EOF":
            self.pos += 1
        return token

    def at(self, kind: str, value: str | None = None) -> bool:
        token = self.peek()
        return token.kind == kind and (value is None or token.value == value)

    def error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, self.file_path, token.line, token.column)

    def expect(self, kind: str, value: str | None = None) -> Token:
        if not self.at(kind, value):
            wanted = repr(value) if value is not None else kind.lower()
            raise self.error(f"expected {wanted}, found {self.peek().describe()}", self.peek())
        return self.advance()

    def expect_ident(self, what: str) -> str:
        token = self.peek()
        if token.kind != "NAME" or "." in token.value:
            raise self.error(f"expected {what}, found {token.describe()}", token)
        return self.advance().value

    def skip_blank(self) -> list[str]:
        """Skip newlines and comments, returning the comment texts."""
        comments = []
        while True:
            if self.at("NEWLINE"):
                self.advance()
            elif self.at("COMMENT"):
                comments.append(self.advance().value)
            else:
                return comments

    def end_of_item(self) -> list[str]:
        """Consume the end of an import or member line.

        A same-line comment is returned so it can be attached to the item.
        A closing brace ends the item without being consumed.
        """
        comments = []
        if self.at("COMMENT"):
            comments.append(self.advance().value)
        if self.at("NEWLINE"):
            self.advance()
        elif not (self.at("EOF") or self.at("PUNCT", "}")):
            raise self.error(f"expected end of line, found {self.peek().describe()}", self.peek())
        return comments

    def parse_module(self) -> Module:
        imports = []
        decls = []
        while True:
            comments = self.skip_blank()
            token = self.peek()
            if token.kind == "EOF":
                return Module(
                    imports=tuple(imports),
                    declarations=tuple(decls),
                    trailing_comments=tuple(comments),
                    file_path=self.file_path,
                )
            if self.at("NAME", "import"):
                imports.append(self.parse_import(comments))
            elif self.at("NAME", "type"):
                decls.append(self.parse_decl(comments))
            else:
                raise self.error(f"expected 'import' or 'type', found {token.describe()}", token)

    def parse_import(self, comments: list[str]) -> Import:
        self.expect("NAME", "import")
        alias = self.expect_ident("import name")
        path = self.expect("STRING").value
        comments += self.end_of_item()
        return Import(alias=alias, path=path, comments=tuple(comments))

    def parse_decl(self, comments: list[str]) -> Decl:
        self.expect("NAME", "type")
        name = self.expect_ident("type name")

        token = self.peek()
        if token.kind == "NAME" and token.value in BLOCK_KINDS:
            kind = self.advance().value
            members, trailing = self.parse_block()
            comments += self.end_of_item()
            return Decl(
                name=name,
                kind=kind,
                members=tuple(members),
                comments=tuple(comments),
                trailing_comments=tuple(trailing),
            )

        target = self.parse_type()
        comments += self.end_of_item()
        return Decl(name=name, kind="alias", target=target, comments=tuple(comments))

    def parse_block(self) -> tuple[list[Member], list[str]]:
        self.expect("PUNCT", "{")
        members = []
        while True:
            comments = self.skip_blank()
            if self.at("PUNCT", "}"):
                self.advance()
                return members, comments
            if self.at("EOF"):
                raise self.error("unterminated block, expected '}'", self.peek())
            members.append(self.parse_member(comments))

    def parse_member(self, comments: list[str]) -> Member:
        name = self.expect_ident("member name")

        if self.at("PUNCT", "("):
            params = self.parse_params()
            ret_type = None
            if not (self.at("NEWLINE") or self.at("COMMENT") or self.at("EOF") or self.at("PUNCT", "}")):
                ret_type = self.parse_type()
            comments += self.end_of_item()
            return Method(name=name, params=tuple(params), ret_type=ret_type, comments=tuple(comments))

        field_type = self.parse_type()
        comments += self.end_of_item()
        return Field(name=name, type=field_type, comments=tuple(comments))

    def parse_params(self) -> list[Param]:
        self.expect("PUNCT", "(")
        params = []
        if self.at("PUNCT", ")"):
            self.advance()
            return params

        while True:
            name = self.expect_ident("parameter name")
            params.append(Param(name=name, type=self.parse_type()))
            if self.at("PUNCT", ","):
                self.advance()
                continue
            self.expect("PUNCT", ")")
            return params

    def parse_type(self) -> TypeRef:
        token = self.peek()
        if token.kind == "NAME":
            return NamedType(self.advance().value)

        if self.at("PUNCT", "["):
            self.advance()
            elem = self.parse_type()
            self.expect("PUNCT", "]")
            return ListType(elem)

        if self.at("PUNCT", "{"):
            self.advance()
            key = self.parse_type()
            self.expect("PUNCT", ":")
            value = self.parse_type()
            self.expect("PUNCT", "}")
            return MapType(key, value)

        raise self.error(f"expected type, found {token.describe()}", token)
