"""Immutable syntax tree for parsed spec files."""

from dataclasses import dataclass, field

from idtool.models import MethodPrototype

DEFAULT_INDENT = 4


@dataclass(frozen=True)
class NamedType:
    """Reference to a builtin, local (`Foo`) or imported (`abi.Foo`) type."""
    name: str

    def render(self) -> str:
        return self.name

    def qualified(self, package: str, local_names: frozenset[str]) -> str:
        if self.name in local_names:
            return f"{package}.{self.name}"
        return self.name


@dataclass(frozen=True)
class ListType:
    """Ordered sequence type, written `[T]`."""
    elem: "TypeRef"

    def render(self) -> str:
        return f"[{self.elem.render()}]"

    def qualified(self, package: str, local_names: frozenset[str]) -> str:
        return f"[{self.elem.qualified(package, local_names)}]"


@dataclass(frozen=True)
class MapType:
    """Associative type, written `{K: V}`."""
    key: "TypeRef"
    value: "TypeRef"

    def render(self) -> str:
        return f"{{{self.key.render()}: {self.value.render()}}}"

    def qualified(self, package: str, local_names: frozenset[str]) -> str:
        key = self.key.qualified(package, local_names)
        value = self.value.qualified(package, local_names)
        return f"{{{key}: {value}}}"


TypeRef = NamedType | ListType | MapType


@dataclass(frozen=True)
class Param:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class Field:
    """A data member of a struct or a variant of a union."""
    name: str
    type: TypeRef
    comments: tuple[str, ...] = ()

    def render(self) -> str:
        return f"{self.name} {self.type.render()}"


@dataclass(frozen=True)
class Method:
    """A method declared inside a struct or union block."""
    name: str
    params: tuple[Param, ...] = ()
    ret_type: TypeRef | None = None
    comments: tuple[str, ...] = ()

    def render(self) -> str:
        params = ", ".join(f"{p.name} {p.type.render()}" for p in self.params)
        text = f"{self.name}({params})"
        if self.ret_type is not None:
            text += f" {self.ret_type.render()}"
        return text


Member = Field | Method


def comment_lines(comments: tuple[str, ...], prefix: str = "") -> list[str]:
    return [f"{prefix}// {c}" if c else f"{prefix}//" for c in comments]


@dataclass(frozen=True)
class Import:
    alias: str
    path: str  # Text between the quotes, escapes kept verbatim
    comments: tuple[str, ...] = ()

    def render(self) -> str:
        lines = comment_lines(self.comments)
        lines.append(f'import {self.alias} "{self.path}"')
        return "\n".join(lines)


@dataclass(frozen=True)
class Decl:
    """A named top-level declaration.

    Attributes:
        name: Declared type name, the lookup key for symbol extraction
        kind: "struct", "union" or "alias"
        members: Fields and methods in declaration order (struct/union only)
        target: Aliased type (alias only)
        comments: Line comments preceding the declaration
        trailing_comments: Comments before the closing brace of the block
    """
    name: str
    kind: str
    members: tuple[Member, ...] = ()
    target: TypeRef | None = None
    comments: tuple[str, ...] = ()
    trailing_comments: tuple[str, ...] = ()

    @property
    def fields(self) -> list[Field]:
        return [m for m in self.members if isinstance(m, Field)]

    @property
    def methods(self) -> list[Method]:
        return [m for m in self.members if isinstance(m, Method)]

    def canonical_text(self, indent: int = DEFAULT_INDENT) -> str:
        """Render the declaration in canonical form, without a final newline."""
        lines = comment_lines(self.comments)
        if self.kind == "alias":
            lines.append(f"type {self.name} {self.target.render()}")
            return "\n".join(lines)

        if not self.members and not self.trailing_comments:
            lines.append(f"type {self.name} {self.kind} {{}}")
            return "\n".join(lines)

        pad = " " * indent
        lines.append(f"type {self.name} {self.kind} {{")
        for member in self.members:
            lines.extend(comment_lines(member.comments, pad))
            lines.append(pad + member.render())
        lines.extend(comment_lines(self.trailing_comments, pad))
        lines.append("}")
        return "\n".join(lines)


@dataclass(frozen=True)
class Module:
    """Parsed representation of exactly one spec file."""
    imports: tuple[Import, ...] = ()
    declarations: tuple[Decl, ...] = ()
    trailing_comments: tuple[str, ...] = ()
    file_path: str = field(default="<input>", compare=False)

    def decls(self) -> tuple[Decl, ...]:
        return self.declarations

    def method_prototypes(self, package: str) -> list[MethodPrototype]:
        """Extract prototypes of every top-level struct/union method.

        Type names declared in this module are qualified with `package`;
        builtins and imported names are reported as written.

        Args:
            package: Package name the module's own types live in

        Returns:
            Prototypes in declaration order, methods in block order
        """
        local_names = frozenset(d.name for d in self.declarations)
        prototypes = []
        for decl in self.declarations:
            for method in decl.methods:
                ret_type = ""
                if method.ret_type is not None:
                    ret_type = method.ret_type.qualified(package, local_names)
                prototypes.append(MethodPrototype(
                    name=method.name,
                    arg_types=tuple(p.type.qualified(package, local_names) for p in method.params),
                    ret_type=ret_type,
                ))
        return prototypes
