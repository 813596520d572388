from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from idtool.dsl.ast import Decl


@dataclass(frozen=True)
class MethodPrototype:
    """Signature metadata for a struct/union method."""
    name: str
    arg_types: tuple[str, ...] = ()
    ret_type: str = ""  # Empty when the method returns nothing

    def to_json(self) -> dict:
        """Return the exported JSON object (keys: name, argTypes, retType)."""
        return {
            "name": self.name,
            "argTypes": list(self.arg_types),
            "retType": self.ret_type,
        }


@dataclass(frozen=True)
class Entry:
    """Printable unit: a declaration or a blank separator line."""
    kind: str  # "decl" or "empty"
    decl: "Decl | None" = None

    @classmethod
    def of(cls, decl: "Decl") -> "Entry":
        return cls(kind="decl", decl=decl)

    @classmethod
    def empty(cls) -> "Entry":
        return cls(kind="empty")
