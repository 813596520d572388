"""Go code generator for spec modules."""

from idtool.dsl.ast import Decl, ListType, MapType, Module, TypeRef
from idtool.dsl.base import BaseGenerator
from idtool.errors import CompileError

GO_BUILTINS = {
    "bool": "bool",
    "int": "int64",
    "uint": "uint64",
    "string": "string",
    "bytes": "[]byte",
    "float": "float64",
}

HEADER = "// Code generated by idtool. DO NOT EDIT."


def _exported(name: str) -> str:
    return name[:1].upper() + name[1:]


class GoGenerator(BaseGenerator):
    """Compiles a module into a single Go source file.

    Structs become Go structs, unions become structs holding one pointer per
    variant (exactly one is expected to be set), aliases become named types,
    and methods of a struct/union are collected into a `<Name>_Interface`.
    """

    def compile(self, module: Module, package: str) -> bytes:
        self._check_names(module)
        imports = {imp.alias for imp in module.imports}
        local_names = {decl.name for decl in module.decls()}

        lines = [HEADER, "", f"package {package}", ""]

        if module.imports:
            lines.append("import (")
            for imp in module.imports:
                lines.append(f'\t{imp.alias} "{imp.path}"')
            lines.append(")")
            lines.append("")

        for decl in module.decls():
            lines.extend(self._compile_decl(decl, imports, local_names, module.file_path))
            lines.append("")

        return ("\n".join(lines).rstrip("\n") + "\n").encode("utf-8")

    def _check_names(self, module: Module) -> None:
        seen = set()
        for decl in module.decls():
            if decl.name in seen:
                raise CompileError(f"{module.file_path}: duplicate declaration: {decl.name}")
            seen.add(decl.name)

            member_names = set()
            for member in decl.members:
                if member.name in member_names:
                    raise CompileError(
                        f"{module.file_path}: duplicate member {member.name} in {decl.name}"
                    )
                member_names.add(member.name)

    def _go_type(self, type_ref: TypeRef, imports: set[str], local_names: set[str], file_path: str) -> str:
        if isinstance(type_ref, ListType):
            return "[]" + self._go_type(type_ref.elem, imports, local_names, file_path)

        if isinstance(type_ref, MapType):
            key = self._go_type(type_ref.key, imports, local_names, file_path)
            value = self._go_type(type_ref.value, imports, local_names, file_path)
            return f"map[{key}]{value}"

        name = type_ref.name
        if name in GO_BUILTINS:
            return GO_BUILTINS[name]
        if name in local_names:
            return name
        if "." in name:
            qualifier = name.split(".", 1)[0]
            if qualifier not in imports:
                raise CompileError(f"{file_path}: unknown import qualifier {qualifier!r} in {name}")
            return name
        raise CompileError(f"{file_path}: unknown type: {name}")

    def _compile_decl(self, decl: Decl, imports: set[str], local_names: set[str], file_path: str) -> list[str]:
        def go_type(type_ref: TypeRef) -> str:
            return self._go_type(type_ref, imports, local_names, file_path)

        if decl.kind == "alias":
            return [f"type {decl.name} {go_type(decl.target)}"]

        pointer = "*" if decl.kind == "union" else ""
        lines = [f"type {decl.name} struct {{"]
        for field in decl.fields:
            lines.append(f"\t{_exported(field.name)} {pointer}{go_type(field.type)}")
        lines.append("}")

        if decl.methods:
            lines.append("")
            lines.append(f"type {decl.name}_Interface interface {{")
            for method in decl.methods:
                params = ", ".join(f"{p.name} {go_type(p.type)}" for p in method.params)
                signature = f"\t{_exported(method.name)}({params})"
                if method.ret_type is not None:
                    signature += f" {go_type(method.ret_type)}"
                lines.append(signature)
            lines.append("}")

        return lines
