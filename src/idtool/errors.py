"""Exception hierarchy shared by the idtool commands."""


class IdToolError(Exception):
    """Base class for all errors raised by idtool."""


class UsageError(IdToolError):
    """Malformed command-line invocation (wrong arity, bad path spec, unknown command)."""


class InternalError(IdToolError):
    """A condition that no well-formed invocation can reach."""


class SymbolNotFoundError(IdToolError, LookupError):
    """A requested symbol is not declared in the module."""

    def __init__(self, symbol: str, file_path: str | None = None):
        self.symbol = symbol
        self.file_path = file_path
        where = f" in {file_path}" if file_path else ""
        super().__init__(f"symbol not found: {symbol}{where}")


class ToolchainError(IdToolError):
    """Failure reported by the DSL toolchain (parser or generator)."""


class ParseError(ToolchainError):
    """Malformed spec file.

    Attributes:
        file_path: File being parsed
        line: 1-indexed line of the offending token
        column: 1-indexed column of the offending token
    """

    def __init__(self, message: str, file_path: str = "<input>", line: int = 0, column: int = 0):
        self.message = message
        self.file_path = file_path
        self.line = line
        self.column = column
        super().__init__(f"{file_path}:{line}:{column}: {message}")


class CompileError(ToolchainError):
    """Semantically invalid module (unknown types, duplicate names)."""
