from abc import ABC, abstractmethod

from idtool.dsl.ast import Module
from idtool.models import Entry


class BaseParser(ABC):
    """Abstract base class for spec-file parsers."""

    @abstractmethod
    def parse(self, source: bytes, file_path: str = "<input>") -> Module:
        """Parse raw file contents into a Module.

        Args:
            source: File contents as read from disk
            file_path: Path used in error messages

        Returns:
            Parsed Module

        Raises:
            ParseError: If the source is malformed
        """
        pass


class BaseRenderer(ABC):
    """Abstract base class for canonical-form renderers."""

    @abstractmethod
    def render(self, module: Module) -> bytes:
        """Render a whole module in canonical form."""
        pass

    @abstractmethod
    def render_entries(self, entries: list[Entry]) -> str:
        """Render a sequence of declarations and blank separators."""
        pass


class BaseGenerator(ABC):
    """Abstract base class for target-language code generators."""

    @abstractmethod
    def compile(self, module: Module, package: str) -> bytes:
        """Compile a module into target source.

        Raises:
            CompileError: If the module is semantically invalid
        """
        pass
