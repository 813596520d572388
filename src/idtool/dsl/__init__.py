"""Reference toolchain for the interface definition language."""

from dataclasses import dataclass
from pathlib import Path

from idtool.dsl.ast import DEFAULT_INDENT, Module
from idtool.dsl.base import BaseGenerator, BaseParser, BaseRenderer
from idtool.dsl.generator import GoGenerator
from idtool.dsl.package import extract_package_name
from idtool.dsl.parser import DslParser
from idtool.dsl.renderer import DslRenderer

SPEC_FILE_EXTENSION = ".id"


@dataclass(frozen=True)
class Toolchain:
    """Parser, renderer and generator used by the commands."""
    parser: BaseParser
    renderer: BaseRenderer
    generator: BaseGenerator


def get_toolchain(indent: int = DEFAULT_INDENT) -> Toolchain:
    """Build the reference toolchain.

    Args:
        indent: Number of spaces used for block members in canonical output

    Returns:
        Toolchain backed by DslParser, DslRenderer and GoGenerator
    """
    return Toolchain(
        parser=DslParser(),
        renderer=DslRenderer(indent=indent),
        generator=GoGenerator(),
    )


def is_spec_file(file_path: Path) -> bool:
    """True for names ending in `.id`, including a file named just `.id`."""
    return file_path.name.endswith(SPEC_FILE_EXTENSION)


def parse_module_from_file(file_path: Path, parser: BaseParser | None = None) -> Module:
    """Read a spec file and parse it.

    Args:
        file_path: Spec file to read
        parser: Parser to use (DslParser if None)

    Returns:
        Parsed Module

    Raises:
        OSError: If the file cannot be read
        ParseError: If the file is malformed
    """
    if parser is None:
        parser = DslParser()
    with open(file_path, "rb") as f:
        source = f.read()
    return parser.parse(source, str(file_path))


__all__ = [
    "SPEC_FILE_EXTENSION",
    "Toolchain",
    "extract_package_name",
    "get_toolchain",
    "is_spec_file",
    "parse_module_from_file",
]
