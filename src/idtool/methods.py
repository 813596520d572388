"""JSON export of method prototypes."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from idtool.dsl import Toolchain, extract_package_name, get_toolchain, parse_module_from_file
from idtool.models import MethodPrototype
from idtool.paths import resolve_path_spec

logger = logging.getLogger(__name__)


def collect_method_prototypes(paths: Iterable[Path], toolchain: Toolchain | None = None) -> list[MethodPrototype]:
    """Gather method prototypes from files, in file order then module order."""
    if toolchain is None:
        toolchain = get_toolchain()

    prototypes = []
    for path in paths:
        module = parse_module_from_file(path, toolchain.parser)
        package = extract_package_name(path)
        found = module.method_prototypes(package)
        logger.debug(f"{path}: {len(found)} method(s) in package {package}")
        prototypes.extend(found)
    return prototypes


def methods_to_json(prototypes: Iterable[MethodPrototype]) -> str:
    """Serialize prototypes as a two-space indented JSON array with a trailing newline."""
    return json.dumps([p.to_json() for p in prototypes], indent=2, ensure_ascii=False) + "\n"


def export_methods_json(spec: str, toolchain: Toolchain | None = None) -> str:
    """Resolve a path spec and return the JSON listing of its methods.

    Nothing is returned if any file fails to parse.
    """
    return methods_to_json(collect_method_prototypes(resolve_path_spec(spec), toolchain))
