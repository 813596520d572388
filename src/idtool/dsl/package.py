import re
from pathlib import Path

_NON_IDENT = re.compile(r"[^a-z0-9_]")


def extract_package_name(file_path: str | Path) -> str:
    """Derive the package name of a spec file from its path.

    The package is named after the directory containing the file, e.g.
    `actors/builtin/market/market.id` belongs to package `market`.

    Args:
        file_path: Path to the spec file

    Returns:
        Lowercase identifier; non-identifier characters become underscores
    """
    parent = Path(file_path).parent
    if not parent.name:
        parent = parent.resolve()

    name = _NON_IDENT.sub("_", parent.name.lower())
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name
