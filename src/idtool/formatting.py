"""Canonical formatting of spec files.

Files are only written when their canonical rendering differs from what is
on disk, so formatting an already formatted tree never touches it.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from idtool.dsl import Toolchain, get_toolchain

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o777


def _write_file(path: Path, data: bytes, mode: int) -> None:
    """Truncate and write `path`; `mode` only applies when the file is created."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


def _read_if_exists(path: Path) -> bytes | None:
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return None


def format_file(
    src: Path,
    dst: Path | None = None,
    toolchain: Toolchain | None = None,
    file_mode: int = DEFAULT_FILE_MODE,
) -> bool:
    """Rewrite a spec file in canonical form if needed.

    Args:
        src: Spec file to format
        dst: Where to write the result (defaults to `src`, i.e. in place)
        toolchain: Parser and renderer to use
        file_mode: Permission bits for a newly created destination

    Returns:
        True if the destination was written, False if it already matched

    Raises:
        ParseError: If `src` is malformed
        OSError: If reading or writing fails
    """
    if toolchain is None:
        toolchain = get_toolchain()
    if dst is None:
        dst = src

    with open(src, "rb") as f:
        source = f.read()

    module = toolchain.parser.parse(source, str(src))
    rendered = toolchain.renderer.render(module)

    # In place, compare against the same snapshot that was parsed
    current = source if dst == src else _read_if_exists(dst)
    if rendered == current:
        logger.debug(f"Already formatted: {dst}")
        return False

    _write_file(dst, rendered, file_mode)
    logger.info(f"Formatted {src} -> {dst}")
    return True


def format_files(
    paths: Iterable[Path],
    toolchain: Toolchain | None = None,
    file_mode: int = DEFAULT_FILE_MODE,
) -> Iterator[Path]:
    """Format files in place, one at a time, in the given order.

    Yields each path as soon as it has been written. The first failure
    propagates and stops the batch; files written before it keep their new
    content.
    """
    if toolchain is None:
        toolchain = get_toolchain()

    for path in paths:
        if format_file(path, toolchain=toolchain, file_mode=file_mode):
            yield path
