"""Expansion of path specs into concrete spec-file lists.

A path spec is either a single `.id` file or a directory followed by the
recursive marker `/...`, which selects every spec file below it.
"""

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from idtool.dsl import SPEC_FILE_EXTENSION, is_spec_file
from idtool.errors import InternalError, UsageError

RECURSIVE_SUFFIX = "/..."


class PathSpecKind(Enum):
    FILE = "file"
    RECURSIVE = "recursive"


@dataclass(frozen=True)
class PathSpec:
    raw: str
    kind: PathSpecKind
    path: Path  # The file itself, or the directory to walk


def parse_path_spec(spec: str) -> PathSpec:
    """Classify a path spec string.

    Raises:
        UsageError: If the spec is neither a `.id` file nor ends in `/...`
    """
    if spec.endswith(RECURSIVE_SUFFIX):
        directory = spec[: -len(RECURSIVE_SUFFIX)] or "/"
        return PathSpec(raw=spec, kind=PathSpecKind.RECURSIVE, path=Path(directory))
    if spec.endswith(SPEC_FILE_EXTENSION):
        return PathSpec(raw=spec, kind=PathSpecKind.FILE, path=Path(spec))
    raise UsageError(f'Unsupported input path spec: "{spec}"')


def is_hidden_dir(name: str) -> bool:
    """Hidden directories (`.git`, `.cache`) are skipped; `.` itself is not."""
    return name.startswith(".") and len(name) > 1


def iter_files(directory: Path, prune_dir: Callable[[str], bool] = is_hidden_dir) -> Iterator[Path]:
    """Lazily yield regular files below a directory, depth first.

    Entries of each directory are visited in lexicographic order of their
    names. Subdirectories for which `prune_dir(name)` is true are skipped
    with their whole subtree. Symlinks and other non-regular files are
    skipped, and symlinked directories are not followed.
    """
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        path = directory / entry.name
        if entry.is_dir(follow_symlinks=False):
            if not prune_dir(entry.name):
                yield from iter_files(path, prune_dir)
        elif entry.is_file(follow_symlinks=False):
            yield path


@dataclass(frozen=True)
class DirectoryWalk:
    """Restartable, filtered view of the files below `root`.

    Each iteration walks the filesystem again, so iterating twice over an
    unchanged tree yields the same sequence.
    """
    root: Path
    prune_dir: Callable[[str], bool] = is_hidden_dir
    keep_file: Callable[[Path], bool] = is_spec_file

    def __iter__(self) -> Iterator[Path]:
        if not self.root.is_dir():
            raise FileNotFoundError(f"No such directory: {self.root}")
        return (p for p in iter_files(self.root, self.prune_dir) if self.keep_file(p))


def resolve_path_spec(spec: str) -> list[Path]:
    """Expand a path spec into the ordered list of spec files it denotes.

    Args:
        spec: `file.id` or `dir/...`

    Returns:
        `[file.id]` for a single file, or every spec file under `dir`

    Raises:
        UsageError: If the spec has an unsupported shape
        FileNotFoundError: If a recursive spec names a missing directory
    """
    path_spec = parse_path_spec(spec)

    if path_spec.kind is PathSpecKind.FILE:
        return [path_spec.path]
    if path_spec.kind is PathSpecKind.RECURSIVE:
        return list(DirectoryWalk(path_spec.path))

    raise InternalError(f"unhandled path spec kind: {path_spec.kind}")
