"""Tests for path spec expansion."""

import os
from pathlib import Path

import pytest

from idtool.errors import UsageError
from idtool.paths import (
    DirectoryWalk,
    PathSpecKind,
    is_hidden_dir,
    iter_files,
    parse_path_spec,
    resolve_path_spec,
)


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestParsePathSpec:
    """Tests for parse_path_spec."""

    def test_single_file(self):
        spec = parse_path_spec("a/b/file.id")

        assert spec.kind is PathSpecKind.FILE
        assert spec.path == Path("a/b/file.id")

    def test_recursive_marker(self):
        spec = parse_path_spec("a/b/...")

        assert spec.kind is PathSpecKind.RECURSIVE
        assert spec.path == Path("a/b")

    def test_current_directory_marker(self):
        assert parse_path_spec("./...").path == Path(".")

    def test_root_marker(self):
        assert parse_path_spec("/...").path == Path("/")

    @pytest.mark.parametrize("raw", ["file.go", "dir", "dir/", "...", "a.id.bak", ""])
    def test_unsupported_shapes_are_usage_errors(self, raw):
        with pytest.raises(UsageError) as exc_info:
            parse_path_spec(raw)

        assert f'Unsupported input path spec: "{raw}"' in str(exc_info.value)


class TestHiddenDir:
    """Tests for is_hidden_dir."""

    def test_dot_prefixed_names_are_hidden(self):
        assert is_hidden_dir(".git") is True
        assert is_hidden_dir(".cache") is True

    def test_single_dot_is_not_hidden(self):
        assert is_hidden_dir(".") is False

    def test_plain_names_are_not_hidden(self):
        assert is_hidden_dir("src") is False


class TestResolvePathSpec:
    """Tests for resolve_path_spec."""

    def test_single_file_is_not_checked_for_existence(self):
        assert resolve_path_spec("missing/file.id") == [Path("missing/file.id")]

    def test_discovery_skips_other_extensions_and_hidden_dirs(self, tmp_path):
        _touch(tmp_path / "a.id")
        _touch(tmp_path / "b.txt")
        _touch(tmp_path / ".cache" / "c.id")

        assert resolve_path_spec(f"{tmp_path}/...") == [tmp_path / "a.id"]

    def test_recursive_order_is_lexicographic_depth_first(self, tmp_path):
        _touch(tmp_path / "z.id")
        _touch(tmp_path / "sub" / "d.id")
        _touch(tmp_path / "sub" / "deeper" / "e.id")
        _touch(tmp_path / "sub" / ".git" / "f.id")
        _touch(tmp_path / "a.id")
        _touch(tmp_path / "m.id")

        assert resolve_path_spec(f"{tmp_path}/...") == [
            tmp_path / "a.id",
            tmp_path / "m.id",
            tmp_path / "sub" / "d.id",
            tmp_path / "sub" / "deeper" / "e.id",
            tmp_path / "z.id",
        ]

    def test_relative_spec_yields_relative_paths(self, tmp_path, monkeypatch):
        _touch(tmp_path / "x" / "a.id")
        monkeypatch.chdir(tmp_path)

        assert resolve_path_spec("./...") == [Path("x/a.id")]
        assert resolve_path_spec("x/...") == [Path("x/a.id")]

    def test_file_named_only_extension_is_found(self, tmp_path):
        _touch(tmp_path / ".id")
        _touch(tmp_path / "b.id")

        assert resolve_path_spec(f"{tmp_path}/...") == [tmp_path / ".id", tmp_path / "b.id"]

    def test_extension_match_is_exact(self, tmp_path):
        _touch(tmp_path / "upper.ID")
        _touch(tmp_path / "double.id.txt")
        _touch(tmp_path / "ok.id")

        assert resolve_path_spec(f"{tmp_path}/...") == [tmp_path / "ok.id"]

    def test_directory_named_like_spec_file_is_not_a_file(self, tmp_path):
        (tmp_path / "dir.id").mkdir()
        _touch(tmp_path / "dir.id" / "inner.id")

        assert resolve_path_spec(f"{tmp_path}/...") == [tmp_path / "dir.id" / "inner.id"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlinks_are_skipped(self, tmp_path):
        target = _touch(tmp_path / "real" / "t.id")
        (tmp_path / "link.id").symlink_to(target)
        (tmp_path / "linkdir").symlink_to(tmp_path / "real", target_is_directory=True)

        assert resolve_path_spec(f"{tmp_path}/...") == [tmp_path / "real" / "t.id"]

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resolve_path_spec(f"{tmp_path}/nope/...")

    def test_empty_directory(self, tmp_path):
        assert resolve_path_spec(f"{tmp_path}/...") == []

    def test_unsupported_spec(self):
        with pytest.raises(UsageError):
            resolve_path_spec("file.txt")


class TestDirectoryWalk:
    """Tests for the lazy walk primitives."""

    def test_walk_is_restartable(self, tmp_path):
        _touch(tmp_path / "a.id")
        _touch(tmp_path / "b" / "c.id")
        walk = DirectoryWalk(tmp_path)

        assert list(walk) == list(walk)
        assert len(list(walk)) == 2

    def test_custom_policies(self, tmp_path):
        _touch(tmp_path / "keep" / "a.txt")
        _touch(tmp_path / "skip" / "b.txt")
        _touch(tmp_path / "c.id")

        walk = DirectoryWalk(
            tmp_path,
            prune_dir=lambda name: name == "skip",
            keep_file=lambda p: p.suffix == ".txt",
        )

        assert list(walk) == [tmp_path / "keep" / "a.txt"]

    def test_iter_files_is_lazy(self, tmp_path):
        _touch(tmp_path / "a.id")
        _touch(tmp_path / "b.id")

        files = iter_files(tmp_path)

        assert next(files) == tmp_path / "a.id"
        assert next(files) == tmp_path / "b.id"
        with pytest.raises(StopIteration):
            next(files)
