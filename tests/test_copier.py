"""Tests for recursive and pattern-based copying."""

from __future__ import annotations

from pathlib import Path

import pytest

from cartridge.core.copier import copy_by_patterns, copy_recursive, match_pattern
from cartridge.errors import FilesystemError


@pytest.fixture
def source(tmp_path: Path) -> Path:
    """A small save tree::

        src/slot1.sav
        src/slot2.sav
        src/backup_01.dat
        src/notes.txt
        src/.hidden.sav
        src/profiles/main.sav
        src/profiles/deep/extra.sav
        src/folder.sav/          (directory)
    """
    src = tmp_path / "src"
    (src / "profiles" / "deep").mkdir(parents=True)
    (src / "folder.sav").mkdir()
    (src / "slot1.sav").write_bytes(b"one")
    (src / "slot2.sav").write_bytes(b"two")
    (src / "backup_01.dat").write_bytes(b"dat")
    (src / "notes.txt").write_text("notes")
    (src / ".hidden.sav").write_bytes(b"hidden")
    (src / "profiles" / "main.sav").write_bytes(b"main")
    (src / "profiles" / "deep" / "extra.sav").write_bytes(b"extra")
    return src


class TestCopyRecursive:
    def test_mirrors_tree(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        count = copy_recursive(source, dest)
        assert count == 7
        assert (dest / "slot1.sav").read_bytes() == b"one"
        assert (dest / "profiles" / "deep" / "extra.sav").read_bytes() == b"extra"
        assert (dest / "folder.sav").is_dir()

    def test_single_file_keeps_basename(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest" / "nested"
        assert copy_recursive(source / "slot2.sav", dest) == 1
        assert (dest / "slot2.sav").read_bytes() == b"two"

    def test_overwrites_existing(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        dest.mkdir()
        (dest / "slot1.sav").write_bytes(b"stale")
        copy_recursive(source, dest)
        assert (dest / "slot1.sav").read_bytes() == b"one"

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FilesystemError) as exc:
            copy_recursive(tmp_path / "missing", tmp_path / "dest")
        assert isinstance(exc.value.__cause__, OSError)

    def test_destination_is_a_file(self, source: Path, tmp_path: Path) -> None:
        blocker = tmp_path / "dest"
        blocker.write_text("not a directory")
        with pytest.raises(FilesystemError):
            copy_recursive(source, blocker)


class TestCopyByPatterns:
    def test_selects_matching_files_only(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        count = copy_by_patterns(source, dest, ["*.sav", "backup_*.dat"])
        names = sorted(p.name for p in dest.iterdir())
        assert names == [".hidden.sav", "backup_01.dat", "slot1.sav", "slot2.sav"]
        assert count == 4

    def test_directories_ignored(self, source: Path) -> None:
        assert source / "folder.sav" not in match_pattern(source, "*.sav")

    def test_recursive_glob_flattens(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        copy_by_patterns(source, dest, ["profiles/**/*.sav"])
        assert sorted(p.name for p in dest.iterdir()) == ["extra.sav", "main.sav"]
        assert all(p.is_file() for p in dest.iterdir())

    def test_character_class(self, source: Path) -> None:
        assert [p.name for p in match_pattern(source, "slot[1].sav")] == ["slot1.sav"]

    def test_no_matches_creates_empty_destination(self, source: Path, tmp_path: Path) -> None:
        dest = tmp_path / "dest"
        assert copy_by_patterns(source, dest, ["*.none"]) == 0
        assert dest.is_dir()
        assert list(dest.iterdir()) == []

    def test_basename_collision_last_match_wins(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        (src / "a").mkdir(parents=True)
        (src / "b").mkdir()
        (src / "a" / "x.sav").write_bytes(b"A")
        (src / "b" / "x.sav").write_bytes(b"B")
        dest = tmp_path / "dest"
        copy_by_patterns(src, dest, ["*/x.sav"])
        assert (dest / "x.sav").read_bytes() == b"B"

    def test_special_characters_in_source_dir(self, tmp_path: Path) -> None:
        src = tmp_path / "Game [EU]"
        src.mkdir()
        (src / "save.sav").write_bytes(b"eu")
        dest = tmp_path / "dest"
        assert copy_by_patterns(src, dest, ["*.sav"]) == 1
