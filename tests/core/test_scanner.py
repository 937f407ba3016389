"""Tests for the directory scanner."""

import os
from datetime import datetime
from pathlib import Path

from renamer.core.scanner import list_directory


def test_lists_entries_sorted_with_hidden_and_dirs(tmp_path: Path) -> None:
    for name in ("b.txt", ".hidden", "a.jpg"):
        (tmp_path / name).write_text(name)
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "nested.txt").write_text("not listed")

    entries = list_directory(tmp_path)

    assert [entry.name for entry in entries] == [".hidden", "a.jpg", "b.txt", "sub"]
    assert [entry.is_dir for entry in entries] == [False, False, False, True]
    assert entries[0].is_hidden
    assert all(entry.path == tmp_path / entry.name for entry in entries)


def test_entries_carry_timestamps(tmp_path: Path) -> None:
    path = tmp_path / "old.txt"
    path.write_text("x")
    stamp = datetime(2019, 6, 1, 12, 0, 0).timestamp()
    os.utime(path, (stamp, stamp))

    (entry,) = list_directory(tmp_path)

    assert entry.modified_time == stamp
    assert entry.change_time > 0
    assert entry.created_time().year >= 2019


def test_missing_directory_is_empty(tmp_path: Path, caplog) -> None:
    assert list_directory(tmp_path / "nope") == []
    assert "Failed to read directory" in caplog.text


def test_dangling_symlink_is_listed(tmp_path: Path) -> None:
    (tmp_path / "link").symlink_to(tmp_path / "missing-target")

    (entry,) = list_directory(tmp_path)

    assert entry.name == "link"
    assert not entry.is_dir
