"""Tests for the rename plan builder.

Covers:
- Sequential mode: prefix scenario, include filter, directories, hidden files
- Collision handling: identical targets get unique keys mapping to distinct
  originals
- Bounded-concurrency mode (resolution detection) with a fake prober
- Unreadable directory treated as empty
"""

import re
import threading
import time
from pathlib import Path

from renamer.core.planner import build_rename_plan, insert_unique
from renamer.models.config import RenameConfig, build_replacer
from renamer.models.core import DirEntry, ProbeResult


def touch(root: Path, *names: str) -> None:
    for name in names:
        (root / name).write_bytes(b"")


class SlowProber:
    """Prober that records peak concurrency and returns fixed dimensions."""

    def __init__(self, result: ProbeResult, delay: float = 0.01) -> None:
        self.result = result
        self.delay = delay
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()

    def resolve(self, entry: DirEntry, directory: Path) -> ProbeResult:
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        time.sleep(self.delay)
        with self._lock:
            self.active -= 1
        return self.result


def test_prefix_scenario(tmp_path: Path) -> None:
    touch(tmp_path, "a.jpg", "b.jpg")
    plan = build_rename_plan(tmp_path, RenameConfig(prefix="IMG", separator="_"))
    assert plan.renames == {"IMG_a.jpg": "a.jpg", "IMG_b.jpg": "b.jpg"}
    assert plan.root_dir == tmp_path.absolute()


def test_include_scenario(tmp_path: Path) -> None:
    touch(tmp_path, "a.jpg", "b.png")
    plan = build_rename_plan(tmp_path, RenameConfig(prefix="x", include=r".*\.png$"))
    assert list(plan.renames.values()) == ["b.png"]


def test_directories_skipped_unless_allowed(tmp_path: Path) -> None:
    touch(tmp_path, "a.txt")
    (tmp_path / "folder").mkdir()

    plan = build_rename_plan(tmp_path, RenameConfig(prefix="p"))
    assert plan.renames == {"p_a.txt": "a.txt"}

    plan = build_rename_plan(tmp_path, RenameConfig(prefix="p", allow_dir=True))
    assert plan.renames == {"p_a.txt": "a.txt", "p_folder": "folder"}


def test_hidden_and_noop_entries_excluded(tmp_path: Path) -> None:
    touch(tmp_path, ".env", "keep.txt", "IMG_1.txt")
    config = RenameConfig(replace="IMG=PIC")
    plan = build_rename_plan(tmp_path, config, build_replacer(config.replace))
    assert plan.renames == {"PIC_1.txt": "IMG_1.txt"}


def test_collisions_get_unique_suffix(tmp_path: Path) -> None:
    touch(tmp_path, "a.jpg", "b.jpg")
    plan = build_rename_plan(tmp_path, RenameConfig(override="x"))

    assert len(plan) == 2
    assert plan.renames["x.jpg"] == "a.jpg"
    other = next(key for key in plan.renames if key != "x.jpg")
    assert re.fullmatch(r"x_[0-9a-zA-Z]{8}\.jpg", other)
    assert plan.renames[other] == "b.jpg"


def test_many_collisions_keep_keys_unique(tmp_path: Path) -> None:
    names = [f"file{i:03d}.dat" for i in range(50)]
    touch(tmp_path, *names)
    plan = build_rename_plan(tmp_path, RenameConfig(override="same"))

    assert len(plan) == 50
    assert sorted(plan.renames.values()) == names
    assert all(new != old for new, old in plan.renames.items())


def test_insert_unique_retries_until_free(mocker) -> None:
    tokens = iter(["AAAAAAAA", "AAAAAAAA", "BBBBBBBB"])
    mocker.patch("renamer.core.planner.gen_unique_str", side_effect=lambda: next(tokens))
    renames = {"x.jpg": "a.jpg", "x-AAAAAAAA.jpg": "b.jpg"}

    key = insert_unique(renames, "x.jpg", "c.jpg", "-")

    assert key == "x-BBBBBBBB.jpg"
    assert renames[key] == "c.jpg"
    assert len(renames) == 3


def test_concurrent_mode_with_resolution(tmp_path: Path) -> None:
    names = [f"clip{i:02d}.mp4" for i in range(20)]
    touch(tmp_path, *names)
    prober = SlowProber(ProbeResult(1280, 720))

    plan = build_rename_plan(
        tmp_path,
        RenameConfig(detect_resolution="suffix"),
        prober=prober,
        max_workers=4,
    )

    assert plan.renames == {
        name.replace(".mp4", "_1280x720.mp4"): name for name in names
    }
    assert 1 <= prober.peak <= 4


def test_concurrent_collisions_keep_keys_unique(tmp_path: Path) -> None:
    names = [f"v{i:02d}.mov" for i in range(30)]
    touch(tmp_path, *names)
    prober = SlowProber(ProbeResult(640, 480), delay=0)

    plan = build_rename_plan(
        tmp_path,
        RenameConfig(detect_resolution="prefix", override="clip"),
        prober=prober,
    )

    assert len(plan) == 30
    assert sorted(plan.renames.values()) == names
    assert "640x480_clip.mov" in plan.renames


def test_concurrent_mode_skips_unknown_resolution(tmp_path: Path) -> None:
    touch(tmp_path, "readme.md")
    prober = SlowProber(ProbeResult.unknown(), delay=0)
    plan = build_rename_plan(
        tmp_path, RenameConfig(detect_resolution="prefix"), prober=prober
    )
    assert len(plan) == 0


def test_missing_directory_yields_empty_plan(tmp_path: Path, caplog) -> None:
    plan = build_rename_plan(tmp_path / "missing", RenameConfig(prefix="x"))
    assert len(plan) == 0
    assert "Failed to read directory" in caplog.text


def test_plan_items_sorted_by_original_name(tmp_path: Path) -> None:
    touch(tmp_path, "c.txt", "a.txt", "b.txt")
    plan = build_rename_plan(tmp_path, RenameConfig(suffix="s"))
    items = plan.items()
    assert [item.source.name for item in items] == ["a.txt", "b.txt", "c.txt"]
    assert [item.destination.name for item in items] == ["a_s.txt", "b_s.txt", "c_s.txt"]
    assert all(item.source.parent == tmp_path.absolute() for item in items)


def test_collision_token_goes_before_extension_of_bare_extension_name() -> None:
    renames = {".jpg": "a.jpg"}

    key = insert_unique(renames, ".jpg", "b.jpg", "_")

    assert re.fullmatch(r"_[0-9a-zA-Z]{8}\.jpg", key)
    assert renames[key] == "b.jpg"


def test_replace_emptying_base_names_keeps_extension(tmp_path: Path) -> None:
    touch(tmp_path, "a.jpg", "b.jpg")
    config = RenameConfig(replace="[ab]=")

    plan = build_rename_plan(tmp_path, config, build_replacer(config.replace))

    assert plan.renames[".jpg"] == "a.jpg"
    other = next(key for key in plan.renames if key != ".jpg")
    assert re.fullmatch(r"_[0-9a-zA-Z]{8}\.jpg", other)
