"""Shared fixtures for renamer tests."""

from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

from renamer.models.core import DirEntry


@pytest.fixture
def make_entry(tmp_path: Path) -> Callable[..., DirEntry]:
    """Return a factory building DirEntry objects rooted at tmp_path.

    The entry is not created on disk; tests that need a real file write it
    themselves.
    """

    def _make(
        name: str,
        *,
        is_dir: bool = False,
        created: datetime | None = None,
    ) -> DirEntry:
        stamp = (created or datetime(2024, 3, 9, 8, 5, 7)).timestamp()
        return DirEntry(
            name=name,
            path=tmp_path / name,
            is_dir=is_dir,
            birth_time=stamp,
            change_time=stamp,
            modified_time=stamp,
        )

    return _make

