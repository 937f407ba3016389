"""Filesystem rename primitive for renamer.

Renames one entry in place. Handles Windows long paths and never overwrites
an existing destination: a file that already exists under the new name is
outside the plan's control and is reported as a failure instead.
"""

import sys
from pathlib import Path

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix."""
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: Path) -> str:
    s = str(path)
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(s) > WIN_MAX_PATH and not s.startswith(prefix):
        return prefix + s
    return s


def _same_entry(src: Path, dst: Path) -> bool:
    """True when *dst* resolves to *src* itself (case-only rename)."""
    try:
        return src.samefile(dst)
    except OSError:
        return False


def safe_rename(src: Path, dst: Path) -> None:
    """Rename *src* to *dst* without clobbering an existing file.

    Case-only renames (``a.JPG`` -> ``a.jpg``) are allowed on
    case-insensitive filesystems, where the destination "exists" as the
    source itself.

    Raises:
        FileExistsError: If *dst* exists and is a different file.
        FileNotFoundError: If *src* is missing.
        OSError: For any other filesystem error.
    """
    if dst.exists() and not _same_entry(src, dst):
        raise FileExistsError(f"Destination {dst} already exists")
    Path(_win_long_path(src)).rename(_win_long_path(dst))
