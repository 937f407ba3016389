"""Directory scanner for the rename engine.

Lists the immediate entries of a directory (no recursion) and snapshots the
metadata the transform pipeline needs into DirEntry objects.
"""

import logging
import os
from pathlib import Path
from typing import List

from renamer.models.core import DirEntry

# Logger for this module
logger = logging.getLogger(__name__)


def _birth_time(stat: os.stat_result) -> float:
    """Return the true creation time when the platform reports one, else 0."""
    return float(getattr(stat, "st_birthtime", 0.0) or 0.0)


def _stat_entry(item: os.DirEntry) -> os.stat_result:
    """Stat a scandir entry, falling back to lstat for dangling symlinks."""
    try:
        return item.stat()
    except FileNotFoundError:
        return item.stat(follow_symlinks=False)


def _create_dir_entry(item: os.DirEntry, root_dir: Path) -> DirEntry:
    """Create a DirEntry from a scandir entry.

    Args:
        item: Entry yielded by ``os.scandir``.
        root_dir: Absolute directory being listed.

    Returns:
        The DirEntry snapshot.
    """
    stat = _stat_entry(item)
    try:
        is_dir = item.is_dir()
    except OSError:
        is_dir = False
    return DirEntry(
        name=item.name,
        path=root_dir / item.name,
        is_dir=is_dir,
        birth_time=_birth_time(stat),
        change_time=float(stat.st_ctime),
        modified_time=float(stat.st_mtime),
    )


def list_directory(root_dir: Path) -> List[DirEntry]:
    """List the immediate entries of *root_dir*, sorted by name.

    A directory that cannot be read is treated as empty: a warning is logged
    and an empty list returned, so the run proceeds with nothing to rename.
    Entries that vanish or cannot be stat'ed while listing are skipped.

    Args:
        root_dir: Directory to list.

    Returns:
        DirEntry objects for every item, including hidden files and
        directories (filtering is the pipeline's job).
    """
    root_dir = root_dir.absolute()
    entries: List[DirEntry] = []
    try:
        with os.scandir(root_dir) as it:
            for item in it:
                try:
                    entries.append(_create_dir_entry(item, root_dir))
                except OSError as e:
                    logger.warning("Error accessing %s: %s", item.path, e)
    except OSError as e:
        logger.warning("Failed to read directory %s: %s", root_dir, e)
        return []

    entries.sort(key=lambda entry: entry.name)
    logger.debug("Listed %d entries in %s", len(entries), root_dir)
    return entries
