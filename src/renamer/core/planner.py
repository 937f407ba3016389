"""Rename plan builder.

Lists a directory, runs the transform pipeline on every entry and resolves
name collisions into a RenamePlan whose keys (new names) are unique.

Two execution modes:

- sequential, when no resolution probing is requested (the pipeline is pure
  CPU work);
- bounded concurrency, when it is: probing reads file headers or spawns
  ffprobe, so entries are processed by a fixed-size thread pool
  (``MAX_WORKERS``). Insertions into the shared plan happen under one lock,
  with check, rename and insert done in a single critical section.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional

from renamer.core.resolution import ResolutionProber
from renamer.core.scanner import list_directory
from renamer.core.transform import gen_unique_str, transform_name
from renamer.models.config import RenameConfig, Replacer
from renamer.models.core import DirEntry, split_extension
from renamer.models.plan import RenamePlan
from renamer.utils.config import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)

MAX_WORKERS = DEFAULT_MAX_WORKERS


def insert_unique(
    renames: Dict[str, str], new_name: str, old_name: str, separator: str
) -> str:
    """Insert ``new_name -> old_name`` into *renames*, avoiding duplicate keys.

    When *new_name* is already taken, a random token is inserted between the
    base name and the extension until the candidate is free. Callers sharing
    *renames* across threads must hold a lock around this call.

    Returns:
        The key actually inserted.
    """
    candidate = new_name
    base, ext = split_extension(new_name)
    while candidate in renames or candidate == old_name:
        candidate = f"{base}{separator}{gen_unique_str()}{ext}"
    if candidate != new_name:
        logger.debug("Collision on %s, using %s for %s", new_name, candidate, old_name)
    renames[candidate] = old_name
    return candidate


def _candidates(entries: List[DirEntry], config: RenameConfig) -> List[DirEntry]:
    return [entry for entry in entries if config.allow_dir or not entry.is_dir]


def _build_sequential(
    entries: List[DirEntry],
    root_dir: Path,
    config: RenameConfig,
    replacer: Optional[Replacer],
    prober: Optional[ResolutionProber],
) -> Dict[str, str]:
    renames: Dict[str, str] = {}
    for entry in entries:
        ignored, new_name = transform_name(entry, config, replacer, prober, root_dir)
        if ignored:
            continue
        insert_unique(renames, new_name, entry.name, config.separator)
    return renames


def _build_concurrent(
    entries: List[DirEntry],
    root_dir: Path,
    config: RenameConfig,
    replacer: Optional[Replacer],
    prober: ResolutionProber,
    max_workers: int,
) -> Dict[str, str]:
    renames: Dict[str, str] = {}
    lock = threading.Lock()

    def process(entry: DirEntry) -> None:
        ignored, new_name = transform_name(entry, config, replacer, prober, root_dir)
        if ignored:
            return
        with lock:
            insert_unique(renames, new_name, entry.name, config.separator)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(process, entry) for entry in entries]
        for future in futures:
            # Re-raise unexpected worker errors; probing itself never raises.
            future.result()
    return renames


def build_rename_plan(
    root_dir: Path,
    config: RenameConfig,
    replacer: Optional[Replacer] = None,
    *,
    prober: Optional[ResolutionProber] = None,
    max_workers: int = MAX_WORKERS,
) -> RenamePlan:
    """Build the rename plan for the immediate entries of *root_dir*.

    Args:
        root_dir: Directory to rename files in.
        config: Rename options for this run.
        replacer: Compiled ``--replace`` substitution, if any.
        prober: Resolution prober; a default one is created when resolution
            detection is requested and none is given.
        max_workers: Upper bound on entries processed concurrently when
            probing resolutions.

    Returns:
        RenamePlan mapping each unique new name to its original name.
    """
    root_dir = root_dir.absolute()
    entries = _candidates(list_directory(root_dir), config)

    if not config.probes_resolution:
        renames = _build_sequential(entries, root_dir, config, replacer, prober)
    else:
        renames = _build_concurrent(
            entries,
            root_dir,
            config,
            replacer,
            prober or ResolutionProber(),
            max(1, max_workers),
        )

    logger.debug("Planned %d renames in %s", len(renames), root_dir)
    return RenamePlan(root_dir=root_dir, renames=renames)
