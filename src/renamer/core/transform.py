"""Name transform pipeline.

Computes the new name of a single directory entry. Steps run in a fixed order
and each one is a no-op unless its option is set:

1. hidden files are ignored
2. ``exclude`` / ``include`` filters
3. base name: ``override`` (or cleared by ``<empty>``), else ``replace``
4. created date, prepended or appended
5. resolution tag, prepended or appended
6. ``prefix``, ``suffix``, unique random suffix
7. original extension re-attached

Segments are joined with the configured separator, which is never inserted
next to an empty segment.
"""

import re
import secrets
from pathlib import Path
from typing import NamedTuple, Optional

from renamer.core.resolution import ResolutionProber, format_resolution
from renamer.models.config import EMPTY_OVERRIDE, SUFFIX_FLAG, RenameConfig, Replacer
from renamer.models.core import DirEntry
from renamer.utils.dates import format_date

UNIQUE_CHARSET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
UNIQUE_LENGTH = 8


class TransformResult(NamedTuple):
    """Outcome of the pipeline for one entry."""

    ignored: bool
    new_name: str


IGNORED = TransformResult(True, "")


def gen_unique_str(length: int = UNIQUE_LENGTH) -> str:
    """Return a cryptographically random alphanumeric token."""
    return "".join(secrets.choice(UNIQUE_CHARSET) for _ in range(length))


def with_separator(a: str, b: str, separator: str) -> str:
    """Join two segments, skipping the separator when either side is empty."""
    if not a:
        return b
    if not b:
        return a
    return f"{a}{separator}{b}"


def _attach(base: str, segment: str, separator: str, as_suffix: bool) -> str:
    if as_suffix:
        return with_separator(base, segment, separator)
    return with_separator(segment, base, separator)


def _base_name(entry: DirEntry, config: RenameConfig, replacer: Optional[Replacer]) -> str:
    if config.override:
        if config.override == EMPTY_OVERRIDE and config.composes_segments:
            return ""
        return config.override
    if replacer is not None:
        return replacer.apply(entry.base_name)
    return entry.base_name


def transform_name(
    entry: DirEntry,
    config: RenameConfig,
    replacer: Optional[Replacer] = None,
    prober: Optional[ResolutionProber] = None,
    directory: Optional[Path] = None,
) -> TransformResult:
    """Compute the new name of *entry*.

    Args:
        entry: Directory entry to rename.
        config: Rename options for this run.
        replacer: Compiled ``--replace`` substitution, if any.
        prober: Resolution prober used when ``detect_resolution`` is set.
            A default ResolutionProber is created when omitted.
        directory: Directory holding the entry; defaults to the entry's parent.

    Returns:
        TransformResult. ``ignored`` is True when the entry is filtered out or
        the computed name equals the current name.
    """
    old_name = entry.name

    if entry.is_hidden:
        return IGNORED

    if config.exclude and re.search(config.exclude, old_name):
        return IGNORED

    if config.include and not re.search(config.include, old_name):
        return IGNORED

    sep = config.separator
    name = _base_name(entry, config, replacer)

    if config.created_date:
        as_suffix = config.created_date.startswith(SUFFIX_FLAG)
        layout = (
            config.created_date[len(SUFFIX_FLAG) :] if as_suffix else config.created_date
        )
        stamp = format_date(entry.created_time(), layout)
        name = _attach(name, stamp, sep, as_suffix)

    if config.probes_resolution:
        prober = prober or ResolutionProber()
        result = prober.resolve(entry, directory or entry.path.parent)
        resolution = format_resolution(result, sep, config.aspect_ratio)
        if resolution:
            name = _attach(name, resolution, sep, config.detect_resolution == SUFFIX_FLAG)

    if config.prefix:
        name = with_separator(config.prefix, name, sep)

    if config.suffix:
        name = with_separator(name, config.suffix, sep)

    if config.unique_suffix:
        name = with_separator(name, gen_unique_str(), sep)

    new_name = name + entry.extension
    return TransformResult(new_name == old_name, new_name)
