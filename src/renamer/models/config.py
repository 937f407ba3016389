"""Rename options and the replace-pattern model.

RenameConfig is parsed once per run (normally by the CLI) and is read-only
afterwards. Validation happens at construction time so that invalid regular
expressions or option combinations abort the run before any file is touched.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from renamer.errors import ReplaceSpecError

# Marker meaning "append instead of prepend" for --created-date and
# --detect-resolution.
SUFFIX_FLAG = "suffix"
PREFIX_FLAG = "prefix"

# Reserved --override value meaning "clear the base name".
EMPTY_OVERRIDE = "<empty>"

DEFAULT_SEPARATOR = "_"


class RenameConfig(BaseModel):
    """Options controlling how a directory is renamed."""

    model_config = ConfigDict(frozen=True)

    path: str = ""
    """Directory to rename files in; empty means the current directory."""

    prefix: str = ""
    """Text prepended to every new name."""

    suffix: str = ""
    """Text appended to every new name (before the extension)."""

    override: str = ""
    """Literal replacement for the base name, or ``<empty>`` to clear it."""

    separator: str = DEFAULT_SEPARATOR
    """Joins the composed name segments."""

    include: str = ""
    """Only names matching this regular expression are renamed."""

    exclude: str = ""
    """Names matching this regular expression are skipped."""

    replace: str = ""
    """Single ``pattern=replacement`` substitution applied to the base name."""

    created_date: str = ""
    """Date layout (Y/M/D/h/m/s/f); a ``suffix`` prefix appends instead."""

    detect_resolution: str = ""
    """``prefix`` or ``suffix`` to tag media with WxH; empty disables probing."""

    aspect_ratio: bool = False
    """Follow the resolution tag with the reduced aspect ratio (16x9)."""

    allow_dir: bool = False
    """Include directory entries."""

    unique_suffix: bool = False
    """Append a random token to every name."""

    dry_run: bool = False
    """Show the plan without renaming anything."""

    yes: bool = False
    """Skip the confirmation prompt."""

    @field_validator("include", "exclude")
    @classmethod
    def validate_regex(cls, value: str) -> str:
        if value:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @field_validator("detect_resolution")
    @classmethod
    def validate_detect_resolution(cls, value: str) -> str:
        if value not in ("", PREFIX_FLAG, SUFFIX_FLAG):
            raise ValueError(
                f"must be '{PREFIX_FLAG}' or '{SUFFIX_FLAG}', got {value!r}"
            )
        return value

    @model_validator(mode="after")
    def validate_empty_override(self: "RenameConfig") -> "RenameConfig":
        """Reject ``<empty>`` when nothing else would be left of the name.

        Raises:
            ValueError: If override is the clear sentinel and none of prefix,
                suffix or unique_suffix is set.
        """
        if self.override == EMPTY_OVERRIDE and not self.composes_segments:
            raise ValueError(
                f"override {EMPTY_OVERRIDE!r} requires --prefix, --suffix "
                "or --unique-suffix"
            )
        return self

    @property
    def composes_segments(self) -> bool:
        """Whether prefix, suffix or a unique suffix will be added to the name."""
        return bool(self.prefix or self.suffix or self.unique_suffix)

    @property
    def probes_resolution(self) -> bool:
        return self.detect_resolution != ""

    def root_dir(self) -> Path:
        """Absolute directory to operate on (current directory when unset)."""
        return Path(self.path or os.getcwd()).absolute()


@dataclass(frozen=True)
class Replacer:
    """Compiled ``--replace`` substitution."""

    regex: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        """Replace every match in *text* with the literal replacement."""
        return self.regex.sub(lambda _match: self.replacement, text)


def build_replacer(spec: str) -> Optional[Replacer]:
    """Parse a ``pattern=replacement`` spec.

    Args:
        spec: Raw ``--replace`` value; empty disables replacement.

    Returns:
        The compiled Replacer, or None when *spec* is empty.

    Raises:
        ReplaceSpecError: If the spec does not contain exactly one ``=``, the
            pattern is empty, or the pattern is not a valid regular expression.
    """
    if not spec:
        return None

    parts = spec.split("=")
    if len(parts) != 2:
        raise ReplaceSpecError(spec, "expected exactly one '='")

    pattern, replacement = parts
    if not pattern:
        raise ReplaceSpecError(spec, "empty pattern")

    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise ReplaceSpecError(spec, f"failed to compile {pattern!r}: {e}") from e

    return Replacer(regex=regex, replacement=replacement)
