"""Core domain models for renamer.

This module defines the foundational data structures shared by the scanner,
the name transform pipeline, the resolution prober and the applier.

Design:
- DirEntry is a frozen snapshot of one directory item taken at scan time, so
  the transform pipeline never has to stat the file again.
- MediaKind classifies a file by extension for resolution probing.
- PlanStatus tracks the outcome of each rename attempted by the applier.
- ProbeResult is a plain (width, height) pair where (0, 0) means "unknown".
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, model_validator


def split_extension(name: str) -> tuple[str, str]:
    """Split *name* at its last dot.

    The extension keeps its leading dot. Unlike ``os.path.splitext``, a name
    made only of an extension (``".jpg"``) has an empty base.
    """
    index = name.rfind(".")
    if index == -1:
        return name, ""
    return name[:index], name[index:]


class MediaKind(str, Enum):
    """How a file's pixel dimensions can be obtained."""

    NATIVE_IMAGE = "native_image"
    PROBE_IMAGE = "probe_image"
    VIDEO = "video"
    OTHER = "other"


class PlanStatus(str, Enum):
    """Status of a rename plan item."""

    PENDING = "pending"
    RENAMED = "renamed"
    FAILED = "failed"


class ProbeResult(NamedTuple):
    """Pixel dimensions of a media file."""

    width: int
    height: int

    @classmethod
    def unknown(cls) -> "ProbeResult":
        """Return the (0, 0) result used for unknown or unavailable dimensions."""
        return cls(0, 0)

    @property
    def known(self) -> bool:
        """Whether both dimensions are positive."""
        return self.width > 0 and self.height > 0


class DirEntry(BaseModel):
    """A single item of a directory listing.

    Timestamps are POSIX seconds; 0 means the platform did not report the value.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    """File name, without any directory component."""

    path: Path
    """Absolute path of the entry."""

    is_dir: bool = False
    """Whether the entry is a directory."""

    birth_time: float = 0.0
    """True creation time, where the platform reports one."""

    change_time: float = 0.0
    """Inode change time (``st_ctime``)."""

    modified_time: float = 0.0
    """Last modification time (``st_mtime``)."""

    @property
    def extension(self) -> str:
        """Extension including the leading dot, as written (``""`` if none)."""
        return split_extension(self.name)[1]

    @property
    def base_name(self) -> str:
        """Name with the extension removed."""
        return split_extension(self.name)[0]

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    def created_time(self) -> datetime:
        """Best-effort creation time.

        Prefers the birth time, then the change time, then the modification
        time; the first non-zero value wins.
        """
        for stamp in (self.birth_time, self.change_time, self.modified_time):
            if stamp > 0:
                return datetime.fromtimestamp(stamp)
        return datetime.fromtimestamp(0)

    @model_validator(mode="after")
    def validate_path(self: "DirEntry") -> "DirEntry":
        """Ensure the path is absolute.

        Raises:
            ValueError: If the path is not absolute.
        """
        if not self.path.is_absolute():
            raise ValueError(f"Path must be absolute: {self.path}")
        return self
