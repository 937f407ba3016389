"""Models for rename plans.

A plan maps each *final new name* to the *original name* of the file it came
from. Keys are unique by construction: the plan builder resolves collisions
before inserting, so a plan can always be applied without two sources
targeting the same destination.

RenamePlanItem is the per-file view used by the applier and the renderers.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from renamer.models.core import PlanStatus

__all__: list[str] = [
    "RenamePlanItem",
    "RenamePlan",
    "PlanStatus",
]


class RenamePlanItem(BaseModel):
    """A single rename operation in a plan."""

    source: Path
    """Absolute path of the file to be renamed."""

    destination: Path
    """Absolute path of the file after renaming."""

    status: PlanStatus = PlanStatus.PENDING
    """Current status of this rename operation."""

    reason: Optional[str] = None
    """Reason for failure, if applicable (set after execution attempt)."""

    @model_validator(mode="after")
    def validate_paths(self: "RenamePlanItem") -> "RenamePlanItem":
        """Ensure the source and destination paths are absolute.

        Raises:
            ValueError: If either path is not absolute.
        """
        if not self.source.is_absolute():
            raise ValueError(f"Source path must be absolute: {self.source}")
        if not self.destination.is_absolute():
            raise ValueError(f"Destination path must be absolute: {self.destination}")
        return self


class RenamePlan(BaseModel):
    """All renames computed for one directory in one run."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    """Unique identifier for this plan."""

    created_at: datetime = Field(default_factory=datetime.now)
    """Timestamp when this plan was created."""

    root_dir: Path
    """Directory whose entries are renamed."""

    renames: Dict[str, str] = Field(default_factory=dict)
    """Mapping of new file name to original file name."""

    def __len__(self) -> int:
        return len(self.renames)

    def items(self) -> List[RenamePlanItem]:
        """Return the plan as items sorted by original name."""
        return [
            RenamePlanItem(
                source=self.root_dir / old_name,
                destination=self.root_dir / new_name,
            )
            for new_name, old_name in sorted(
                self.renames.items(), key=lambda pair: (pair[1], pair[0])
            )
        ]
