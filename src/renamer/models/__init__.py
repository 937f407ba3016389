"""Domain models for the renamer application."""

from renamer.models.config import RenameConfig, Replacer, build_replacer
from renamer.models.core import DirEntry, MediaKind, PlanStatus, ProbeResult
from renamer.models.plan import RenamePlan, RenamePlanItem

__all__ = [
    "DirEntry",
    "MediaKind",
    "PlanStatus",
    "ProbeResult",
    "RenameConfig",
    "RenamePlan",
    "RenamePlanItem",
    "Replacer",
    "build_replacer",
]
