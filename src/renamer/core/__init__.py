"""Core functionality for renamer.

- build_rename_plan: lists a directory, transforms each name and resolves
  collisions into a RenamePlan.
- apply_plan: previews or executes a RenamePlan.
- transform_name: the per-entry name transform pipeline.
"""

from renamer.core.apply import ApplyResult, apply_plan
from renamer.core.planner import build_rename_plan
from renamer.core.transform import transform_name

__all__ = ["ApplyResult", "apply_plan", "build_rename_plan", "transform_name"]
