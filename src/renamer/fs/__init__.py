"""Filesystem operations for renamer."""

from renamer.fs.operations import safe_rename

__all__ = ["safe_rename"]
