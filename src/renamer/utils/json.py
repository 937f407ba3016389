"""JSON serialization helpers for renamer.

Used by ``renamer rename --dry-run --json`` to export a plan.

- datetime objects are stored in ISO 8601 format.
- Path objects are serialized as strings.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that understands datetime and Path objects."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize (may be datetime, Path, or other types)

        Returns:
            JSON-serializable representation of the object.
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        # Let the base class default method handle it or raise TypeError
        return super().default(obj)
