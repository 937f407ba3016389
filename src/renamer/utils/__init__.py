"""Utility modules for renamer."""

from renamer.utils.dates import convert_date_layout, format_date
from renamer.utils.json import DateTimeEncoder

__all__ = [
    "convert_date_layout",
    "format_date",
    "DateTimeEncoder",
]
