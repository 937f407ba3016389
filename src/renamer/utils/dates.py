"""Date-format mini-language used by ``--created-date``.

A format string is made of single-character tokens and literal text:

====== ==========================
Token  Rendered as
====== ==========================
``Y``  4-digit year
``M``  2-digit month
``D``  2-digit day
``h``  2-digit hour (24h clock)
``m``  2-digit minute
``s``  2-digit second
``f``  3-digit millisecond
====== ==========================

Any other character passes through unchanged. Substitution is done one
character at a time, so rendered digits are never re-interpreted as tokens.
"""

from datetime import datetime
from typing import Callable, Dict

# Reference instant used to show what a layout expands to (see
# convert_date_layout). Chosen so that each field renders distinctly.
REFERENCE_TIME = datetime(2006, 1, 2, 15, 4, 5)

DATE_TOKENS: Dict[str, Callable[[datetime], str]] = {
    "Y": lambda dt: f"{dt.year:04d}",
    "M": lambda dt: f"{dt.month:02d}",
    "D": lambda dt: f"{dt.day:02d}",
    "h": lambda dt: f"{dt.hour:02d}",
    "m": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: f"{dt.second:02d}",
    "f": lambda dt: f"{dt.microsecond // 1000:03d}",
}


def format_date(moment: datetime, layout: str) -> str:
    """Render *moment* according to the mini-language *layout*.

    Args:
        moment: The datetime to render.
        layout: Format string, e.g. ``"Y-M-D"`` or ``"YMD_hms.f"``.

    Returns:
        The rendered string.
    """
    return "".join(
        DATE_TOKENS[char](moment) if char in DATE_TOKENS else char for char in layout
    )


def convert_date_layout(layout: str) -> str:
    """Expand *layout* against :data:`REFERENCE_TIME`.

    Useful for previews and help text, e.g.
    ``convert_date_layout("YMD_hms.f") == "20060102_150405.000"``.
    """
    return format_date(REFERENCE_TIME, layout)
