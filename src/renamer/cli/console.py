"""Rich console setup for renamer commands.

``ConsoleManager`` hands each command a Console configured for the current
output: coloured by default, plain when ``--no-rich`` is given or
``RENAMER_NO_RICH`` is set (handy when piping the plan into other tools).
Rich tracebacks are routed to the same console.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any

from rich.console import Console
from rich.traceback import install as install_rich_traceback

__all__ = [
    "ConsoleManager",
    "rich_enabled",
]

NO_RICH_ENV = "RENAMER_NO_RICH"
_TRUTHY = {"1", "true", "yes"}


def rich_enabled() -> bool:
    """Return False when ``RENAMER_NO_RICH`` asks for plain output."""
    return os.getenv(NO_RICH_ENV, "0").lower() not in _TRUTHY


class ConsoleManager(AbstractContextManager):
    """Yield a Console for the duration of a command.

    Parameters
    ----------
    record:
        Keep a copy of everything printed (see ``Console.export_text``).
    force_use:
        ``True``/``False`` forces coloured or plain output; ``None`` reads
        ``RENAMER_NO_RICH``.
    console_kwargs:
        Extra keyword arguments for the Console.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self._record = record
        self._force_use = force_use
        self._console_kwargs = console_kwargs
        self.console: Console | None = None

    def _plain_options(self) -> dict[str, Any]:
        return {"color_system": None, "force_terminal": False, "emoji": False}

    def __enter__(self) -> Console:
        colour = rich_enabled() if self._force_use is None else self._force_use
        options = dict(self._console_kwargs)
        if not colour:
            options.update(self._plain_options())
        self.console = Console(record=self._record, **options)
        install_rich_traceback(show_locals=True, console=self.console)
        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            self.console.file.flush()
        return False
