"""Interactive prompts used by CLI flows."""

from typing import Optional

from rich.console import Console

AFFIRMATIVE = {"y", "yes"}


def confirm_action(
    message: str, default_yes: bool = True, console: Optional[Console] = None
) -> bool:
    """Ask the user to confirm an action by reading one line from stdin.

    A blank answer counts as *default_yes*; otherwise only ``y``/``yes``
    (any case) confirm. End of input counts as a refusal.
    """
    console = console or Console()
    try:
        response = console.input(message)
    except EOFError:
        return False

    answer = response.strip().lower()
    if not answer:
        return default_yes
    return answer in AFFIRMATIVE
