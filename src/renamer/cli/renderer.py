"""Renderer for CLI output.

Prints rename plans and apply failures through Rich. Lines are soft-wrapped
so long paths stay on one line and remain copy-pasteable.
"""

from typing import List

from rich.console import Console
from rich.markup import escape

from renamer.models.core import PlanStatus
from renamer.models.plan import RenamePlan, RenamePlanItem

ARROW = "➡️ "


def render_summary(plan: RenamePlan, console: Console | None = None) -> None:
    """Print the root path and the number of planned renames."""
    console = console or Console()
    console.print("\n--- Summary ---", style="bold", highlight=False)
    console.print(f"Path: {plan.root_dir}", markup=False, highlight=False, soft_wrap=True)
    console.print(f"Number of files to rename: {len(plan)}", highlight=False)


def render_plan(plan: RenamePlan, console: Console | None = None) -> None:
    """Print one ``source ➡️  destination`` line per item, ordered by original name."""
    console = console or Console()
    for item in plan.items():
        console.print(
            f"[cyan]{escape(str(item.source))}[/cyan] {ARROW} "
            f"[green]{escape(str(item.destination))}[/green]",
            highlight=False,
            soft_wrap=True,
        )


def render_failures(items: List[RenamePlanItem], console: Console | None = None) -> None:
    """Print one line per failed rename with its error."""
    console = console or Console()
    for item in items:
        if item.status != PlanStatus.FAILED:
            continue
        console.print(
            f"Failed to rename {item.source.name} {ARROW} {item.destination.name}: "
            f"{item.reason}",
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
