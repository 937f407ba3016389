"""Apply engine for rename plans.

Executes a finalized RenamePlan:

- dry run: prints every ``old ➡️  new`` pair and a summary, touches nothing;
- live run: optionally asks for confirmation, then renames each item; an item whose
  destination is another item's source waits until that source has moved.

A failed rename is reported and the batch continues; there is no rollback.
"""

import logging
import time as time_mod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from rich.console import Console

from renamer.cli.renderer import render_failures, render_plan, render_summary
from renamer.cli.utils.prompt_utils import confirm_action
from renamer.fs.operations import safe_rename
from renamer.models.config import RenameConfig
from renamer.models.core import PlanStatus
from renamer.models.plan import RenamePlan, RenamePlanItem

logger = logging.getLogger(__name__)

CONFIRM_MESSAGE = "Do you want to continue? (Y/n): "


@dataclass
class ApplyResult:
    """Result of applying a rename plan."""

    success_count: int = 0
    failures: List[RenamePlanItem] = field(default_factory=list)
    items: List[RenamePlanItem] = field(default_factory=list)
    dry_run: bool = False
    cancelled: bool = False
    duration: float = 0.0

    @property
    def failed(self) -> int:
        return len(self.failures)


def execution_order(items: List[RenamePlanItem]) -> List[RenamePlanItem]:
    """Order *items* so each one runs after the item vacating its destination.

    Items are taken in waves: an item is ready once no remaining item still
    renames away from its destination. Items left in a cycle keep their
    original order and fail on the existing destination.
    """
    ordered: List[RenamePlanItem] = []
    pending = list(items)
    while pending:
        sources = {item.source for item in pending}
        ready = [item for item in pending if item.destination not in sources]
        if not ready:
            ordered.extend(pending)
            break
        ordered.extend(ready)
        pending = [item for item in pending if item.destination in sources]
    return ordered


def apply_plan(
    plan: RenamePlan,
    config: RenameConfig,
    *,
    console: Optional[Console] = None,
    confirm: Optional[Callable[[str], bool]] = None,
) -> ApplyResult:
    """Apply (or preview) a rename plan.

    Args:
        plan: The plan to execute.
        config: Run options; ``dry_run`` and ``yes`` are honoured here.
        console: Console used for all output.
        confirm: Callback asked before renaming when ``yes`` is False. Receives
            the prompt text and returns True to proceed. Defaults to an
            interactive stdin prompt where a blank answer means yes.

    Returns:
        ApplyResult with the number of successful renames and the failed items.
    """
    console = console or Console()
    items = plan.items()

    if config.dry_run:
        render_summary(plan, console)
        console.print("--- Dry run mode, will not rename the files ---", style="yellow")
        render_plan(plan, console)
        return ApplyResult(items=items, dry_run=True)

    if not config.yes:
        render_summary(plan, console)
        ask = confirm or (lambda message: confirm_action(message, True, console))
        if not ask(CONFIRM_MESSAGE):
            console.print("Operation cancelled.")
            return ApplyResult(items=items, cancelled=True)

    start = time_mod.time()
    result = ApplyResult(items=items)
    for item in execution_order(items):
        try:
            safe_rename(item.source, item.destination)
        except OSError as e:
            item.status = PlanStatus.FAILED
            item.reason = str(e)
            result.failures.append(item)
            logger.debug("Rename failed %s -> %s: %s", item.source, item.destination, e)
            continue
        item.status = PlanStatus.RENAMED
        result.success_count += 1

    render_failures(result.failures, console)
    console.print(f"🍀 Successfully renamed {result.success_count} files", highlight=False)
    result.duration = time_mod.time() - start
    return result


__all__ = ["apply_plan", "execution_order", "ApplyResult"]
