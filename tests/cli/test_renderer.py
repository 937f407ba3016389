"""Tests for the plan, summary and failure renderers."""

from pathlib import Path

from rich.console import Console

from renamer.cli.renderer import render_failures, render_plan, render_summary
from renamer.models.core import PlanStatus
from renamer.models.plan import RenamePlan


def make_console() -> Console:
    return Console(record=True, width=80, color_system=None)


def test_render_summary(tmp_path: Path) -> None:
    plan = RenamePlan(root_dir=tmp_path, renames={"x_a.jpg": "a.jpg", "x_b.jpg": "b.jpg"})
    console = make_console()

    render_summary(plan, console)

    output = console.export_text()
    assert "--- Summary ---" in output
    assert f"Path: {tmp_path}" in output
    assert "Number of files to rename: 2" in output


def test_render_plan_orders_by_original_name(tmp_path: Path) -> None:
    plan = RenamePlan(root_dir=tmp_path, renames={"1.txt": "z.txt", "2.txt": "a.txt"})
    console = make_console()

    render_plan(plan, console)

    lines = [line for line in console.export_text().splitlines() if line.strip()]
    assert len(lines) == 2
    assert str(tmp_path / "a.txt") in lines[0]
    assert str(tmp_path / "2.txt") in lines[0]
    assert str(tmp_path / "z.txt") in lines[1]


def test_render_plan_keeps_brackets_literal(tmp_path: Path) -> None:
    plan = RenamePlan(root_dir=tmp_path, renames={"[red]b.txt": "[bold]a.txt"})
    console = make_console()

    render_plan(plan, console)

    output = console.export_text()
    assert "[bold]a.txt" in output
    assert "[red]b.txt" in output


def test_render_failures_only_prints_failed(tmp_path: Path) -> None:
    plan = RenamePlan(root_dir=tmp_path, renames={"new_a.txt": "a.txt", "new_b.txt": "b.txt"})
    items = plan.items()
    items[0].status = PlanStatus.RENAMED
    items[1].status = PlanStatus.FAILED
    items[1].reason = "File exists"
    console = make_console()

    render_failures(items, console)

    output = console.export_text()
    assert "Failed to rename b.txt" in output
    assert "new_b.txt: File exists" in output
    assert "a.txt" not in output
