"""Tests for the confirmation prompt."""

import pytest
from rich.console import Console

from renamer.cli.utils.prompt_utils import confirm_action


@pytest.mark.parametrize(
    ("answer", "expected"),
    [
        ("y", True),
        ("YES", True),
        ("  yes  ", True),
        ("", True),
        ("n", False),
        ("no", False),
        ("maybe", False),
    ],
)
def test_confirm_action_answers(answer: str, expected: bool, mocker) -> None:
    console = Console()
    mocker.patch.object(console, "input", return_value=answer)
    assert confirm_action("Continue? ", console=console) is expected


def test_blank_answer_uses_default(mocker) -> None:
    console = Console()
    mocker.patch.object(console, "input", return_value="")
    assert confirm_action("Continue? ", default_yes=False, console=console) is False


def test_end_of_input_is_refusal(mocker) -> None:
    console = Console()
    mocker.patch.object(console, "input", side_effect=EOFError)
    assert confirm_action("Continue? ", console=console) is False
