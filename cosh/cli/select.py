"""Interactive selection of a compose file and one of its services."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

import questionary
from questionary import Choice, Style
from rich.console import Console
from rich.markup import escape

from cosh.compose.services import is_error_choice, service_choices
from cosh.exceptions import SelectionAborted

BACK = "__back__"

custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
    ]
)


def _ask(question: questionary.Question):
    try:
        answer = question.unsafe_ask()
    except (KeyboardInterrupt, EOFError) as exc:
        raise SelectionAborted("user aborted") from exc
    if answer is None:
        raise SelectionAborted("user aborted")
    return answer


def select_compose_file(files: Sequence[Path], default: Optional[Path] = None) -> Path:
    question = questionary.select(
        "Docker Compose YAML",
        choices=[Choice(str(f), value=f) for f in files],
        default=default if default in files else None,
        style=custom_style,
    )
    return _ask(question)


def select_service(
    compose_file: Path,
    choices_for: Callable[[Path], list[str]] = service_choices,
) -> Optional[str]:
    """Ask for a service of compose_file.

    Choices are recomputed from the file on every call. Returns None when
    the user goes back to file selection.
    """
    names = choices_for(compose_file)
    choices = [Choice(name, value=name) for name in names]
    choices.append(Choice("← Back", value=BACK))
    answer = _ask(
        questionary.select(f"Services in {compose_file}", choices=choices, style=custom_style)
    )
    return None if answer == BACK else answer


def run_selection(
    files: Sequence[Path],
    console: Optional[Console] = None,
    choices_for: Callable[[Path], list[str]] = service_choices,
) -> tuple[Path, str]:
    """Loop until the user picks a file and a valid service.

    Picking the error placeholder or "Back" returns to file selection.

    Raises:
        SelectionAborted: If the user cancels either prompt
    """
    console = console or Console()
    current: Optional[Path] = None
    while True:
        current = select_compose_file(files, default=current)
        service = select_service(current, choices_for)
        if service is None:
            continue
        if is_error_choice(service):
            console.print(f"[yellow]{escape(service)}[/yellow]")
            continue
        return current, service
