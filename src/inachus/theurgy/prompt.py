"""
Prompt boundary between the workflow and the terminal.

The workflow only talks to :class:`Prompter`; :class:`ClickPrompter` is
the terminal implementation. Tests substitute a scripted prompter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence, TypeVar

import click

from ..utils import pad_right_ansi_aware

T = TypeVar("T")


class Prompter(ABC):
    """Request/response interaction with the user."""

    @abstractmethod
    def choose_one(self, label: str, options: Sequence[T]) -> T:
        """Return one element of ``options``."""

    @abstractmethod
    def read_text(self, label: str) -> str:
        """Return a line of text typed by the user."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; only an explicit yes returns True."""

    @abstractmethod
    def display_result(self, result: str) -> None:
        pass

    @abstractmethod
    def report_error(self, error: Exception) -> None:
        pass


class ClickPrompter(Prompter):
    """Numbered-menu prompts on top of click."""

    def choose_one(self, label: str, options: Sequence[T]) -> T:
        if not options:
            raise click.UsageError(f"{label} (no options available)")

        click.echo()
        click.secho(label, fg="cyan", bold=True)
        width = len(str(len(options)))
        for index, option in enumerate(options, start=1):
            number = click.style(f"{index}.", fg="bright_white")
            click.echo(f"  {pad_right_ansi_aware(number, width + 1)} {option}")

        choice = click.prompt(
            "  Choice",
            type=click.IntRange(1, len(options)),
            default=1 if len(options) == 1 else None,
        )
        return options[choice - 1]

    def read_text(self, label: str) -> str:
        return click.prompt(label, default="", show_default=False)

    def confirm(self, message: str) -> bool:
        click.secho(message, fg="yellow")
        return click.confirm("Do you want to proceed?", default=False)

    def display_result(self, result: str) -> None:
        click.echo()
        click.secho("Result:", fg="green")
        click.echo(result)

    def report_error(self, error: Exception) -> None:
        click.secho(f"ERROR: {error}", fg="red")
