"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
catalog listing rows, and job progress lines.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import CommandStageError, FakeYouError
from .models.datatypes import Category, Voice


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    elif isinstance(exc, FakeYouError):
        typer.secho(
            f"{command_name} failed ({exc.failure_kind}): {exc}",
            fg=typer.colors.RED,
            err=True,
        )
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_category_list(categories: list[Category]) -> None:
    """Print category token, model type, and title rows sorted by title."""

    for category in sorted(categories, key=lambda item: (item.title.lower(), item.category_token)):
        typer.echo(f"{category.category_token}\t{category.model_type}\t{category.title}")


def echo_voice_list(voices: list[Voice]) -> None:
    """Print model token and title rows sorted by title."""

    for voice in sorted(voices, key=lambda item: (item.title.lower(), item.model_token)):
        typer.echo(f"{voice.model_token}\t{voice.title}")


class JobProgressIndicator:
    """Render one progress line per observed job status."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        self._command_name = command_name
        self._polls = 0

    def on_status(self, status: str) -> None:
        """Print one progress line for a polled job status."""

        self._polls += 1
        spinner = self._SPINNER_FRAMES[(self._polls - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} {spinner} poll={self._polls} "
            f"status={status}"
        )
