"""CLI entry point for prnote."""

import typer

from prnote.cli.main import main_command

app = typer.Typer(
    name="prnote",
    help="prnote: AI-generated pull request descriptions",
    add_completion=False,
)

app.command()(main_command)


__all__ = [
    "app",
    "main_command",
]
