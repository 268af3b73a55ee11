"""Main Typer application — imports and registers all CLI commands.

Entry point: ``termstack`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer

from termstack.cli.commands.progress_cmd import progress_cmd
from termstack.cli.commands.tail_cmd import tail_cmd
from termstack.config import settings

app = typer.Typer(
    name="termstack",
    help="termstack: terminal layout engine demos.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        settings.log_level,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="progress", help="Show a progress indicator for a simulated job.")(progress_cmd)
app.command(name="tail", help="Show the newest lines of a file in a fixed region.")(tail_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
