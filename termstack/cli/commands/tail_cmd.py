"""``termstack tail [FILE]`` — show the newest lines of a file or stdin.

Every line is pushed into a ``ScrollableLayoutView``; the view is then
rendered into a fixed-height region, so only the newest lines that fit
are shown.  ``--direction up`` puts the newest line at the bottom,
``--direction down`` at the top.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from termstack.core.reactive import Subject
from termstack.core.region import Region
from termstack.models.geometry import ScrollDirection
from termstack.rendering.loop import RenderLoop
from termstack.rendering.renderer import ConsoleRenderer
from termstack.views.stack import ScrollableLayoutView

console = Console()


def tail_cmd(
    path: Optional[Path] = typer.Argument(
        None,
        help="File to read.  Reads stdin when omitted or '-'.",
    ),
    direction: ScrollDirection = typer.Option(
        ScrollDirection.UP,
        "--direction",
        "-D",
        help="Where the newest line is anchored.",
        case_sensitive=False,
    ),
    height: int = typer.Option(
        10,
        "--height",
        "-n",
        min=1,
        help="Number of rows in the output region.",
    ),
) -> None:
    """Show the newest lines of a file in a fixed-height region."""
    if path is not None and str(path) != "-":
        if not path.exists():
            console.print(f"[bold red]File not found:[/bold red] {path}")
            raise typer.Exit(code=1)
        lines = path.read_text(encoding="utf-8").splitlines()
    else:
        lines = sys.stdin.read().splitlines()

    source: Subject[str] = Subject()
    view = ScrollableLayoutView.from_observable(source, scroll_direction=direction)

    region = Region(0, 0, console.width, height)
    if console.is_terminal:
        console.clear()

    with RenderLoop(view, region, ConsoleRenderer(console=console)) as loop:
        for line in lines:
            source.on_next(line)
        source.on_completed()
        loop.render_once()

    view.dispose()
