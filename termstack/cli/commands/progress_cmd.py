"""``termstack progress`` — drive a progress view from a simulated job.

A worker thread pushes ``(current, total)`` samples into a ``Subject``;
the render loop redraws the progress view whenever a sample arrives.
"""

from __future__ import annotations

import threading
from enum import Enum

import typer
from rich.console import Console

from termstack.config import settings
from termstack.core.reactive import Subject
from termstack.core.region import Region
from termstack.rendering.loop import RenderLoop
from termstack.rendering.renderer import ConsoleRenderer
from termstack.views.progress import ProgressStyle, ProgressView

console = Console()


class StyleChoice(str, Enum):
    BAR = "bar"
    PERCENT = "percent"
    SPINNER = "spinner"


def _build_style(style: StyleChoice, width: int, fill_char: str) -> ProgressStyle:
    if style is StyleChoice.BAR:
        return ProgressStyle.bar(size=width, fill_char=fill_char)
    if style is StyleChoice.PERCENT:
        return ProgressStyle.percentage(with_border=True)
    return ProgressStyle.spinner()


def simulate_job(
    samples: Subject[tuple[int, int]],
    total: int,
    delay: float,
    stop: threading.Event,
) -> None:
    """Emit ``(done, total)`` for every unit of work, then complete.

    Returns early, still completing *samples*, once *stop* is set.
    """
    for done in range(total + 1):
        if stop.is_set():
            break
        samples.on_next((done, total))
        stop.wait(delay)
    samples.on_completed()


def progress_cmd(
    style: StyleChoice = typer.Option(
        StyleChoice.BAR,
        "--style",
        "-s",
        help="Progress style to display.",
        case_sensitive=False,
    ),
    total: int = typer.Option(
        50,
        "--total",
        "-t",
        min=1,
        help="Number of work units in the simulated job.",
    ),
    delay: float = typer.Option(
        0.05,
        "--delay",
        "-d",
        min=0.0,
        help="Seconds between progress samples.",
    ),
    width: int = typer.Option(
        40,
        "--width",
        "-w",
        min=1,
        help="Bar width in cells (bar style only).",
    ),
    fill_char: str = typer.Option(
        "=",
        "--fill",
        help="Fill character (bar style only).",
    ),
    refresh_hz: float = typer.Option(
        settings.refresh_hz,
        "--refresh",
        "-r",
        help="Refresh rate in Hz.",
    ),
) -> None:
    """Show a progress indicator for a simulated job."""
    try:
        progress_style = _build_style(style, width, fill_char)
    except ValueError as exc:
        console.print(f"[bold red]Invalid style:[/bold red] {exc}")
        raise typer.Exit(code=1)

    lock = threading.RLock()
    samples: Subject[tuple[int, int]] = Subject(lock=lock)
    view = ProgressView.from_observable(samples, progress_style)

    if console.is_terminal:
        console.clear()
        region = Region(0, 0, console.width, 1)
    else:
        region = Region.scrolling()

    stop = threading.Event()
    worker = threading.Thread(
        target=simulate_job,
        args=(samples, total, delay, stop),
        name="termstack-progress",
        daemon=True,
    )

    with RenderLoop(view, region, ConsoleRenderer(console=console), lock=lock) as loop:
        worker.start()
        try:
            loop.run(
                refresh_hz=refresh_hz,
                until=lambda: samples.is_stopped,
                animate=style is StyleChoice.SPINNER,
            )
        finally:
            stop.set()
    worker.join()

    if console.is_terminal:
        console.print()
    if samples.is_stopped and view.value == (total, total):
        console.print(f"[green]Done:[/green] {total}/{total}")
    else:
        done = view.value[0] if view.value is not None else 0
        console.print(f"[yellow]Interrupted:[/yellow] {done}/{total}")
