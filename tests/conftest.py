"""Shared test fixtures for termstack."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterator

import pytest
from rich.console import Console
from rich.text import Text

from termstack.core.region import Region, reset_scrolling_region
from termstack.core.terminal import FixedTerminal, use_terminal
from termstack.models.geometry import Size
from termstack.rendering.renderer import ConsoleRenderer
from termstack.views.base import View


# ---------------------------------------------------------------------------
# Terminal isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def fixed_terminal() -> Iterator[FixedTerminal]:
    """Every test runs against an 80x24 interactive terminal with the cursor at the origin."""
    terminal = FixedTerminal(width=80, height=24)
    reset_scrolling_region()
    with use_terminal(terminal):
        yield terminal
    reset_scrolling_region()


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


class RecordingRenderer(ConsoleRenderer):
    """ConsoleRenderer that also records every ``render_to_region`` call."""

    def __init__(self, console: Console | None = None) -> None:
        super().__init__(console=console or make_console())
        self.calls: list[tuple[str, Region]] = []

    def render_to_region(self, span: Text, region: Region) -> None:
        self.calls.append((span.plain, region))
        super().render_to_region(span, region)

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.calls]

    @property
    def output(self) -> str:
        return self.console.file.getvalue()


def make_console(width: int = 80, height: int = 24, terminal: bool = False) -> Console:
    """A Rich console writing into a StringIO, without colour."""
    return Console(
        file=io.StringIO(),
        width=width,
        height=height,
        force_terminal=terminal,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def console_factory() -> Callable[..., Console]:
    """Factory fixture: build a captured console of a chosen size."""
    return make_console


@pytest.fixture
def renderer() -> RecordingRenderer:
    """Provide a recording renderer over an 80-column captured console."""
    return RecordingRenderer()


# ---------------------------------------------------------------------------
# Test views
# ---------------------------------------------------------------------------


class BlockView(View):
    """A view that always asks for a fixed size and records where it was drawn."""

    def __init__(self, name: str, width: int, height: int) -> None:
        super().__init__()
        self.name = name
        self.size = Size(width=width, height=height)
        self.measure_calls: list[Size] = []
        self.rendered: list[Region] = []

    def measure(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        self.measure_calls.append(max_size)
        return self.size

    def render(self, renderer: ConsoleRenderer, region: Region) -> None:
        self.rendered.append(region)

    def __repr__(self) -> str:
        return f"BlockView({self.name!r})"


@pytest.fixture
def make_block() -> Callable[..., BlockView]:
    """Factory fixture: build a BlockView with sensible defaults."""

    def _factory(name: str = "block", width: int = 10, height: int = 1) -> BlockView:
        return BlockView(name, width, height)

    return _factory
