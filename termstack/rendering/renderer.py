"""ConsoleRenderer — measures spans and writes them into regions.

Views call ``render_to_region`` during a render pass; the renderer
collects those writes and ``flush()`` composes them row by row onto a Rich
``Console``, so children laid out side by side end up on the same line.
``render(view, region)`` runs a pass and flushes it.

On a real terminal, rows of a region that is overwritten on render are
positioned absolutely, padded to the region's width, and the rows the span
does not reach are blanked.  Rows of other regions (the scrolling region)
and all rows on redirected output or captured consoles are appended in
order at the cursor.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from rich.console import Console
from rich.control import Control
from rich.text import Text

from termstack.models.geometry import Size
from termstack.rendering.formatter import SpanFormatter

if TYPE_CHECKING:
    from termstack.core.region import Region
    from termstack.views.base import View


class ConsoleRenderer:
    """Render backend shared by every view in a tree.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    formatter:
        Span formatter handed to views and visualizers.
    """

    def __init__(
        self,
        console: Console | None = None,
        formatter: SpanFormatter | None = None,
    ) -> None:
        self.console = console or Console()
        self.formatter = formatter or SpanFormatter()
        self._pending: list[tuple[Region, list[Text]]] = []

    # ------------------------------------------------------------------
    # View entry points
    # ------------------------------------------------------------------

    def measure(self, view: View, max_size: Size) -> Size:
        if view is None:
            raise ValueError("view must not be None")
        return view.measure(self, max_size)

    def render(self, view: View, region: Region) -> None:
        """Render *view* into *region* and write the result out."""
        if view is None:
            raise ValueError("view must not be None")
        view.render(self, region)
        self.flush()

    # ------------------------------------------------------------------
    # Span primitives
    # ------------------------------------------------------------------

    def _wrap(self, span: Text, width: int) -> list[Text]:
        return list(span.wrap(self.console, width, overflow="crop"))

    def measure_span(self, span: Text, max_size: Size) -> Size:
        """Size of *span* once wrapped to ``max_size.width``, clipped to *max_size*."""
        if span is None:
            raise ValueError("span must not be None")
        if max_size is None:
            raise ValueError("max_size must not be None")
        if max_size.width <= 0 or max_size.height <= 0:
            return Size(width=0, height=0)

        lines = self._wrap(span, max_size.width)
        width = max((line.cell_len for line in lines), default=0)
        return Size(
            width=min(width, max_size.width),
            height=min(len(lines), max_size.height),
        )

    def render_to_region(self, span: Text, region: Region) -> None:
        """Queue *span* for *region*, cropped so it never leaves the region."""
        if span is None:
            raise ValueError("span must not be None")
        if region is None:
            raise ValueError("region must not be None")
        if region.width <= 0 or region.height <= 0:
            return

        lines = self._wrap(span, region.width)[: region.height]
        for line in lines:
            line.truncate(region.width, overflow="crop")
        self._pending.append((region, lines))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def flush(self) -> None:
        """Compose every queued write into rows and print them."""
        pending, self._pending = self._pending, []
        if not pending:
            return

        terminal = self.console.is_terminal
        positioned: dict[int, list[tuple[int, Text]]] = defaultdict(list)
        appended: dict[int, list[tuple[int, Text]]] = defaultdict(list)

        for region, lines in pending:
            # Regions that are not overwritten append at the real cursor.
            if not (terminal and region.is_overwritten_on_render):
                for i, line in enumerate(lines):
                    appended[region.top + i].append((region.left, line))
                continue

            for i, line in enumerate(lines):
                line.pad_right(region.width - line.cell_len)
                positioned[region.top + i].append((region.left, line))
            # Rows below the bottom of the window cannot be painted.
            last_row = min(region.top + region.height, self.console.size.height)
            blank = Text(" " * region.width)
            for row in range(region.top + len(lines), last_row):
                positioned[row].append((region.left, blank))

        for row in sorted(positioned):
            segments = sorted(positioned[row], key=lambda s: s[0])
            self.console.control(Control.move_to(segments[0][0], row))
            self.console.print(_compose(segments, segments[0][0]), end="", soft_wrap=True)

        if appended:
            for row in range(min(appended), max(appended) + 1):
                segments = sorted(appended.get(row, []), key=lambda s: s[0])
                self.console.print(_compose(segments, 0), soft_wrap=True)


def _compose(segments: list[tuple[int, Text]], start: int) -> Text:
    """Join ``(column, text)`` segments of one row from *start*, filling gaps with spaces."""
    row = Text()
    column = start
    for left, text in segments:
        if left > column:
            row.append(" " * (left - column))
            column = left
        row.append(text)
        column += text.cell_len
    return row
