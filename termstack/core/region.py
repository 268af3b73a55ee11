"""Region — an axis-aligned rectangle in terminal cell coordinates.

A region is immutable.  Omitted dimensions are resolved once, at
construction, against the current terminal (see ``termstack.core.terminal``):
the fallback size from settings when output is redirected, the window size
otherwise.

Two shared variants exist:

- ``Region.entire_terminal()`` re-reads the terminal size on every access,
  so it follows resizes.
- ``Region.scrolling()`` is anchored at the cursor position when first
  requested, cached for the life of the process, never overwritten on
  render and effectively infinitely tall.
"""

from __future__ import annotations

import sys

from termstack.config import settings
from termstack.core.terminal import get_terminal
from termstack.models.geometry import Size


class RegionOutOfRangeError(ValueError):
    """Raised when a region is constructed with a negative coordinate or size."""


def _resolve_width() -> int:
    terminal = get_terminal()
    return settings.fallback_width if terminal.is_output_redirected else terminal.width


def _resolve_height() -> int:
    terminal = get_terminal()
    return settings.fallback_height if terminal.is_output_redirected else terminal.height


class Region:
    """A rectangle a view may render into.

    Parameters
    ----------
    left, top:
        Cell coordinates of the top-left corner.
    width, height:
        Extent in cells.  ``None`` resolves against the current terminal.
    is_overwritten_on_render:
        Whether rendering replaces the region's previous content (padding
        and blanking unused cells) rather than appending to it.
    """

    def __init__(
        self,
        left: int,
        top: int,
        width: int | None = None,
        height: int | None = None,
        is_overwritten_on_render: bool = True,
    ) -> None:
        for name, value in (
            ("height", height),
            ("width", width),
            ("top", top),
            ("left", left),
        ):
            if value is not None and value < 0:
                raise RegionOutOfRangeError(f"{name} must be non-negative, got {value}")

        self._height = height if height is not None else _resolve_height()
        self._width = width if width is not None else _resolve_width()
        self._top = top
        self._left = left
        self._is_overwritten_on_render = is_overwritten_on_render

    @classmethod
    def from_size(cls, left: int, top: int, size: Size) -> Region:
        """Build a region at ``(left, top)`` with the extent of *size*."""
        if size is None:
            raise ValueError("size must not be None")
        return cls(left, top, size.width, size.height)

    # ------------------------------------------------------------------
    # Shared variants
    # ------------------------------------------------------------------

    @staticmethod
    def entire_terminal() -> Region:
        """The whole terminal window, tracking resizes."""
        return ENTIRE_TERMINAL

    @staticmethod
    def scrolling() -> Region:
        """The cached, cursor-anchored region for append-only output."""
        global _scrolling
        if _scrolling is None:
            _scrolling = ScrollingTerminalRegion()
        return _scrolling

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def top(self) -> int:
        return self._top

    @property
    def left(self) -> int:
        return self._left

    @property
    def bottom(self) -> int:
        return self.top + self.height - 1

    @property
    def right(self) -> int:
        return self.left + self.width - 1

    @property
    def is_overwritten_on_render(self) -> bool:
        return self._is_overwritten_on_render

    def __str__(self) -> str:
        return f"{self.width}w × {self.height}h @ {self.left}x, {self.top}y"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(left={self.left}, top={self.top}, "
            f"width={self.width}, height={self.height}, "
            f"is_overwritten_on_render={self.is_overwritten_on_render})"
        )


class EntireTerminalRegion(Region):
    """The full terminal window.  Size is re-evaluated on every access."""

    def __init__(self) -> None:
        super().__init__(left=0, top=0, width=0, height=0)

    @property
    def height(self) -> int:
        return _resolve_height()

    @property
    def width(self) -> int:
        return _resolve_width()


class ScrollingTerminalRegion(Region):
    """Append-only output starting at the cursor, with no bottom edge."""

    def __init__(self) -> None:
        terminal = get_terminal()
        redirected = terminal.is_output_redirected
        super().__init__(
            left=0 if redirected else terminal.cursor_left,
            top=0 if redirected else terminal.cursor_top,
            width=_resolve_width(),
            height=sys.maxsize,
            is_overwritten_on_render=False,
        )


ENTIRE_TERMINAL: Region = EntireTerminalRegion()

_scrolling: Region | None = None


def reset_scrolling_region() -> None:
    """Forget the cached scrolling region so the next request re-anchors it."""
    global _scrolling
    _scrolling = None
