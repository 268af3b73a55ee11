"""Geometry value models shared by the measure and render passes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Orientation(str, Enum):
    """Axis along which a stack lays out its children."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class ScrollDirection(str, Enum):
    """Where newest content is anchored in a scrollable stack.

    ``UP`` pins the newest item to the bottom of the region, like a
    terminal scrolling upward as output grows.  ``DOWN`` pins it to the top.
    """

    UP = "up"
    DOWN = "down"


class Size(BaseModel):
    """A width/height pair, used both as a measurement and as a constraint."""

    model_config = ConfigDict(frozen=True)

    width: int
    height: int

    def swapped(self) -> Size:
        """Return the size with width and height exchanged."""
        return Size(width=self.height, height=self.width)
