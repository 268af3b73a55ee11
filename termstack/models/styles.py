"""Progress style definitions — borders plus a width policy.

A definition is a declarative, immutable description.  The behaviour that
turns a progress sample into text lives in ``termstack.views.progress``.
"""

from __future__ import annotations

import sys
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Target width of a style that claims all remaining space.
UNBOUNDED: int = sys.maxsize

DEFAULT_BAR_WIDTH = 40
DEFAULT_ANIMATION_SYMBOLS: tuple[str, ...] = ("/", "-", "\\", "|")


class SizeMode(str, Enum):
    """How a column resolves its target width."""

    FIXED = "fixed"
    STAR = "star"
    SIZE_TO_CONTENT = "size_to_content"


class ColumnDefinition(BaseModel):
    """A width policy: a literal width, all remaining space, or content-sized."""

    model_config = ConfigDict(frozen=True)

    size_mode: SizeMode
    value: float = 0.0

    @classmethod
    def fixed(cls, width: float) -> ColumnDefinition:
        if width < 0:
            raise ValueError(f"Fixed width must be non-negative, got {width}")
        return cls(size_mode=SizeMode.FIXED, value=width)

    @classmethod
    def star(cls, weight: float = 1.0) -> ColumnDefinition:
        return cls(size_mode=SizeMode.STAR, value=weight)

    @classmethod
    def size_to_content(cls) -> ColumnDefinition:
        return cls(size_mode=SizeMode.SIZE_TO_CONTENT)


class ProgressStyleDefinition(BaseModel):
    """Borders and width policy shared by every progress style.

    An empty or ``None`` border is not rendered at all.
    """

    model_config = ConfigDict(frozen=True)

    border_left: str | None = None
    border_right: str | None = None
    size: ColumnDefinition = Field(default_factory=ColumnDefinition.size_to_content)


class BarStyleDefinition(ProgressStyleDefinition):
    """A horizontal fill bar, 40 cells wide unless told otherwise."""

    border_left: str | None = "["
    border_right: str | None = "]"
    size: ColumnDefinition = Field(
        default_factory=lambda: ColumnDefinition.fixed(DEFAULT_BAR_WIDTH)
    )
    fill_char: str = "="

    @field_validator("fill_char")
    @classmethod
    def _single_cell(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"fill_char must be a single character, got {v!r}")
        return v


class PercentStyleDefinition(ProgressStyleDefinition):
    """A right-aligned whole-number percentage."""

    border_left: str | None = "["
    border_right: str | None = "]"

    @classmethod
    def with_border(cls, border: str) -> PercentStyleDefinition:
        """Use the same border text on both sides."""
        return cls(border_left=border, border_right=border)


class SpinnerStyleDefinition(ProgressStyleDefinition):
    """A rotating single glyph.  Symbols are shown in order and wrap around."""

    animation_symbols: tuple[str, ...] = DEFAULT_ANIMATION_SYMBOLS

    @field_validator("animation_symbols")
    @classmethod
    def _non_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("animation_symbols must contain at least one symbol")
        return v
