"""Value models for termstack — geometry and progress style definitions."""

from termstack.models.geometry import Orientation, ScrollDirection, Size
from termstack.models.styles import (
    UNBOUNDED,
    BarStyleDefinition,
    ColumnDefinition,
    PercentStyleDefinition,
    ProgressStyleDefinition,
    SizeMode,
    SpinnerStyleDefinition,
)

__all__ = [
    "Orientation",
    "ScrollDirection",
    "Size",
    "UNBOUNDED",
    "BarStyleDefinition",
    "ColumnDefinition",
    "PercentStyleDefinition",
    "ProgressStyleDefinition",
    "SizeMode",
    "SpinnerStyleDefinition",
]
