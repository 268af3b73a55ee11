"""Progress indicators — styles, visualizers and the reactive progress view.

A *style* pairs a ``ProgressStyleDefinition`` (borders, width policy) with
a *visualizer* that maps a ``(current, total)`` sample and an available
width to a span:

- bar        : ``round(ratio * width)`` fill characters
- percentage : whole-number percentage, right-aligned to the width
- spinner    : the next animation symbol, right-aligned to the width

Every visualizer is a pure function of its inputs except the spinner,
which advances its own rotation index on each call.  One call is one
frame, so the render cadence sets the animation speed.

``ProgressView.from_observable`` binds a style to a push-style source:
each emitted sample replaces the value held by the view and raises an
update, and the next render shows it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

from rich.cells import cell_len
from rich.text import Text

from termstack.core.reactive import CallbackObserver, Observable, SignalPolicy, Subscription
from termstack.models.geometry import Orientation, Size
from termstack.models.styles import (
    UNBOUNDED,
    BarStyleDefinition,
    ColumnDefinition,
    PercentStyleDefinition,
    ProgressStyleDefinition,
    SizeMode,
    SpinnerStyleDefinition,
)
from termstack.views.base import ContentView, View
from termstack.views.stack import StackLayoutView, UnsupportedLayoutError

if TYPE_CHECKING:
    from termstack.core.region import Region
    from termstack.rendering.formatter import SpanFormatter
    from termstack.rendering.renderer import ConsoleRenderer

logger = logging.getLogger(__name__)

Sample = tuple[int, int]

T = TypeVar("T")
V = TypeVar("V")
T_contra = TypeVar("T_contra", contravariant=True)


def calculate_ratio(current: float, total: float) -> float:
    """Completed fraction of *total*, clamped to ``[0, 1]``.

    A non-positive total counts as finished once anything has been done.
    """
    if total <= 0:
        return 1.0 if current > 0 else 0.0
    return min(max(current / total, 0.0), 1.0)


class ProgressVisualizer(Protocol[T_contra]):
    """Anything that can size and draw a progress value."""

    def get_target_width(self) -> int: ...

    def visualize(self, value: T_contra, render_width: int, formatter: SpanFormatter) -> Text: ...


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class ProgressStyle(ABC, Generic[T]):
    """Base for progress styles: a definition plus a visualizer."""

    def __init__(self, style_definition: ProgressStyleDefinition) -> None:
        if style_definition is None:
            raise ValueError("style_definition must not be None")
        self.style_definition = style_definition

    @abstractmethod
    def get_content_width(self) -> int:
        """Minimum width used by the ``SizeToContent`` policy."""

    @abstractmethod
    def visualize(self, value: T, render_width: int, formatter: SpanFormatter) -> Text:
        """Turn *value* into a span at most *render_width* cells wide."""

    def get_target_width(self) -> int:
        size = self.style_definition.size
        if size.size_mode == SizeMode.FIXED:
            return int(size.value)
        if size.size_mode == SizeMode.STAR:
            return UNBOUNDED
        if size.size_mode == SizeMode.SIZE_TO_CONTENT:
            return self.get_content_width()
        raise UnsupportedLayoutError(f"Size mode {size.size_mode!r} is not supported")

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def bar(size: int = 40, fill_char: str = "=") -> ProgressBarStyle:
        """A ``[=====     ]`` bar *size* cells wide."""
        return ProgressBarStyle(
            BarStyleDefinition(size=ColumnDefinition.fixed(size), fill_char=fill_char)
        )

    @staticmethod
    def percentage(with_border: bool = True) -> ProgressPercentTextStyle:
        """A ``[ 42%]`` readout, optionally without brackets."""
        if with_border:
            definition = PercentStyleDefinition()
        else:
            definition = PercentStyleDefinition.with_border("")
        return ProgressPercentTextStyle(definition)

    @staticmethod
    def spinner(*symbols: str) -> ProgressSpinnerStyle:
        """A rotating glyph.  Uses ``/ - \\ |`` when no symbols are given."""
        if symbols:
            return ProgressSpinnerStyle(SpinnerStyleDefinition(animation_symbols=symbols))
        return ProgressSpinnerStyle(SpinnerStyleDefinition())

    @staticmethod
    def from_definition(style_definition: ProgressStyleDefinition) -> ProgressStyle[Sample]:
        """Pick the style matching the concrete definition type."""
        if isinstance(style_definition, BarStyleDefinition):
            return ProgressBarStyle(style_definition)
        if isinstance(style_definition, PercentStyleDefinition):
            return ProgressPercentTextStyle(style_definition)
        if isinstance(style_definition, SpinnerStyleDefinition):
            return ProgressSpinnerStyle(style_definition)
        raise ValueError(f"No progress style for {type(style_definition).__name__}")


class ProgressBarStyle(ProgressStyle[Sample]):
    def __init__(self, style_definition: BarStyleDefinition) -> None:
        super().__init__(style_definition)
        self.fill_char = style_definition.fill_char

    def get_content_width(self) -> int:
        return 40

    def visualize(self, value: Sample, render_width: int, formatter: SpanFormatter) -> Text:
        ratio = calculate_ratio(*value)
        bar_length = max(0, round(ratio * render_width))
        return formatter.to_span(self.fill_char * bar_length)


class ProgressPercentTextStyle(ProgressStyle[Sample]):
    def get_content_width(self) -> int:
        return len("100%")

    def visualize(self, value: Sample, render_width: int, formatter: SpanFormatter) -> Text:
        ratio = calculate_ratio(*value)
        # Halves round away from zero.
        percent = (Decimal(str(ratio)) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return formatter.to_span(f"{percent}%".rjust(render_width))


class ProgressSpinnerStyle(ProgressStyle[Sample]):
    """Spinner visualizer.

    Holds the rotation index: every ``visualize`` call shows the current
    symbol and then advances, wrapping around the symbol sequence.  This
    is the one visualizer that is not a pure function.
    """

    def __init__(self, style_definition: SpinnerStyleDefinition) -> None:
        super().__init__(style_definition)
        self.symbols = style_definition.animation_symbols
        self.index = 0

    def get_content_width(self) -> int:
        return 1

    def visualize(self, value: Sample, render_width: int, formatter: SpanFormatter) -> Text:
        symbol = self.symbols[self.index]
        self.index = (self.index + 1) % len(self.symbols)
        alignment = " " * max(render_width - 1, 0)
        return formatter.to_span(f"{alignment}{symbol}")


class ProgressVisualizerAdapter(Generic[T, V]):
    """Feeds a style expecting ``V`` from samples of type ``T``.

    *converter* must be pure; the adapter adds no state of its own.
    """

    def __init__(self, target_style: ProgressStyle[V], converter: Callable[[T], V]) -> None:
        if target_style is None:
            raise ValueError("target_style must not be None")
        if converter is None:
            raise ValueError("converter must not be None")
        self.target_style = target_style
        self.converter = converter

    def get_target_width(self) -> int:
        return self.target_style.get_target_width()

    def visualize(self, value: T, render_width: int, formatter: SpanFormatter) -> Text:
        return self.target_style.visualize(self.converter(value), render_width, formatter)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


class ProgressContentView(View, Generic[T]):
    """Single-line view holding the latest sample from its source."""

    def __init__(self, visualizer: ProgressVisualizer[T]) -> None:
        super().__init__()
        if visualizer is None:
            raise ValueError("visualizer must not be None")
        self.visualizer = visualizer
        self.item: T | None = None
        self._subscription: Subscription | None = None

    def _actual_width(self, available: int) -> int:
        return max(0, min(self.visualizer.get_target_width(), available))

    def measure(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        if renderer is None:
            raise ValueError("renderer must not be None")
        if max_size is None:
            raise ValueError("max_size must not be None")
        return Size(width=self._actual_width(max_size.width), height=min(1, max(max_size.height, 0)))

    def render(self, renderer: ConsoleRenderer, region: Region) -> None:
        if renderer is None:
            raise ValueError("renderer must not be None")
        if region is None:
            raise ValueError("region must not be None")

        span = Text()
        if self.item is not None:
            span = self.visualizer.visualize(
                self.item, self._actual_width(region.width), renderer.formatter
            )
        renderer.render_to_region(span, region)

    def set_item(self, value: T) -> None:
        self.item = value
        self.notify_updated()

    def observe(
        self,
        observable: Observable[T],
        *,
        on_error: Callable[[BaseException], None] | None = None,
        on_completed: Callable[[], None] | None = None,
        policy: SignalPolicy | None = None,
    ) -> Subscription:
        if observable is None:
            raise ValueError("observable must not be None")
        observer = CallbackObserver(
            self.set_item,
            on_error=on_error,
            on_completed=on_completed,
            policy=policy,
            name=type(self).__name__,
        )
        self._subscription = observable.subscribe(observer)
        return self._subscription

    def dispose(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None


class ProgressView(View, Generic[T]):
    """Optional left border, progress content, optional right border.

    The horizontal stack holding the three parts is assembled on first
    measure or render.  Content updates are forwarded as this view's own.
    """

    def __init__(self, content: View, style_definition: ProgressStyleDefinition) -> None:
        super().__init__()
        if content is None:
            raise ValueError("content must not be None")
        if style_definition is None:
            raise ValueError("style_definition must not be None")
        self.content = content
        self.style_definition = style_definition
        self._layout = StackLayoutView(Orientation.HORIZONTAL)
        self._layout_initialized = False
        content.add_update_handler(self._on_content_updated)

    def _on_content_updated(self, view: View) -> None:
        self.notify_updated()

    def _ensure_initialized(self) -> None:
        if self._layout_initialized:
            return

        if self.style_definition.border_left:
            self._layout.add(ContentView(Text(self.style_definition.border_left)))
        self._layout.add(self.content)
        if self.style_definition.border_right:
            self._layout.add(ContentView(Text(self.style_definition.border_right)))

        self._layout_initialized = True
        logger.debug("Progress layout assembled with %d part(s)", len(self._layout.children))

    @property
    def value(self) -> Any:
        """The latest sample held by the content view, if any."""
        return getattr(self.content, "item", None)

    def get_target_width(self) -> int:
        """Border widths plus the style's target width."""
        visualizer = getattr(self.content, "visualizer", None)
        if visualizer is None:
            raise ValueError("content view has no visualizer to size against")
        content_width = visualizer.get_target_width()
        if content_width >= UNBOUNDED:
            return UNBOUNDED
        borders = cell_len(self.style_definition.border_left or "") + cell_len(
            self.style_definition.border_right or ""
        )
        return borders + content_width

    def measure(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        self._ensure_initialized()
        return self._layout.measure(renderer, max_size)

    def render(self, renderer: ConsoleRenderer, region: Region) -> None:
        self._ensure_initialized()
        self._layout.render(renderer, region)

    def dispose(self) -> None:
        """Detach the content view from its data source."""
        dispose = getattr(self.content, "dispose", None)
        if dispose is not None:
            dispose()

    @classmethod
    def from_observable(
        cls,
        observable: Observable[Any],
        style: ProgressStyle[Any],
        converter: Callable[[Any], Any] | None = None,
        *,
        on_error: Callable[[BaseException], None] | None = None,
        on_completed: Callable[[], None] | None = None,
        policy: SignalPolicy | None = None,
    ) -> ProgressView[Any]:
        """Build a progress view showing the latest sample from *observable*.

        *converter* maps each emitted value to the ``(current, total)``
        pair *style* expects; omit it when the source already emits pairs.
        ``on_error``, ``on_completed`` and ``policy`` are forwarded to the
        subscription.
        """
        if observable is None:
            raise ValueError("observable must not be None")
        if style is None:
            raise ValueError("style must not be None")

        visualizer: ProgressVisualizer[Any] = style
        if converter is not None:
            visualizer = ProgressVisualizerAdapter(style, converter)

        content: ProgressContentView[Any] = ProgressContentView(visualizer)
        content.observe(
            observable, on_error=on_error, on_completed=on_completed, policy=policy
        )
        return cls(content, style.style_definition)
