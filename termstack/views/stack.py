"""Stack layouts — children placed one after another along an axis.

``StackLayoutView`` walks its children in order, giving each one whatever
is left of the layout-axis budget.  The cross axis is never shared: every
child is offered the container's full cross extent.  Once the axis budget
is spent, remaining children are neither measured nor rendered.

``ScrollableLayoutView`` is a vertical stack that visits its newest child
first, so the newest content always gets space, and can be fed from a
push-style source that appends one child per emitted item.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from termstack.core.reactive import CallbackObserver, Observable, SignalPolicy, Subscription
from termstack.core.region import Region
from termstack.models.geometry import Orientation, ScrollDirection, Size
from termstack.rendering.formatter import SpanFormatter
from termstack.views.base import ContentView, LayoutView, View

if TYPE_CHECKING:
    from termstack.rendering.renderer import ConsoleRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnsupportedLayoutError(ValueError):
    """Raised when a layout is asked to resolve an unknown axis or anchor policy."""


class StackLayoutView(LayoutView):
    """Arranges children sequentially along one axis.

    Parameters
    ----------
    orientation:
        ``Orientation.VERTICAL`` (default) stacks top to bottom,
        ``Orientation.HORIZONTAL`` left to right.
    """

    def __init__(self, orientation: Orientation = Orientation.VERTICAL) -> None:
        super().__init__()
        self.orientation = orientation

    # ------------------------------------------------------------------
    # Measure
    # ------------------------------------------------------------------

    def measure(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        if renderer is None:
            raise ValueError("renderer must not be None")
        if max_size is None:
            raise ValueError("max_size must not be None")

        if self.orientation == Orientation.VERTICAL:
            return self._measure_vertical(renderer, max_size)
        if self.orientation == Orientation.HORIZONTAL:
            return self._measure_horizontal(renderer, max_size)
        raise UnsupportedLayoutError(f"Orientation {self.orientation!r} is not implemented")

    def _measure_vertical(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        max_width = 0
        total_height = 0
        height = max_size.height

        for index, child in enumerate(self.children):
            if height <= 0:
                logger.debug("Vertical budget spent; skipping %d child(ren)", len(self.children) - index)
                break
            size = child.measure(renderer, Size(width=max_size.width, height=height))
            consumed = max(0, min(height, size.height))
            height -= consumed
            total_height += consumed
            max_width = max(max_width, size.width)

        return Size(width=max_width, height=total_height)

    def _measure_horizontal(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        max_height = 0
        total_width = 0
        width = max_size.width

        for index, child in enumerate(self.children):
            if width <= 0:
                logger.debug("Horizontal budget spent; skipping %d child(ren)", len(self.children) - index)
                break
            size = child.measure(renderer, Size(width=width, height=max_size.height))
            consumed = max(0, min(width, size.width))
            width -= consumed
            total_width += consumed
            max_height = max(max_height, size.height)

        return Size(width=total_width, height=max_height)

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self, renderer: ConsoleRenderer, region: Region) -> None:
        if renderer is None:
            raise ValueError("renderer must not be None")
        if region is None:
            raise ValueError("region must not be None")

        if self.orientation == Orientation.VERTICAL:
            self._render_vertical(region, renderer)
        elif self.orientation == Orientation.HORIZONTAL:
            self._render_horizontal(region, renderer)
        else:
            raise UnsupportedLayoutError(f"Orientation {self.orientation!r} is not implemented")

    def _render_vertical(self, region: Region, renderer: ConsoleRenderer) -> None:
        left = region.left
        top = region.top
        width = region.width
        height = region.height

        for child in self.children:
            if height <= 0:
                break
            size = child.measure(renderer, Size(width=width, height=height))
            render_height = max(0, min(height, size.height))
            child.render(renderer, Region(left, top, width, render_height))
            top += render_height
            height -= render_height

    def _render_horizontal(self, region: Region, renderer: ConsoleRenderer) -> None:
        left = region.left
        top = region.top
        width = region.width
        height = region.height

        for child in self.children:
            if width <= 0:
                break
            size = child.measure(renderer, Size(width=width, height=height))
            render_width = max(0, min(width, size.width))
            child.render(renderer, Region(left, top, render_width, height))
            left += render_width
            width -= render_width


class ScrollableLayoutView(StackLayoutView):
    """A vertical stack that privileges its most recently added child.

    Children are visited newest first.  With ``ScrollDirection.DOWN`` they
    are placed top to bottom in that order, so the newest item sits at the
    top and the oldest scroll off the bottom.  With ``ScrollDirection.UP``
    the newest items are measured first (so they always get space) and
    then rendered in reverse, so the newest item lands at the bottom of
    the region, like a terminal scrolling as output grows.

    Children are never evicted: the collection grows for as long as the
    view is fed.
    """

    def __init__(self, scroll_direction: ScrollDirection = ScrollDirection.UP) -> None:
        super().__init__(Orientation.VERTICAL)
        self.scroll_direction = scroll_direction
        self._subscriptions: list[Subscription] = []

    @property
    def children(self) -> tuple[View, ...]:
        return tuple(reversed(self._children))

    def _render_vertical(self, region: Region, renderer: ConsoleRenderer) -> None:
        if self.scroll_direction == ScrollDirection.UP:
            self._render_scroll_up(region, renderer)
        elif self.scroll_direction == ScrollDirection.DOWN:
            super()._render_vertical(region, renderer)
        else:
            raise UnsupportedLayoutError(
                f"Scroll direction {self.scroll_direction!r} is not implemented"
            )

    def _render_scroll_up(self, region: Region, renderer: ConsoleRenderer) -> None:
        left = region.left
        top = region.top
        width = region.width
        height = region.height

        placed: list[tuple[int, View]] = []
        for child in self.children:
            if height <= 0:
                break
            size = child.measure(renderer, Size(width=width, height=height))
            render_height = max(0, min(height, size.height))
            height -= render_height
            placed.append((render_height, child))

        for render_height, child in reversed(placed):
            child.render(renderer, Region(left, top, width, render_height))
            top += render_height

    # ------------------------------------------------------------------
    # Reactive ingestion
    # ------------------------------------------------------------------

    def observe(
        self,
        observable: Observable[T],
        view_provider: Callable[[T], View],
        *,
        on_error: Callable[[BaseException], None] | None = None,
        on_completed: Callable[[], None] | None = None,
        policy: SignalPolicy | None = None,
    ) -> Subscription:
        """Append one child per item emitted by *observable*.

        Each item is turned into a view by *view_provider*, added as the
        newest child, and an update is raised.
        """
        if observable is None:
            raise ValueError("observable must not be None")
        if view_provider is None:
            raise ValueError("view_provider must not be None")

        def _append(item: T) -> None:
            self.add(view_provider(item))
            self.notify_updated()

        observer = CallbackObserver(
            _append,
            on_error=on_error,
            on_completed=on_completed,
            policy=policy,
            name=type(self).__name__,
        )
        subscription = observable.subscribe(observer)
        self._subscriptions.append(subscription)
        logger.info("%s subscribed to %r", type(self).__name__, observable)
        return subscription

    def dispose(self) -> None:
        """Detach from every data source this view observes."""
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()

    @classmethod
    def from_observable(
        cls,
        observable: Observable[T],
        scroll_direction: ScrollDirection = ScrollDirection.UP,
        view_provider: Callable[[T], View] | None = None,
        *,
        on_error: Callable[[BaseException], None] | None = None,
        on_completed: Callable[[], None] | None = None,
        policy: SignalPolicy | None = None,
    ) -> ScrollableLayoutView:
        """Build a scrollable stack fed by *observable*.

        Without a *view_provider*, each item is shown as plain text.
        ``on_error``, ``on_completed`` and ``policy`` are passed to
        ``observe``.
        """
        view = cls(scroll_direction)
        if view_provider is None:
            formatter = SpanFormatter()

            def view_provider(item: T) -> View:
                return ContentView.create(item, formatter)

        view.observe(
            observable,
            view_provider,
            on_error=on_error,
            on_completed=on_completed,
            policy=policy,
        )
        return view
