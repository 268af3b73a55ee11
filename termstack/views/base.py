"""View contract, the text leaf view and the child-collection base.

Every view supports the two-pass layout protocol:

1. ``measure(renderer, max_size)`` — the size the view wants, never larger
   than *max_size*, without producing output.
2. ``render(renderer, region)`` — output confined to *region*.

A view whose visible content changes outside a render pass (new data
arrived) calls ``notify_updated()``.  Layout views forward their
children's notifications, so an observer on the root sees every change
in the tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from termstack.models.geometry import Size

if TYPE_CHECKING:
    from termstack.core.region import Region
    from termstack.rendering.formatter import SpanFormatter
    from termstack.rendering.renderer import ConsoleRenderer

UpdateHandler = Callable[["View"], None]


class View(ABC):
    """A node in the view tree."""

    def __init__(self) -> None:
        self._update_handlers: list[UpdateHandler] = []

    @abstractmethod
    def measure(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        """Return the size this view wants within *max_size*."""

    @abstractmethod
    def render(self, renderer: ConsoleRenderer, region: Region) -> None:
        """Write this view's content into *region*."""

    # ------------------------------------------------------------------
    # Update notification
    # ------------------------------------------------------------------

    def add_update_handler(self, handler: UpdateHandler) -> None:
        """Call *handler* with this view whenever its content changes."""
        if handler is None:
            raise ValueError("handler must not be None")
        if handler not in self._update_handlers:
            self._update_handlers.append(handler)

    def remove_update_handler(self, handler: UpdateHandler) -> None:
        try:
            self._update_handlers.remove(handler)
        except ValueError:
            pass

    def notify_updated(self) -> None:
        for handler in list(self._update_handlers):
            handler(self)


class ContentView(View):
    """A block of text, wrapped to the available width.

    *content* may be a Rich ``Text`` or any value; non-text values are
    turned into a span by the renderer's formatter at measure/render time.
    """

    def __init__(self, content: Any = "") -> None:
        super().__init__()
        self._content = content

    @classmethod
    def create(cls, value: Any, formatter: SpanFormatter) -> ContentView:
        """Build a view showing *value* as formatted by *formatter*."""
        if formatter is None:
            raise ValueError("formatter must not be None")
        return cls(formatter.to_span(value))

    @property
    def content(self) -> Any:
        return self._content

    def update(self, content: Any) -> None:
        """Replace the content and tell observers."""
        self._content = content
        self.notify_updated()

    def span(self, renderer: ConsoleRenderer) -> Text:
        return renderer.formatter.to_span(self._content)

    def measure(self, renderer: ConsoleRenderer, max_size: Size) -> Size:
        if renderer is None:
            raise ValueError("renderer must not be None")
        if max_size is None:
            raise ValueError("max_size must not be None")
        return renderer.measure_span(self.span(renderer), max_size)

    def render(self, renderer: ConsoleRenderer, region: Region) -> None:
        if renderer is None:
            raise ValueError("renderer must not be None")
        if region is None:
            raise ValueError("region must not be None")
        renderer.render_to_region(self.span(renderer), region)

    def __repr__(self) -> str:
        return f"ContentView({self._content!r})"


class LayoutView(View):
    """A view that owns an ordered collection of child views."""

    def __init__(self) -> None:
        super().__init__()
        self._children: list[View] = []

    @property
    def children(self) -> tuple[View, ...]:
        """Children in the order layout visits them."""
        return tuple(self._children)

    def add(self, child: View) -> None:
        if child is None:
            raise ValueError("child must not be None")
        self._children.append(child)
        child.add_update_handler(self._on_child_updated)

    def remove(self, child: View) -> bool:
        try:
            self._children.remove(child)
        except ValueError:
            return False
        # The same view may be listed more than once.
        if child not in self._children:
            child.remove_update_handler(self._on_child_updated)
        return True

    def clear(self) -> None:
        for child in self._children:
            child.remove_update_handler(self._on_child_updated)
        self._children.clear()

    def _on_child_updated(self, child: View) -> None:
        self.notify_updated()
