"""RenderLoop — re-renders a view tree when it reports an update.

The loop is the single thread of control for layout.  Views only flag
that they changed; the loop measures and renders the root under
``self.lock``.  Sources that emit from other threads should emit under the
same lock (``Subject(lock=loop.lock)``) so an update never lands in the
middle of a render pass.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from termstack.config import settings
from termstack.models.geometry import Size
from termstack.rendering.renderer import ConsoleRenderer

if TYPE_CHECKING:
    from termstack.core.region import Region
    from termstack.views.base import View

logger = logging.getLogger(__name__)


class RenderLoop:
    """Drives measure/render passes for one root view.

    Parameters
    ----------
    view:
        Root of the view tree.
    region:
        Where the root is rendered on every pass.
    renderer:
        Render backend.  A default ``ConsoleRenderer`` is created if not
        provided.
    lock:
        Lock held during every pass.  Share it with the data sources.
    """

    def __init__(
        self,
        view: View,
        region: Region,
        renderer: ConsoleRenderer | None = None,
        lock: threading.RLock | None = None,
    ) -> None:
        if view is None:
            raise ValueError("view must not be None")
        if region is None:
            raise ValueError("region must not be None")
        self.view = view
        self.region = region
        self.renderer = renderer or ConsoleRenderer()
        self.lock = lock if lock is not None else threading.RLock()
        self.render_count = 0
        self._dirty = threading.Event()
        self._dirty.set()
        self._stopped = threading.Event()
        view.add_update_handler(self._on_updated)

    def _on_updated(self, view: View) -> None:
        self._dirty.set()

    @property
    def dirty(self) -> bool:
        """Whether the view changed since the last render pass."""
        return self._dirty.is_set()

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def render_once(self) -> Size:
        """Measure the root against the region, then render it there."""
        with self.lock:
            self._dirty.clear()
            size = self.view.measure(
                self.renderer,
                Size(width=self.region.width, height=self.region.height),
            )
            self.renderer.render(self.view, self.region)
            self.render_count += 1
        return size

    def render_if_dirty(self) -> bool:
        if not self._dirty.is_set():
            return False
        self.render_once()
        return True

    # ------------------------------------------------------------------
    # Continuous mode
    # ------------------------------------------------------------------

    def run(
        self,
        *,
        refresh_hz: float | None = None,
        until: Callable[[], bool] | None = None,
        animate: bool = False,
    ) -> None:
        """Render whenever the view is dirty, until stopped.

        Parameters
        ----------
        refresh_hz:
            Upper bound on passes per second.  Defaults to
            ``settings.refresh_hz``.
        until:
            Predicate checked after every tick; the loop ends (after a
            final pass if anything is pending) once it returns ``True``.
        animate:
            Render on every tick even without updates, for views such as
            spinners whose frames advance per render.
        """
        hz = refresh_hz if refresh_hz is not None else settings.refresh_hz
        interval = 1.0 / max(hz, 0.1)
        self._stopped.clear()
        logger.info("Render loop started at %.1f Hz", hz)

        try:
            while not self._stopped.is_set():
                started = time.monotonic()
                if animate or self._dirty.is_set():
                    self.render_once()
                if until is not None and until():
                    self.render_if_dirty()
                    break
                remaining = interval - (time.monotonic() - started)
                if remaining > 0:
                    self._stopped.wait(remaining)
        except KeyboardInterrupt:
            # Final frame on exit
            self.render_once()
        finally:
            logger.info("Render loop stopped after %d pass(es)", self.render_count)

    def stop(self) -> None:
        self._stopped.set()

    def close(self) -> None:
        """Stop listening to the view."""
        self.stop()
        self.view.remove_update_handler(self._on_updated)

    def __enter__(self) -> RenderLoop:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
