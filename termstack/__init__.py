"""termstack: a terminal view/layout engine with reactive progress views.

Views negotiate screen space through a two-pass protocol (measure, then
render into a ``Region``).  Stack layouts place children along an axis,
scrollable stacks keep the newest content in view, and progress views
redraw whenever their data source emits a new sample.
"""

__version__ = "0.1.0"
__description__ = "Terminal view/layout engine with stack layouts and reactive progress views"

from termstack.core.reactive import Subject
from termstack.core.region import Region
from termstack.models.geometry import Orientation, ScrollDirection, Size
from termstack.rendering.loop import RenderLoop
from termstack.rendering.renderer import ConsoleRenderer
from termstack.views import (
    ContentView,
    ProgressStyle,
    ProgressView,
    ScrollableLayoutView,
    StackLayoutView,
    View,
)

__all__ = [
    "ConsoleRenderer",
    "ContentView",
    "Orientation",
    "ProgressStyle",
    "ProgressView",
    "Region",
    "RenderLoop",
    "ScrollDirection",
    "ScrollableLayoutView",
    "Size",
    "StackLayoutView",
    "Subject",
    "View",
    "__version__",
]
