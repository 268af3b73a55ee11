"""Views — the composable units of the layout engine.

Modules
-------
base
    ``View`` contract, text ``ContentView`` and the ``LayoutView`` child
    collection.
stack
    ``StackLayoutView`` and the newest-first ``ScrollableLayoutView``.
progress
    Progress styles, visualizers and the reactive ``ProgressView``.
"""

from termstack.views.base import ContentView, LayoutView, View
from termstack.views.progress import ProgressStyle, ProgressView
from termstack.views.stack import ScrollableLayoutView, StackLayoutView, UnsupportedLayoutError

__all__ = [
    "ContentView",
    "LayoutView",
    "ProgressStyle",
    "ProgressView",
    "ScrollableLayoutView",
    "StackLayoutView",
    "UnsupportedLayoutError",
    "View",
]
