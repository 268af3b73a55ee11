"""Terminal geometry queries — the host terminal as seen by ``Region``.

``Region`` never talks to the console directly.  It asks the *current
terminal*, which is a ``ConsoleTerminal`` backed by Rich unless a delegate
has been installed with ``set_terminal`` / ``use_terminal``.  Tests and
non-interactive runs install a ``FixedTerminal`` to get deterministic
dimensions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, NonNegativeInt
from rich.console import Console

from termstack.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class TerminalInfo(Protocol):
    """Read-only view of the host terminal's geometry."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def is_output_redirected(self) -> bool: ...

    @property
    def cursor_left(self) -> int: ...

    @property
    def cursor_top(self) -> int: ...


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------


class ConsoleTerminal:
    """Terminal geometry read from a Rich ``Console``.

    Window dimensions are re-read on every access so that resizes are
    picked up.  Rich offers no cursor query, so the cursor is reported at
    the origin; scrolling output is appended at the real cursor by the
    renderer instead of being positioned.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @property
    def width(self) -> int:
        return self.console.size.width

    @property
    def height(self) -> int:
        return self.console.size.height

    @property
    def is_output_redirected(self) -> bool:
        return settings.force_redirected or not self.console.is_terminal

    @property
    def cursor_left(self) -> int:
        return 0

    @property
    def cursor_top(self) -> int:
        return 0


class FixedTerminal(BaseModel):
    """A terminal with fixed, caller-chosen geometry."""

    model_config = ConfigDict(frozen=True)

    width: NonNegativeInt = 100
    height: NonNegativeInt = 100
    is_output_redirected: bool = False
    cursor_left: NonNegativeInt = 0
    cursor_top: NonNegativeInt = 0


# ---------------------------------------------------------------------------
# Process-wide delegate
# ---------------------------------------------------------------------------

_delegate: TerminalInfo | None = None
_default: ConsoleTerminal | None = None


def get_terminal() -> TerminalInfo:
    """Return the installed delegate, or the Rich-backed default terminal."""
    global _default
    if _delegate is not None:
        return _delegate
    if _default is None:
        _default = ConsoleTerminal()
    return _default


def set_terminal(terminal: TerminalInfo) -> None:
    """Install *terminal* as the geometry source for every later query."""
    global _delegate
    if terminal is None:
        raise ValueError("terminal must not be None")
    _delegate = terminal
    logger.debug("Terminal delegate installed: %r", terminal)


def reset_terminal() -> None:
    """Drop any installed delegate and go back to the real console."""
    global _delegate
    _delegate = None


@contextmanager
def use_terminal(terminal: TerminalInfo) -> Iterator[TerminalInfo]:
    """Temporarily install *terminal*, restoring the previous delegate on exit."""
    global _delegate
    previous = _delegate
    set_terminal(terminal)
    try:
        yield terminal
    finally:
        _delegate = previous
