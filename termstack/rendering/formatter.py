"""Span formatting — plain values and markup into Rich ``Text``."""

from __future__ import annotations

from typing import Any

from rich.style import Style
from rich.text import Text


class SpanFormatter:
    """Builds displayable spans.

    ``to_span`` never interprets markup, so literal brackets (progress
    borders, log lines) survive unchanged.  Use ``parse_markup`` for
    ``[bold]...[/bold]`` style input.
    """

    def __init__(self, style: str | Style | None = None) -> None:
        self.style = style

    def to_span(self, value: Any, style: str | Style | None = None) -> Text:
        if isinstance(value, Text):
            return value
        text = "" if value is None else str(value)
        return Text(text, style=style or self.style or "")

    def parse_markup(self, markup: str) -> Text:
        return Text.from_markup(markup, style=self.style or "")
