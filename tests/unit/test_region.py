"""Tests for Region geometry and its terminal-derived variants."""

from __future__ import annotations

import sys

import pytest

from termstack.config import settings
from termstack.core.region import (
    ENTIRE_TERMINAL,
    Region,
    RegionOutOfRangeError,
    reset_scrolling_region,
)
from termstack.core.terminal import FixedTerminal, use_terminal
from termstack.models.geometry import Size


class TestRegionGeometry:
    @pytest.mark.parametrize(
        "left,top,width,height",
        [(0, 0, 0, 0), (0, 0, 1, 1), (3, 5, 10, 2), (79, 23, 1, 1), (10, 20, 300, 400)],
    )
    def test_right_and_bottom_follow_fields(self, left, top, width, height):
        region = Region(left, top, width, height)
        assert region.right == left + width - 1
        assert region.bottom == top + height - 1

    @pytest.mark.parametrize(
        "kwargs,name",
        [
            ({"left": -1, "top": 0, "width": 1, "height": 1}, "left"),
            ({"left": 0, "top": -1, "width": 1, "height": 1}, "top"),
            ({"left": 0, "top": 0, "width": -1, "height": 1}, "width"),
            ({"left": 0, "top": 0, "width": 1, "height": -1}, "height"),
        ],
    )
    def test_negative_argument_rejected(self, kwargs, name):
        with pytest.raises(RegionOutOfRangeError, match=name):
            Region(**kwargs)

    def test_range_error_is_value_error(self):
        with pytest.raises(ValueError):
            Region(-5, 0, 1, 1)

    def test_default_is_overwritten(self):
        assert Region(0, 0, 1, 1).is_overwritten_on_render is True

    def test_from_size(self):
        region = Region.from_size(2, 3, Size(width=4, height=5))
        assert (region.left, region.top, region.width, region.height) == (2, 3, 4, 5)

    def test_from_size_requires_size(self):
        with pytest.raises(ValueError, match="size"):
            Region.from_size(0, 0, None)

    def test_str(self):
        assert str(Region(1, 2, 30, 4)) == "30w × 4h @ 1x, 2y"


class TestRegionSelfSizing:
    def test_omitted_dimensions_use_terminal(self):
        region = Region(0, 0)
        assert region.width == 80
        assert region.height == 24

    def test_redirected_output_uses_fallback(self):
        with use_terminal(FixedTerminal(width=80, height=24, is_output_redirected=True)):
            region = Region(0, 0)
        assert region.width == 100
        assert region.height == 100

    def test_fallback_comes_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "fallback_width", 132)
        monkeypatch.setattr(settings, "fallback_height", 50)
        with use_terminal(FixedTerminal(is_output_redirected=True)):
            region = Region(0, 0)
        assert (region.width, region.height) == (132, 50)

    def test_size_resolved_once_at_construction(self):
        region = Region(0, 0)
        with use_terminal(FixedTerminal(width=20, height=5)):
            assert region.width == 80
            assert region.height == 24

    def test_explicit_dimensions_win(self):
        region = Region(0, 0, 7, 3)
        assert (region.width, region.height) == (7, 3)


class TestEntireTerminal:
    def test_tracks_terminal_size(self):
        assert Region.entire_terminal() is ENTIRE_TERMINAL
        assert (ENTIRE_TERMINAL.width, ENTIRE_TERMINAL.height) == (80, 24)
        with use_terminal(FixedTerminal(width=120, height=40)):
            assert (ENTIRE_TERMINAL.width, ENTIRE_TERMINAL.height) == (120, 40)
            assert ENTIRE_TERMINAL.right == 119
            assert ENTIRE_TERMINAL.bottom == 39

    def test_origin_and_overwrite(self):
        assert (ENTIRE_TERMINAL.left, ENTIRE_TERMINAL.top) == (0, 0)
        assert ENTIRE_TERMINAL.is_overwritten_on_render is True


class TestScrollingRegion:
    def test_anchored_at_cursor(self):
        reset_scrolling_region()
        with use_terminal(FixedTerminal(width=60, height=20, cursor_left=4, cursor_top=7)):
            region = Region.scrolling()
        assert (region.left, region.top, region.width) == (4, 7, 60)

    def test_unbounded_and_appending(self):
        region = Region.scrolling()
        assert region.height == sys.maxsize
        assert region.is_overwritten_on_render is False

    def test_cached_for_process(self):
        first = Region.scrolling()
        with use_terminal(FixedTerminal(cursor_top=10)):
            second = Region.scrolling()
        assert first is second
        assert second.top == 0

    def test_reset_reanchors(self):
        Region.scrolling()
        reset_scrolling_region()
        with use_terminal(FixedTerminal(cursor_top=10)):
            assert Region.scrolling().top == 10

    def test_redirected_starts_at_origin(self):
        reset_scrolling_region()
        with use_terminal(
            FixedTerminal(is_output_redirected=True, cursor_left=3, cursor_top=9)
        ):
            region = Region.scrolling()
        assert (region.left, region.top, region.width) == (0, 0, 100)
