"""Tests for ScrollableLayoutView — newest-first ordering, anchoring and ingestion."""

from __future__ import annotations

import logging

import pytest

from termstack.core.reactive import SignalPolicy, Subject
from termstack.core.region import Region
from termstack.models.geometry import ScrollDirection, Size
from termstack.views.base import ContentView
from termstack.views.stack import ScrollableLayoutView, UnsupportedLayoutError


def _scrollable(direction, blocks):
    view = ScrollableLayoutView(direction)
    for block in blocks:
        view.add(block)
    return view


class TestOrdering:
    def test_children_visited_newest_first(self, make_block):
        blocks = [make_block(f"c{i}") for i in range(1, 4)]
        view = _scrollable(ScrollDirection.UP, blocks)
        assert view.children == tuple(reversed(blocks))

    def test_default_direction_is_up(self):
        assert ScrollableLayoutView().scroll_direction == ScrollDirection.UP


class TestScrollUp:
    def test_last_k_children_with_newest_lowest(self, renderer, make_block):
        blocks = [make_block(f"c{i}", 10, 1) for i in range(1, 6)]
        view = _scrollable(ScrollDirection.UP, blocks)
        view.render(renderer, Region(0, 0, 20, 3))

        assert [b.rendered for b in blocks[:2]] == [[], []]
        tops = [b.rendered[0].top for b in blocks[2:]]
        assert tops == [0, 1, 2]

    def test_oldest_child_starved(self, renderer, make_block):
        old, mid, new = make_block("old", 5, 3), make_block("mid", 5, 2), make_block("new", 5, 2)
        view = _scrollable(ScrollDirection.UP, [old, mid, new])
        view.render(renderer, Region(0, 5, 20, 5))

        assert [(r.top, r.height) for r in old.rendered] == [(5, 1)]
        assert [(r.top, r.height) for r in mid.rendered] == [(6, 2)]
        assert [(r.top, r.height) for r in new.rendered] == [(8, 2)]

    def test_text_output_newest_at_bottom(self, renderer):
        view = ScrollableLayoutView(ScrollDirection.UP)
        for line in ("one", "two", "three", "four"):
            view.add(ContentView(line))
        renderer.render(view, Region(0, 0, 20, 2))
        assert renderer.output.splitlines() == ["three", "four"]


class TestScrollDown:
    def test_newest_at_top(self, renderer, make_block):
        blocks = [make_block(f"c{i}", 10, 1) for i in range(1, 6)]
        view = _scrollable(ScrollDirection.DOWN, blocks)
        view.render(renderer, Region(0, 0, 20, 3))

        assert blocks[4].rendered[0].top == 0
        assert blocks[3].rendered[0].top == 1
        assert blocks[2].rendered[0].top == 2
        assert blocks[1].rendered == [] and blocks[0].rendered == []

    def test_measure_uses_newest_first(self, renderer, make_block):
        old, new = make_block("old", 30, 4), make_block("new", 8, 2)
        view = _scrollable(ScrollDirection.DOWN, [old, new])
        assert view.measure(renderer, Size(width=80, height=3)) == Size(width=30, height=3)
        assert new.measure_calls[0] == Size(width=80, height=3)
        assert old.measure_calls[0] == Size(width=80, height=1)

    def test_unknown_direction_fails_on_render(self, renderer, make_block):
        view = _scrollable(ScrollDirection.DOWN, [make_block()])
        view.scroll_direction = "sideways"
        with pytest.raises(UnsupportedLayoutError):
            view.render(renderer, Region(0, 0, 10, 10))


class TestReactiveIngestion:
    def test_each_item_appends_a_child_and_notifies(self):
        source = Subject()
        view = ScrollableLayoutView.from_observable(source)
        updates = []
        view.add_update_handler(updates.append)

        source.on_next("alpha")
        source.on_next("beta")

        assert len(view.children) == 2
        assert [c.content.plain for c in view.children] == ["beta", "alpha"]
        assert len(updates) == 2

    def test_custom_view_provider(self, make_block):
        source = Subject()
        view = ScrollableLayoutView.from_observable(
            source,
            ScrollDirection.DOWN,
            view_provider=lambda n: make_block(str(n), 5, n),
        )
        source.on_next(2)
        source.on_next(3)
        assert [c.size.height for c in view.children] == [3, 2]
        assert view.scroll_direction == ScrollDirection.DOWN

    def test_children_never_evicted(self):
        source = Subject()
        view = ScrollableLayoutView.from_observable(source)
        for i in range(250):
            source.on_next(i)
        assert len(view.children) == 250

    def test_dispose_detaches(self):
        source = Subject()
        view = ScrollableLayoutView.from_observable(source)
        source.on_next("kept")
        view.dispose()
        source.on_next("dropped")
        assert len(view.children) == 1

    def test_missing_arguments(self):
        with pytest.raises(ValueError, match="observable"):
            ScrollableLayoutView.from_observable(None)
        with pytest.raises(ValueError, match="view_provider"):
            ScrollableLayoutView().observe(Subject(), None)

    def test_error_logged_by_default(self, caplog):
        source = Subject()
        ScrollableLayoutView.from_observable(source)
        with caplog.at_level(logging.WARNING):
            source.on_error(RuntimeError("feed broke"))
        assert "feed broke" in caplog.text

    def test_error_and_completion_callbacks(self):
        errors, completions = [], []
        first, second = Subject(), Subject()
        ScrollableLayoutView.from_observable(
            first, on_error=errors.append, policy=SignalPolicy.IGNORE
        )
        ScrollableLayoutView.from_observable(
            second, on_completed=lambda: completions.append(True)
        )
        boom = RuntimeError("boom")
        first.on_error(boom)
        second.on_completed()
        assert errors == [boom]
        assert completions == [True]

    def test_raise_policy_surfaces_error(self):
        source = Subject()
        ScrollableLayoutView.from_observable(source, policy=SignalPolicy.RAISE)
        with pytest.raises(RuntimeError, match="fatal"):
            source.on_error(RuntimeError("fatal"))

    def test_misspelt_signal_keyword_rejected(self):
        with pytest.raises(TypeError):
            ScrollableLayoutView.from_observable(Subject(), on_eror=print)
