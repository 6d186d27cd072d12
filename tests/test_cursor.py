"""Tests for trace events and the playback cursor."""
import dataclasses

import pytest

from algorithms.event import (
    Event,
    EventKind,
    TraceBuilder,
    apply_trace,
    count_kinds,
)
from engine.cursor import PlaybackCursor, SwapPhase


def swap(indices, snap):
    return Event(EventKind.SWAP, indices, snap)


def update(indices, snap):
    return Event(EventKind.UPDATE, indices, snap)


def compare(*indices):
    return Event(EventKind.COMPARE, indices)


class TestEvent:
    def test_frozen(self):
        event = compare(0, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.indices = (1, 2)

    def test_dict_form(self):
        event = swap((0, 1), (2, 1))
        assert event.to_dict() == {"type": "swap", "indices": [0, 1], "array": [2, 1]}

    def test_compare_has_no_array(self):
        assert compare(3).to_dict() == {"type": "compare", "indices": [3], "array": None}

    def test_builder_snapshots_are_copies(self):
        sink = TraceBuilder()
        arr = [2, 1]
        arr[0], arr[1] = arr[1], arr[0]
        sink.exchange(arr, 0, 1)
        arr[0] = 99
        trace = sink.build()
        assert [e.kind for e in trace] == [EventKind.SWAP, EventKind.UPDATE]
        assert trace[0].snapshot == (1, 2)

    def test_apply_and_count(self):
        trace = (compare(0, 1), swap((0, 1), (1, 2)), update((0, 1), (1, 2)))
        assert apply_trace([2, 1], trace) == [1, 2]
        assert apply_trace([2, 1], trace[:1]) == [2, 1]
        counts = count_kinds(trace)
        assert counts == {EventKind.COMPARE: 1, EventKind.SWAP: 1, EventKind.UPDATE: 1}


class TestPlaybackCursor:
    def test_initial_view(self):
        view = PlaybackCursor([3, 1, 2]).view()
        assert view.sequence == (3, 1, 2)
        assert view.comparing == ()
        assert view.swapping == ()
        assert view.position == 0

    def test_compare_highlights_only(self):
        cursor = PlaybackCursor([3, 1])
        cursor.apply(compare(0, 1))
        view = cursor.view()
        assert view.comparing == (0, 1)
        assert view.swapping == ()
        assert view.sequence == (3, 1)
        assert view.position == 1

    def test_swap_highlights_before_moving(self):
        cursor = PlaybackCursor([3, 1])
        cursor.apply(compare(0, 1))
        cursor.apply(swap((0, 1), (1, 3)))
        assert cursor.swap_pending
        view = cursor.view()
        assert view.swapping == (0, 1)
        assert view.comparing == ()
        assert view.sequence == (3, 1)

        assert cursor.commit_swap() is True
        assert cursor.phase is SwapPhase.APPLIED
        assert cursor.view().sequence == (1, 3)
        assert cursor.view().swapping == (0, 1)

    def test_commit_without_pending_swap(self):
        cursor = PlaybackCursor([1, 2])
        assert cursor.commit_swap() is False

    def test_update_during_highlight_replaces_pending(self):
        cursor = PlaybackCursor([3, 2, 1])
        cursor.apply(swap((0, 2), (1, 2, 3)))
        cursor.apply(update((0, 2), (1, 3, 2)))
        assert cursor.view().sequence == (3, 2, 1)
        cursor.commit_swap()
        assert cursor.view().sequence == (1, 3, 2)

    def test_update_after_commit_applies_immediately(self):
        cursor = PlaybackCursor([2, 1])
        cursor.apply(swap((0, 1), (1, 2)))
        cursor.commit_swap()
        cursor.apply(update((0, 1), (1, 2)))
        assert cursor.view().sequence == (1, 2)
        assert cursor.position == 2

    def test_next_event_settles_pending_swap(self):
        cursor = PlaybackCursor([2, 1, 3])
        cursor.apply(swap((0, 1), (1, 2, 3)))
        cursor.apply(compare(1, 2))
        assert not cursor.swap_pending
        assert cursor.view().sequence == (1, 2, 3)
        assert cursor.view().comparing == (1, 2)

    def test_clear_highlights_commits(self):
        cursor = PlaybackCursor([2, 1])
        cursor.apply(swap((0, 1), (1, 2)))
        cursor.clear_highlights()
        view = cursor.view()
        assert view.sequence == (1, 2)
        assert view.comparing == view.swapping == ()

    def test_view_dict(self):
        cursor = PlaybackCursor([2, 1])
        cursor.apply(compare(0, 1))
        assert cursor.view().to_dict() == {
            "array": [2, 1],
            "comparing": [0, 1],
            "swapping": [],
            "position": 1,
        }
