#!/usr/bin/env python3
"""
YAMLETTE CURSOR & TRACKER TESTS
-------------------------------
Covers the two leaf components: one-byte lookahead and indentation tracking.

Author: YAMLette Team
Date: 2026-10-19
"""

import pytest

from yamlette.core.errors import ScanError, ErrorKind, Category
from yamlette.scanning.cursor import ByteCursor
from yamlette.scanning.indent import IndentTracker, TrackerPhase


class CountingSource:
    """Byte iterator that remembers how often it was pulled."""

    def __init__(self, data: bytes):
        self._it = iter(data)
        self.pulls = 0

    def __iter__(self):
        return self

    def __next__(self):
        self.pulls += 1
        return next(self._it)


def test_peek_is_idempotent_until_discard():
    source = CountingSource(b"ab")
    cursor = ByteCursor(source)

    assert cursor.peek() == ord("a")
    assert cursor.peek() == ord("a")
    assert source.pulls == 1, "peek must never advance the source twice for one byte"

    cursor.discard()
    assert cursor.peek() == ord("b")
    assert source.pulls == 2


def test_discard_returns_nothing_and_next_takes_fresh_bytes():
    cursor = ByteCursor(b"xyz")
    cursor.peek()
    assert cursor.discard() is None
    assert cursor.next() == ord("y")
    assert cursor.next() == ord("z")
    assert cursor.next() is None
    assert cursor.peek() is None


def test_next_prefers_cached_byte():
    cursor = ByteCursor(b"qr")
    cursor.peek()
    assert cursor.next() == ord("q")
    assert cursor.peek() == ord("r")


def test_mark_tracks_lines_and_columns():
    cursor = ByteCursor(b"ab\ncd")
    for _ in range(4):
        cursor.next()
    mark = cursor.mark
    assert (mark.offset, mark.line, mark.column) == (4, 2, 2)
    assert str(mark) == "line 2, column 2"


def test_source_failure_surfaces_as_io_error():
    def broken():
        yield ord("a")
        raise OSError("device unplugged")

    cursor = ByteCursor(broken())
    assert cursor.next() == ord("a")
    with pytest.raises(ScanError) as exc:
        cursor.peek()

    assert exc.value.kind is ErrorKind.IO
    assert exc.value.category is Category.IO
    assert isinstance(exc.value.__cause__, OSError)


def test_tracker_starts_inert():
    tracker = IndentTracker()
    assert tracker.snapshot() == (0, 0, 0)
    assert tracker.history == []
    assert tracker.phase is TrackerPhase.INACTIVE


def test_tracker_rejects_updates_while_inactive():
    tracker = IndentTracker()
    with pytest.raises(ScanError) as exc:
        tracker.update(2)
    assert exc.value.kind is ErrorKind.STATE_VIOLATION
    assert tracker.history == []


def test_tracker_update_shifts_current_into_previous():
    tracker = IndentTracker()
    tracker.activate()
    tracker.update(2)
    tracker.update(4)
    tracker.update(1)

    assert tracker.previous == 4
    assert tracker.current == 1
    assert tracker.floor == 4, "floor never decreases"
    assert tracker.history == [2, 4, 1]


def test_clamp_freezes_floor_growth():
    tracker = IndentTracker()
    tracker.activate()
    tracker.update(2)
    tracker.clamp()
    tracker.update(8)
    assert tracker.floor == 2
    assert tracker.current == 8

    tracker.unclamp()
    tracker.update(6)
    assert tracker.floor == 6


def test_deactivate_preserves_counters():
    tracker = IndentTracker()
    tracker.activate()
    tracker.update(3)
    tracker.deactivate()

    assert not tracker.is_active
    assert tracker.snapshot() == (3, 0, 3)
    assert tracker.history == [3]
