"""Tests for duration lookup, the session cycle and the pomodoro counters."""

import pytest

from pomoclock.logic import (
    PomodoroTracker, SessionKind, Snapshot, next_session, resolve_duration
)
from pomoclock.settings import DEFAULT_SETTINGS, Settings


def test_resolve_duration():
    s = Settings(focus_min=50, short_break_min=10, long_break_min=30)
    assert resolve_duration(SessionKind.FOCUS, s) == 50
    assert resolve_duration(SessionKind.SHORT_BREAK, s) == 10
    assert resolve_duration(SessionKind.LONG_BREAK, s) == 30


@pytest.mark.parametrize("interval", [1, 2, 3, 4, 7])
def test_long_break_every_interval(interval):
    tracker = PomodoroTracker()
    for j in range(1, 3 * interval + 1):
        count = tracker.on_focus_completed()
        kind = next_session(SessionKind.FOCUS, count, interval)
        if kind is SessionKind.LONG_BREAK:
            tracker.on_long_break_scheduled()

        expected = (SessionKind.LONG_BREAK if j % interval == 0
                    else SessionKind.SHORT_BREAK)
        assert kind is expected, j


@pytest.mark.parametrize("kind", [SessionKind.SHORT_BREAK, SessionKind.LONG_BREAK])
def test_breaks_always_lead_to_focus(kind):
    assert next_session(kind, 4, 4) is SessionKind.FOCUS
    assert next_session(kind, 0, 4) is SessionKind.FOCUS


def test_zero_count_is_not_a_long_break():
    assert next_session(SessionKind.FOCUS, 0, 4) is SessionKind.SHORT_BREAK


def test_tracker_counts_and_clear():
    tracker = PomodoroTracker()
    assert tracker.on_focus_completed() == 1
    assert tracker.on_focus_completed() == 2
    tracker.on_long_break_scheduled()

    assert tracker.total == 2
    assert tracker.since_long_break == 0

    tracker.on_focus_completed()
    tracker.clear()
    assert (tracker.total, tracker.since_long_break) == (0, 0)


def test_session_kind_labels():
    assert SessionKind.FOCUS.label == "FOCUS"
    assert SessionKind.SHORT_BREAK.label == "SHORT BREAK"
    assert SessionKind.LONG_BREAK.label == "LONG BREAK"


def test_snapshot_progress():
    snap = Snapshot(
        session_kind=SessionKind.SHORT_BREAK,
        remaining_seconds=75,
        is_running=True,
        total_focus_completions=1,
        focus_completions_since_long_break=1,
        settings=DEFAULT_SETTINGS,
    )
    assert snap.total_seconds == 300
    assert snap.progress == pytest.approx(0.75)
    assert snap.label == "SHORT BREAK"
