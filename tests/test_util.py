"""Tests for formatting helpers and the Qt-backed scheduler."""

import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QCoreApplication  # noqa: E402

from pomoclock.util import QtScheduler, format_time_mmss  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.mark.parametrize("sec, text", [
    (0, "00:00"),
    (59, "00:59"),
    (300, "05:00"),
    (1500, "25:00"),
    (-4, "00:00"),
])
def test_format_time_mmss(sec, text):
    assert format_time_mmss(sec) == text


def test_call_later_is_pending_until_cancelled(qapp):
    scheduler = QtScheduler()
    fired = []

    call = scheduler.call_later(1.0, lambda: fired.append(True))
    assert call.active
    assert scheduler.pending() == 1

    call.cancel()
    assert not call.active
    assert scheduler.pending() == 0
    assert fired == []


def test_cancel_twice_is_harmless(qapp):
    scheduler = QtScheduler()
    call = scheduler.call_later(1.0, lambda: None)
    call.cancel()
    call.cancel()
    assert scheduler.pending() == 0
