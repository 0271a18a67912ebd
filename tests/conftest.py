"""Shared test fixtures.

The core never touches wall time, so tests drive ticks by hand and use a
fake scheduler whose clock only moves when advance() is called.
"""

from __future__ import annotations

import pytest

from pomoclock.logic import SessionController


class ManualCall:
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    def __init__(self):
        self.now = 0.0
        self.calls: list[ManualCall] = []

    def call_later(self, delay_sec, callback):
        call = ManualCall(self.now + delay_sec, callback)
        self.calls.append(call)
        return call

    def pending(self):
        return [c for c in self.calls if not c.cancelled]

    def advance(self, seconds: float):
        self.now += seconds
        due = [c for c in self.pending() if c.due <= self.now]
        for call in due:
            self.calls.remove(call)
            call.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def changes():
    return []


@pytest.fixture
def controller(scheduler, changes):
    return SessionController(scheduler=scheduler, on_change=changes.append)
