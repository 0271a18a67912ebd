"""Tests for the tick-driven countdown."""

import pytest

from pomoclock.clock import ClockStatus, CountdownClock


@pytest.mark.parametrize("minutes", [1, 5, 25, 999])
def test_reset_to(minutes):
    clock = CountdownClock(3)
    clock.start()
    clock.tick()

    clock.reset_to(minutes)

    assert clock.remaining_seconds == minutes * 60
    assert not clock.is_running
    assert clock.status is ClockStatus.IDLE


def test_ticks_decrement_while_running():
    clock = CountdownClock(1)
    clock.start()
    for _ in range(45):
        assert clock.tick() is False

    assert clock.remaining_seconds == 15
    assert clock.is_running


def test_tick_while_idle_is_noop():
    clock = CountdownClock(1)
    assert clock.tick() is False
    assert clock.remaining_seconds == 60


def test_pause_preserves_remaining():
    clock = CountdownClock(1)
    clock.start()
    clock.tick()
    clock.pause()
    clock.tick()

    assert clock.remaining_seconds == 59
    assert not clock.is_running


def test_start_and_pause_are_idempotent():
    clock = CountdownClock(1)
    clock.pause()
    assert clock.status is ClockStatus.IDLE
    clock.start()
    clock.start()
    assert clock.is_running
    clock.tick()
    assert clock.remaining_seconds == 59


def test_expiry_fires_once():
    fired = []
    clock = CountdownClock(1, on_expired=lambda: fired.append(clock.status))
    clock.start()

    results = [clock.tick() for _ in range(60)]

    assert results.count(True) == 1
    assert results[-1] is True
    assert fired == [ClockStatus.EXPIRED]
    assert clock.remaining_seconds == 0
    assert clock.status is ClockStatus.IDLE

    # further ticks do nothing until restarted
    assert clock.tick() is False
    assert fired == [ClockStatus.EXPIRED]


def test_start_at_zero_expires_on_next_tick():
    fired = []
    clock = CountdownClock(1, on_expired=lambda: fired.append(True))
    clock.reset_to(0)
    clock.start()

    assert clock.tick() is True
    assert fired == [True]
    assert clock.remaining_seconds == 0


def test_callback_may_reset_clock():
    clock = CountdownClock(1)
    clock.on_expired = lambda: clock.reset_to(5)
    clock.start()
    for _ in range(60):
        clock.tick()

    assert clock.remaining_seconds == 300
    assert clock.status is ClockStatus.IDLE
