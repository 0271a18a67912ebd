from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

log = logging.getLogger(__name__)


class ClockStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


class CountdownClock:
    """
    Second-resolution countdown driven by external tick() calls.

    The clock never reads wall time. Whoever owns the periodic trigger calls
    tick() once per second; ticks while not running are ignored. When the
    count reaches zero the clock passes through EXPIRED, calls on_expired
    synchronously and ends up IDLE (unless the callback restarted it).
    """

    def __init__(
        self,
        minutes: int,
        on_expired: Optional[Callable[[], None]] = None,
        ):
        self.on_expired = on_expired
        self._remaining = minutes * 60
        self._status = ClockStatus.IDLE

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def status(self) -> ClockStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is ClockStatus.RUNNING

    def start(self):
        # starting at 0 is allowed; the next tick expires immediately
        if self._status is ClockStatus.IDLE:
            self._status = ClockStatus.RUNNING

    def pause(self):
        if self._status is ClockStatus.RUNNING:
            self._status = ClockStatus.IDLE

    def reset_to(self, minutes: int):
        self._status = ClockStatus.IDLE
        self._remaining = minutes * 60

    def tick(self) -> bool:
        """Advance one second. Returns True if this tick expired the clock."""
        if self._status is not ClockStatus.RUNNING:
            return False

        if self._remaining > 0:
            self._remaining -= 1
        if self._remaining > 0:
            return False

        self._status = ClockStatus.EXPIRED
        log.debug("countdown expired")
        if self.on_expired is not None:
            self.on_expired()
        if self._status is ClockStatus.EXPIRED:
            self._status = ClockStatus.IDLE
        return True
