from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Union

from .clock import CountdownClock
from .settings import DraftSettings, Settings, SettingsStore

log = logging.getLogger(__name__)

# grace period between a completion and the automatic restart
AUTO_START_DELAY_SEC = 1.0


class SessionKind(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").upper()


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay_sec: float, callback: Callable[[], None]
        ) -> Cancellable: ...


def resolve_duration(kind: SessionKind, settings: Settings) -> int:
    """Minutes for the given session kind."""
    if kind is SessionKind.FOCUS:
        return settings.focus_min
    if kind is SessionKind.SHORT_BREAK:
        return settings.short_break_min
    return settings.long_break_min


def next_session(
    current: SessionKind, since_long_break: int, long_break_interval: int
    ) -> SessionKind:
    """Kind that follows `current`.

    For a finished focus session `since_long_break` must already include it.
    """
    if current is not SessionKind.FOCUS:
        return SessionKind.FOCUS
    if since_long_break > 0 and since_long_break % long_break_interval == 0:
        return SessionKind.LONG_BREAK
    return SessionKind.SHORT_BREAK


class PomodoroTracker:
    def __init__(self):
        self.total = 0
        self.since_long_break = 0

    def on_focus_completed(self) -> int:
        self.total += 1
        self.since_long_break += 1
        return self.since_long_break

    def on_long_break_scheduled(self):
        self.since_long_break = 0

    def clear(self):
        self.total = 0
        self.since_long_break = 0


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the UI after every change."""
    session_kind: SessionKind
    remaining_seconds: int
    is_running: bool
    total_focus_completions: int
    focus_completions_since_long_break: int
    settings: Settings
    draft: Optional[DraftSettings] = None

    @property
    def total_seconds(self) -> int:
        return resolve_duration(self.session_kind, self.settings) * 60

    @property
    def progress(self) -> float:
        total = self.total_seconds
        if total <= 0:
            return 0.0
        return min(max(1 - self.remaining_seconds / total, 0.0), 1.0)

    @property
    def label(self) -> str:
        return self.session_kind.label


class SessionController:
    """
    Owns the session cycle and exposes the intents the UI calls.

    The host supplies a Scheduler for the delayed auto-start and drives
    tick() once per second. Every change ends with on_change(snapshot).
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_change: Optional[Callable[[Snapshot], None]] = None,
        on_beep: Optional[Callable[[], None]] = None,
        store: Optional[SettingsStore] = None,
        ):
        self.store = store if store is not None else SettingsStore()
        self.tracker = PomodoroTracker()
        self.kind = SessionKind.FOCUS
        self.clock = CountdownClock(
            resolve_duration(self.kind, self.store.settings),
            on_expired=self._on_completed,
            )
        self._scheduler = scheduler
        self._on_change = on_change
        self._beep = on_beep
        self._pending_start: Optional[Cancellable] = None
        self._ticking = False

    # ---------- Derived ----------
    @property
    def settings(self) -> Settings:
        return self.store.settings

    @property
    def snapshot(self) -> Snapshot:
        draft = self.store.draft
        if draft is not None:
            draft = DraftSettings(**vars(draft))
        return Snapshot(
            session_kind=self.kind,
            remaining_seconds=self.clock.remaining_seconds,
            is_running=self.clock.is_running,
            total_focus_completions=self.tracker.total,
            focus_completions_since_long_break=self.tracker.since_long_break,
            settings=self.store.settings,
            draft=draft,
            )

    @property
    def auto_start_pending(self) -> bool:
        return self._pending_start is not None

    def _changed(self):
        if self._on_change is not None:
            self._on_change(self.snapshot)

    def _cancel_pending_start(self):
        if self._pending_start is not None:
            log.debug("cancelling pending auto-start")
            self._pending_start.cancel()
            self._pending_start = None

    def _reset_clock(self):
        self.clock.reset_to(resolve_duration(self.kind, self.store.settings))

    # ---------- Controls ----------
    def toggle_run(self):
        self._cancel_pending_start()
        if self.clock.is_running:
            self.clock.pause()
        else:
            self.clock.start()
        self._changed()

    def reset(self):
        self._cancel_pending_start()
        self._reset_clock()
        self._changed()

    def switch_session(self, kind: Union[SessionKind, str]):
        kind = SessionKind(kind)
        self._cancel_pending_start()
        self.kind = kind
        self._reset_clock()
        self._changed()

    def clear_counters(self):
        self.tracker.clear()
        self._changed()

    # ---------- Settings ----------
    def begin_edit(self) -> DraftSettings:
        self._cancel_pending_start()
        draft = self.store.begin_edit()
        self._changed()
        return draft

    def update_draft_field(self, field: str, raw: Any) -> bool:
        changed = self.store.update_draft_field(field, raw)
        if changed:
            self._changed()
        return changed

    def save_settings(self, draft: Optional[DraftSettings] = None) -> Settings:
        self._cancel_pending_start()
        settings = self.store.commit(draft)
        # the duration of the current kind may have changed
        self._reset_clock()
        self._changed()
        return settings

    def cancel_edit(self):
        self._cancel_pending_start()
        self.store.discard()
        self._changed()

    # ---------- Tick / completion ----------
    def tick(self) -> bool:
        """Called once per second by the host's periodic trigger."""
        if self._ticking:
            log.warning("tick re-entered during completion handling, ignored")
            return False
        if not self.clock.is_running:
            return False

        self._ticking = True
        try:
            completed = self.clock.tick()
        finally:
            self._ticking = False
        self._changed()
        return completed

    def _on_completed(self):
        settings = self.store.settings
        finished = self.kind

        if finished is SessionKind.FOCUS:
            count = self.tracker.on_focus_completed()
            nxt = next_session(finished, count, settings.long_break_interval)
            if nxt is SessionKind.LONG_BREAK:
                self.tracker.on_long_break_scheduled()
        else:
            nxt = next_session(
                finished, self.tracker.since_long_break,
                settings.long_break_interval
                )

        log.info(
            "%s complete -> %s (total=%d)", finished.value, nxt.value,
            self.tracker.total
            )
        self.kind = nxt
        self._reset_clock()
        if self._beep is not None:
            self._beep()

        self._cancel_pending_start()
        if settings.auto_transition:
            self._pending_start = self._scheduler.call_later(
                AUTO_START_DELAY_SEC, self._auto_start
                )

    def _auto_start(self):
        self._pending_start = None
        self.clock.start()
        log.debug("auto-started %s", self.kind.value)
        self._changed()
