from __future__ import annotations

import sys
from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, Qt, QTimer
from PySide6.QtGui import QColor, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import QApplication


def format_time_mmss(sec: int) -> str:
    sec = max(0, int(sec))
    m = sec // 60
    s = sec % 60
    return f"{m:02d}:{s:02d}"


def beep():
    if sys.platform == "win32":
        import winsound
        winsound.MessageBeep(winsound.MB_ICONINFORMATION)
    else:
        QApplication.beep()


def tint_icon(
    icon: QIcon, size: int = 18, color: QColor = QColor("white")
    ) -> QIcon:
    pm = icon.pixmap(size, size)
    if pm.isNull():
        return icon

    tinted = QPixmap(pm.size())
    tinted.fill(Qt.transparent)

    painter = QPainter(tinted)
    painter.setCompositionMode(QPainter.CompositionMode_Source)
    painter.drawPixmap(0, 0, pm)
    painter.setCompositionMode(QPainter.CompositionMode_SourceIn)
    painter.fillRect(tinted.rect(), color)
    painter.end()

    return QIcon(tinted)


class QtCall:
    """Handle for a callback scheduled on the Qt event loop."""

    def __init__(self, scheduler: "QtScheduler", timer: QTimer):
        self._scheduler = scheduler
        self._timer = timer

    @property
    def active(self) -> bool:
        return self._scheduler.is_pending(self._timer)

    def cancel(self):
        self._scheduler.cancel(self._timer)


class QtScheduler:
    """call_later() backed by single-shot QTimers."""

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent
        # unparented timers would be collected before they fire
        self._timers: Set[QTimer] = set()

    def call_later(self, delay_sec: float, callback: Callable[[], None]):
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setInterval(int(delay_sec * 1000))

        def fire():
            self._release(timer)
            callback()

        timer.timeout.connect(fire)
        self._timers.add(timer)
        timer.start()
        return QtCall(self, timer)

    def pending(self) -> int:
        return len(self._timers)

    def is_pending(self, timer: QTimer) -> bool:
        return timer in self._timers

    def cancel(self, timer: QTimer):
        if timer in self._timers:
            timer.stop()
            self._release(timer)

    def _release(self, timer: QTimer):
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()
