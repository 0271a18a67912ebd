from __future__ import annotations

from PySide6.QtCore import QPoint, QSize, Qt, QTimer
from PySide6.QtGui import QAction, QFont, QIcon
from PySide6.QtWidgets import (
    QApplication, QHBoxLayout, QLabel, QMenu, QPushButton, QStyle,
    QSystemTrayIcon, QVBoxLayout, QWidget
    )

from .logic import SessionController, SessionKind, Snapshot
from .settings_dialog import SettingsDialog
from .util import QtScheduler, beep, format_time_mmss, tint_icon

TICK_INTERVAL_MS = 1000

DARK_STYLE = """
    QWidget#wrapper {
        background: #111;
        border: 1px solid #333;
        border-radius: 14px;
    }
    QLabel { color: #eee; }
    QPushButton {
        background: transparent;
        color: #eee;
        border: none;
        padding: 2px 6px;
        border-radius: 6px;
    }
    QPushButton:hover { background: #222; }
    QPushButton:checked { background: #2f2f2f; }
"""

LIGHT_STYLE = """
    QWidget#wrapper {
        background: #f0f4f8;
        border: 1px solid #ccc;
        border-radius: 14px;
    }
    QLabel { color: #1a1a1a; }
    QPushButton {
        background: transparent;
        color: #1a1a1a;
        border: none;
        padding: 2px 6px;
        border-radius: 6px;
    }
    QPushButton:hover { background: #dde3ea; }
    QPushButton:checked { background: #cfd6de; }
"""

KIND_COLORS = {
    SessionKind.FOCUS: "#40E0D0",
    SessionKind.SHORT_BREAK: "#7CC7FF",
    SessionKind.LONG_BREAK: "#7CFC98",
    }


class PomodoroWindow(QWidget):
    def __init__(self):
        super().__init__()

        self.scheduler = QtScheduler(self)
        self.controller = SessionController(
            scheduler=self.scheduler, on_change=self.update_ui, on_beep=beep
            )

        # ---------- Window flags / style ----------
        self.setWindowFlags(
            Qt.FramelessWindowHint | Qt.WindowStaysOnTopHint | Qt.Tool
            )
        self.setAttribute(Qt.WA_TranslucentBackground, True)

        self.wrapper = QWidget(self)
        self.wrapper.setObjectName("wrapper")

        # ---------- Tray ----------
        self.tray = QSystemTrayIcon(QIcon())
        menu = QMenu()

        restore_action = QAction("Open", self)
        quit_action = QAction("Quit", self)
        restore_action.triggered.connect(self.showNormal)
        quit_action.triggered.connect(QApplication.quit)

        menu.addAction(restore_action)
        menu.addAction(quit_action)

        self.tray.setContextMenu(menu)
        self.tray.show()
        self.tray.activated.connect(self.on_tray_activated)

        # ---------- Title bar ----------
        self.btn_settings = QPushButton("⚙")
        self.btn_min = QPushButton("—")
        self.btn_close = QPushButton("×")
        self.btn_close.setStyleSheet("color: #ff6b6b;")

        top_row = QHBoxLayout()
        top_row.setContentsMargins(8, 6, 8, 0)
        top_row.setSpacing(4)
        top_row.addWidget(self.btn_settings)
        top_row.addStretch(1)
        top_row.addWidget(self.btn_min)
        top_row.addWidget(self.btn_close)

        # ---------- Session selector ----------
        self.kind_buttons = {}
        kind_row = QHBoxLayout()
        kind_row.setContentsMargins(8, 0, 8, 0)
        kind_row.setSpacing(4)
        for kind, text in (
                (SessionKind.FOCUS, "Focus"),
                (SessionKind.SHORT_BREAK, "Short"),
                (SessionKind.LONG_BREAK, "Long"),
        ):
            b = QPushButton(text)
            b.setCheckable(True)
            b.clicked.connect(
                lambda _checked=False, k=kind: self.controller.switch_session(k)
                )
            kind_row.addWidget(b)
            self.kind_buttons[kind] = b

        # ---------- Labels ----------
        self.mode_label = QLabel("")
        self.mode_label.setAlignment(Qt.AlignCenter)
        self.mode_label.setFont(QFont("Segoe UI", 9, QFont.Bold))

        self.timer_label = QLabel("")
        self.timer_label.setFont(QFont("Segoe UI", 26, QFont.Bold))
        self.timer_label.setAlignment(Qt.AlignCenter)

        self.counter_label = QLabel("")
        self.counter_label.setFont(QFont("Segoe UI", 10))
        self.counter_label.setAlignment(Qt.AlignCenter)

        # ---------- Controls ----------
        self.play_pause_btn = QPushButton()
        self.reset_btn = QPushButton()
        self.clear_btn = QPushButton()

        self.play_pause_btn.setIcon(
            tint_icon(self.style().standardIcon(QStyle.SP_MediaPlay))
            )
        self.reset_btn.setText("⟲")
        self.reset_btn.setFont(QFont("Segoe UI", 12, QFont.Bold))
        self.clear_btn.setText("0")
        self.clear_btn.setFont(QFont("Segoe UI", 11, QFont.Bold))

        for b in (self.play_pause_btn, self.reset_btn, self.clear_btn):
            b.setIconSize(QSize(18, 18))
            b.setFixedSize(44, 32)

        self.play_pause_btn.setToolTip("Start / Pause")
        self.reset_btn.setToolTip("Reset")
        self.clear_btn.setToolTip("Clear Pomodoros")

        ctrl_row = QHBoxLayout()
        ctrl_row.setContentsMargins(10, 4, 10, 14)
        ctrl_row.setSpacing(8)
        ctrl_row.addWidget(self.play_pause_btn)
        ctrl_row.addWidget(self.reset_btn)
        ctrl_row.addWidget(self.clear_btn)

        # ---------- Wrapper layout ----------
        wrap_layout = QVBoxLayout(self.wrapper)
        wrap_layout.setContentsMargins(0, 0, 0, 0)
        wrap_layout.setSpacing(6)
        wrap_layout.addLayout(top_row)
        wrap_layout.addLayout(kind_row)
        wrap_layout.addWidget(self.mode_label)
        wrap_layout.addWidget(self.timer_label)
        wrap_layout.addWidget(self.counter_label)
        wrap_layout.addLayout(ctrl_row)

        # ---------- Timer ----------
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self.controller.tick)

        # ---------- Signals ----------
        self.btn_close.clicked.connect(QApplication.quit)
        self.btn_min.clicked.connect(self.hide)
        self.btn_settings.clicked.connect(self.open_settings)

        self.play_pause_btn.clicked.connect(self.controller.toggle_run)
        self.reset_btn.clicked.connect(self.controller.reset)
        self.clear_btn.clicked.connect(self.controller.clear_counters)

        # ---------- Dragging ----------
        self._dragging = False
        self._drag_offset = QPoint(0, 0)

        self.resize(240, 240)
        self.update_layout_geometry()

        self.update_ui(self.controller.snapshot)

    # ---------- Geometry ----------
    def update_layout_geometry(self):
        self.wrapper.setGeometry(0, 0, self.width(), self.height())

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.update_layout_geometry()

    # ---------- UI update ----------
    def update_ui(self, snap: Snapshot):
        self.wrapper.setStyleSheet(
            DARK_STYLE if snap.settings.dark_mode else LIGHT_STYLE
            )

        for kind, b in self.kind_buttons.items():
            b.setChecked(kind is snap.session_kind)

        self.timer_label.setText(format_time_mmss(snap.remaining_seconds))
        self.counter_label.setText(
            f"Pomodoros: {snap.total_focus_completions}"
            f" ({int(round(snap.progress * 100))}%)"
            )

        if snap.is_running:
            self.mode_label.setText(snap.label)
            self.mode_label.setStyleSheet("color: #888;")
            self.timer_label.setStyleSheet(
                f"color: {KIND_COLORS[snap.session_kind]};"
                )
            self.play_pause_btn.setIcon(
                tint_icon(self.style().standardIcon(QStyle.SP_MediaPause))
                )
            if not self.tick_timer.isActive():
                self.tick_timer.start()
        else:
            self.mode_label.setText(f"{snap.label} · Paused")
            self.mode_label.setStyleSheet("color: #ff6b6b;")
            self.timer_label.setStyleSheet("color: #ff6b6b;")
            self.play_pause_btn.setIcon(
                tint_icon(self.style().standardIcon(QStyle.SP_MediaPlay))
                )
            if self.tick_timer.isActive():
                self.tick_timer.stop()

    # ---------- Dialogs ----------
    def open_settings(self):
        dlg = SettingsDialog(self, self.controller)
        dlg.exec()

    # ---------- Tray ----------
    def on_tray_activated(self, reason):
        if reason == QSystemTrayIcon.Trigger:
            self.showNormal()
            self.raise_()
            self.activateWindow()

    # ---------- Dragging ----------
    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._dragging = True
            self._drag_offset = (event.globalPosition().toPoint() -
                                 self.frameGeometry().topLeft())
            event.accept()

    def mouseMoveEvent(self, event):
        if self._dragging:
            self.move(event.globalPosition().toPoint() - self._drag_offset)
            event.accept()

    def mouseReleaseEvent(self, event):
        self._dragging = False
        event.accept()
