from PySide6.QtCore import Qt
from PySide6.QtGui import QIntValidator, QPalette
from PySide6.QtWidgets import (
    QApplication, QCheckBox, QDialog, QDialogButtonBox,
    QFormLayout, QLineEdit, QVBoxLayout
    )

from .logic import SessionController
from .settings import FIELD_LIMITS

NUMBER_FIELDS = (
    ("focus_min", "Focus (Min)"),
    ("short_break_min", "Short Break (Min)"),
    ("long_break_min", "Long Break (Min)"),
    ("long_break_interval", "Long Break Interval"),
    )

TOGGLE_FIELDS = (
    ("auto_transition", "Auto Transition"),
    ("dark_mode", "Dark Mode"),
    )


class SettingsDialog(QDialog):
    """Edits the controller's draft; accept saves it, reject discards it."""

    def __init__(self, parent, controller: SessionController):
        super().__init__(parent)
        self.controller = controller
        draft = controller.begin_edit()

        app = QApplication.instance()
        bg = app.palette().color(QPalette.Window)
        dark = bg.lightness() < 128
        self.setStyleSheet("color: #eee;" if dark else "color: #111;")

        self.setWindowTitle("Settings")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        form = QFormLayout()
        self.inputs = {}
        for name, label in NUMBER_FIELDS:
            lo, hi = FIELD_LIMITS[name]
            edit = QLineEdit(str(getattr(draft, name)))
            edit.setMaxLength(len(str(hi)))
            edit.setValidator(QIntValidator(0, hi, edit))
            edit.textEdited.connect(
                lambda text, n=name: self.controller.update_draft_field(n, text)
                )
            # snap back to the draft value if the typed text was rejected
            edit.editingFinished.connect(lambda n=name: self._sync_field(n))
            form.addRow(label, edit)
            self.inputs[name] = edit

        for name, label in TOGGLE_FIELDS:
            box = QCheckBox()
            box.setChecked(bool(getattr(draft, name)))
            box.toggled.connect(
                lambda on, n=name: self.controller.update_draft_field(n, on)
                )
            form.addRow(label, box)
            self.inputs[name] = box

        buttons = QDialogButtonBox(
            QDialogButtonBox.Save | QDialogButtonBox.Cancel
            )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout()
        layout.addLayout(form)
        layout.addWidget(buttons)
        self.setLayout(layout)

    def _sync_field(self, name: str):
        draft = self.controller.store.draft
        if draft is not None:
            self.inputs[name].setText(str(getattr(draft, name)))

    def accept(self):
        self.controller.save_settings()
        super().accept()

    def reject(self):
        self.controller.cancel_edit()
        super().reject()
