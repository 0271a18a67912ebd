import logging
import os
import signal
import sys

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

if __package__ is None or __package__ == "":
    # Running as a script (e.g., PyInstaller)
    sys.path.insert(
        0, os.path.abspath(
            os.path.join(os.path.dirname(__file__), "..")
            )
        )
    from pomoclock.window import PomodoroWindow
else:
    # Running as a package
    from .window import PomodoroWindow

log = logging.getLogger("pomoclock")

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging():
    level = os.environ.get("POMOCLOCK_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        )


def setup_exception_handling():
    def exception_hook(exctype, value, tb):
        log.critical("Unhandled exception", exc_info=(exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = exception_hook


def main():
    setup_logging()
    setup_exception_handling()

    app = QApplication(sys.argv)
    app.setApplicationName("Pomodoro Clock")
    app.setWindowIcon(QIcon("icon.png"))

    signal.signal(signal.SIGINT, lambda *_: app.quit())

    w = PomodoroWindow()
    w.show()
    log.info("pomodoro clock started")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
