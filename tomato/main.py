from __future__ import annotations

"""Application entry point: logging, storage, timer, effects worker and the main window."""

import logging
import sys

from PyQt6.QtGui import QIcon, QPixmap
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from tomato import config
from tomato.core.app_state import AppState
from tomato.core.clock import MonotonicClock
from tomato.core.effects import EffectsQueue, EffectsWorker
from tomato.core.timer import RoundTimer
from tomato.data.storage import Storage
from tomato.ui.colors import RED
from tomato.ui.effects import QtTransitionEffects
from tomato.ui.main_window import MainWindow
from tomato.ui.styles import apply_theme
from tomato.ui.tones import ToneLibrary


logger = logging.getLogger(__name__)


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _tray_icon(app: QApplication) -> QSystemTrayIcon | None:
    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.info("System tray unavailable, notifications go to the log")
        return None
    pixmap = QPixmap(32, 32)
    pixmap.fill(RED)
    tray = QSystemTrayIcon(QIcon(pixmap), app)
    tray.setToolTip("Tomato Timer")
    tray.show()
    return tray


def main() -> int:
    """Wire dependencies and run the Qt event loop."""
    configure_logging()
    app = QApplication(sys.argv)
    apply_theme(app)

    storage = Storage(config.DB_PATH)
    storage.init_db()

    app_state = AppState()
    app_state.load_from_storage(storage)

    events = EffectsQueue()
    effects = QtTransitionEffects(_tray_icon(app), ToneLibrary(), parent=app)
    worker = EffectsWorker(events, effects)
    worker.start()

    clock = MonotonicClock()
    timer = RoundTimer(
        app_state.preferences.round_seconds,
        app_state.preferences.break_seconds,
        breaks_enabled=app_state.preferences.breaks_enabled,
        effects=events,
        clock=clock,
    )
    window = MainWindow(timer=timer, clock=clock, app_state=app_state)
    window.show()

    try:
        return app.exec()
    finally:
        worker.stop()


if __name__ == "__main__":
    raise SystemExit(main())
