from __future__ import annotations

"""Qt delivery of transition effects: tray notifications and tone cues."""

import logging

from PyQt6.QtCore import QObject, QUrl, pyqtSignal
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from tomato.core.effects import NOTIFICATIONS, TransitionEvent
from tomato.ui.tones import ToneLibrary


logger = logging.getLogger(__name__)


class QtTransitionEffects(QObject):
    """TransitionEffects backed by the system tray and QSoundEffect.

    The `on_*` methods run on the effects worker thread; they only emit a
    signal, so the actual Qt calls happen on the GUI thread.
    """

    requested = pyqtSignal(str)

    def __init__(self, tray: QSystemTrayIcon | None, tones: ToneLibrary, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tray = tray
        self._sounds: dict[TransitionEvent, QSoundEffect | None] = {
            TransitionEvent.ROUND_STARTED: self._load(tones.start_cue),
            TransitionEvent.ROUND_FINISHED: self._load(tones.finish_cue),
            TransitionEvent.BREAK_FINISHED: self._load(tones.start_cue),
        }
        self.requested.connect(self._deliver)

    def on_round_started(self) -> None:
        self.requested.emit(TransitionEvent.ROUND_STARTED.value)

    def on_round_finished(self) -> None:
        self.requested.emit(TransitionEvent.ROUND_FINISHED.value)

    def on_break_finished(self) -> None:
        self.requested.emit(TransitionEvent.BREAK_FINISHED.value)

    def _load(self, make_path) -> QSoundEffect | None:
        try:
            path = make_path()
        except OSError:
            logger.exception("Could not write tone cue")
            return None
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(path)))
        effect.setLoopCount(1)
        effect.setVolume(1.0)
        return effect

    def _deliver(self, value: str) -> None:
        event = TransitionEvent(value)
        notification = NOTIFICATIONS.get(event)
        if notification is not None:
            self._notify(*notification)
        self._play(event)

    def _notify(self, title: str, body: str) -> None:
        if self._tray is None or not self._tray.isVisible():
            logger.info("Notification: %s - %s", title, body)
            return
        self._tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, 5000)

    def _play(self, event: TransitionEvent) -> None:
        effect = self._sounds.get(event)
        if effect is None or effect.status() == QSoundEffect.Status.Error:
            QApplication.beep()
            return
        effect.stop()
        effect.play()
