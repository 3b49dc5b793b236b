from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from PyQt6.QtCore import QObject, pyqtSignal

from tomato import config
from tomato.data.storage import RoundRow, Storage, now_iso


logger = logging.getLogger(__name__)

PREFERENCES_KEY = "preferences"


@dataclass(frozen=True)
class Preferences:
    round_minutes: int = config.DEFAULT_ROUND_MINUTES
    break_minutes: int = config.DEFAULT_BREAK_MINUTES
    breaks_enabled: bool = True

    @property
    def round_seconds(self) -> int:
        return self.round_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60


def _clamp_minutes(value: object, default: int, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return max(minimum, min(config.MAX_LENGTH_MINUTES, int(value)))


def preferences_from_dict(raw: object) -> Preferences:
    """Build preferences from stored JSON, using defaults for anything malformed."""
    defaults = Preferences()
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Ignoring malformed preferences: %r", raw)
        return defaults
    breaks = raw.get("breaks_enabled", defaults.breaks_enabled)
    return Preferences(
        round_minutes=_clamp_minutes(raw.get("round_minutes"), defaults.round_minutes),
        break_minutes=_clamp_minutes(raw.get("break_minutes"), defaults.break_minutes, minimum=1),
        breaks_enabled=breaks if isinstance(breaks, bool) else defaults.breaks_enabled,
    )


class AppState(QObject):
    preferences_changed = pyqtSignal(object)
    history_changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.preferences = Preferences()
        self._storage: Storage | None = None

    def load_from_storage(self, storage: Storage) -> None:
        self._storage = storage
        self.preferences = preferences_from_dict(storage.get_setting(PREFERENCES_KEY))
        self.preferences_changed.emit(self.preferences)
        self.history_changed.emit()

    def save_preferences(self, preferences: Preferences) -> None:
        if preferences == self.preferences:
            return
        self.preferences = preferences
        if self._storage:
            self._storage.set_setting(PREFERENCES_KEY, asdict(preferences))
        self.preferences_changed.emit(preferences)

    def record_round(self, duration_sec: float, kind: str = "focus") -> int | None:
        if not self._storage:
            return None
        row_id = self._storage.insert_round(now_iso(), int(round(duration_sec)), kind)
        self.history_changed.emit()
        return row_id

    def recent_rounds(self, limit: int = 20) -> list[RoundRow]:
        if not self._storage:
            return []
        return self._storage.list_rounds(limit=limit)

    def rounds_today(self) -> int:
        if not self._storage:
            return 0
        return self._storage.completed_rounds_today()

    def total_focus_seconds(self) -> int:
        if not self._storage:
            return 0
        return self._storage.total_focus_seconds()
