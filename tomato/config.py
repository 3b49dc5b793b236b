# config.py
import os
from pathlib import Path

DEFAULT_ROUND_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
MAX_LENGTH_MINUTES = 120


def env_int(name: str, default: int, minimum: int = 1) -> int:
    try:
        value = int(os.getenv(name, "") or default)
    except ValueError:
        return default
    return max(minimum, value)


# redraw cadence of the driver loop, at least 1 ms
POLL_INTERVAL_MS = env_int("TOMATO_POLL_MS", 10)

LOG_LEVEL = os.getenv("TOMATO_LOG_LEVEL", "INFO")

DB_PATH = Path(os.getenv("TOMATO_DB_PATH", str(Path.home() / ".tomato" / "tomato.db")))

# tone cues (Hz, seconds, amplitude 0..1)
START_TONE = (1000.0, 0.5)
FINISH_TONE = (440.0, 0.25)
FINISH_BEEPS = 3
TONE_AMPLITUDE = 0.20
