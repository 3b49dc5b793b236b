from __future__ import annotations

"""Runtime synthesis of the start and finish tone cues as WAV files."""

import math
import struct
import tempfile
import wave
from pathlib import Path

from tomato import config


SAMPLE_RATE = 44100


def pcm_tone(frequency: float, duration_s: float, amplitude: float) -> bytearray:
    """16-bit mono sine samples."""
    frames = bytearray()
    n_frames = int(SAMPLE_RATE * duration_s)
    for i in range(n_frames):
        t = i / SAMPLE_RATE
        # short attack/release to avoid clicks
        env = min(1.0, t * 50) * min(1.0, (duration_s - t) * 50)
        sample = int(32767 * amplitude * env * math.sin(2 * math.pi * frequency * t))
        frames += struct.pack("<h", sample)
    return frames


def pcm_silence(duration_s: float) -> bytearray:
    return bytearray(2 * int(SAMPLE_RATE * duration_s))


def write_wav(path: Path, frames: bytes) -> Path:
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(bytes(frames))
    return path


class ToneLibrary:
    """Creates each cue once per directory and reuses the file afterwards."""

    START = "tomato_start.wav"
    FINISH = "tomato_finish.wav"

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory or tempfile.gettempdir())
        self.directory.mkdir(parents=True, exist_ok=True)

    def start_cue(self) -> Path:
        path = self.directory / self.START
        if not path.exists():
            frequency, duration = config.START_TONE
            write_wav(path, pcm_tone(frequency, duration, config.TONE_AMPLITUDE))
        return path

    def finish_cue(self) -> Path:
        path = self.directory / self.FINISH
        if not path.exists():
            frequency, duration = config.FINISH_TONE
            beep = pcm_tone(frequency, duration, config.TONE_AMPLITUDE)
            pause = pcm_silence(duration)
            write_wav(path, (beep + pause) * config.FINISH_BEEPS)
        return path
