import wave

from tomato.core.timer import PhaseKind
from tomato.ui.colors import GREEN, RED, color_for
from tomato.ui.styles import panel_qss
from tomato.ui.tones import SAMPLE_RATE, ToneLibrary


def test_color_for_phase() -> None:
    assert color_for(PhaseKind.RUNNING) == RED
    assert color_for(PhaseKind.BREAK) == GREEN
    assert color_for(PhaseKind.STOPPED) == GREEN
    assert panel_qss(color_for(PhaseKind.RUNNING)) == "QWidget#Panel { background: #9e2a2b; }"


def test_tone_library_writes_cues(tmp_path) -> None:
    tones = ToneLibrary(tmp_path)

    start = tones.start_cue()
    finish = tones.finish_cue()

    with wave.open(str(start), "rb") as wf:
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getnframes() == int(SAMPLE_RATE * 0.5)
    with wave.open(str(finish), "rb") as wf:
        assert wf.getnframes() == 3 * 2 * int(SAMPLE_RATE * 0.25)


def test_tone_library_reuses_existing_file(tmp_path) -> None:
    tones = ToneLibrary(tmp_path)
    path = tones.start_cue()
    stamp = path.stat().st_mtime_ns

    assert tones.start_cue() == path
    assert path.stat().st_mtime_ns == stamp
