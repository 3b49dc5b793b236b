import logging
import threading

from tomato.core.effects import (
    NOTIFICATIONS,
    EffectsQueue,
    EffectsWorker,
    TransitionEvent,
    dispatch,
)
from tomato.core.timer import RoundTimer


class RecordingEffects:
    def __init__(self, fail_on: TransitionEvent | None = None) -> None:
        self.calls: list[TransitionEvent] = []
        self.fail_on = fail_on
        self.done = threading.Event()

    def _record(self, event: TransitionEvent) -> None:
        self.calls.append(event)
        if event == TransitionEvent.BREAK_FINISHED:
            self.done.set()
        if event == self.fail_on:
            raise RuntimeError("speaker unplugged")

    def on_round_started(self) -> None:
        self._record(TransitionEvent.ROUND_STARTED)

    def on_round_finished(self) -> None:
        self._record(TransitionEvent.ROUND_FINISHED)

    def on_break_finished(self) -> None:
        self._record(TransitionEvent.BREAK_FINISHED)


def test_dispatch_routes_each_event() -> None:
    effects = RecordingEffects()
    for event in TransitionEvent:
        assert dispatch(effects, event) is True

    assert effects.calls == list(TransitionEvent)


def test_dispatch_swallows_and_logs_failures(caplog) -> None:
    effects = RecordingEffects(fail_on=TransitionEvent.ROUND_FINISHED)

    with caplog.at_level(logging.ERROR, logger="tomato.core.effects"):
        assert dispatch(effects, TransitionEvent.ROUND_FINISHED) is False

    assert "round_finished" in caplog.text


def test_notifications_cover_finishing_events() -> None:
    assert NOTIFICATIONS[TransitionEvent.ROUND_FINISHED] == ("Time is up!", "Take a break")
    assert NOTIFICATIONS[TransitionEvent.BREAK_FINISHED] == ("Back to work!", "Start focusing again :)")
    assert TransitionEvent.ROUND_STARTED not in NOTIFICATIONS


def test_worker_delivers_timer_events_in_order() -> None:
    events = EffectsQueue()
    effects = RecordingEffects(fail_on=TransitionEvent.ROUND_STARTED)
    worker = EffectsWorker(events, effects)
    worker.start()

    timer = RoundTimer(10.0, 5.0, effects=events)
    timer.start(now=0.0)
    timer.tick(10.0)
    timer.tick(15.0)

    assert effects.done.wait(timeout=5.0)
    worker.stop()

    assert not worker.is_alive()
    assert effects.calls == [
        TransitionEvent.ROUND_STARTED,
        TransitionEvent.ROUND_FINISHED,
        TransitionEvent.BREAK_FINISHED,
    ]
    assert timer.completed_round_count == 1


def test_queue_drain_skips_close_marker() -> None:
    events = EffectsQueue()
    events.put(TransitionEvent.ROUND_STARTED)
    events.close()

    assert events.drain() == [TransitionEvent.ROUND_STARTED]
    assert events.empty()
