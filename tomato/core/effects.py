from __future__ import annotations

"""Transition effects: messages emitted by the timer and the worker that delivers them."""

import logging
import queue
import threading
from enum import Enum
from typing import Protocol


logger = logging.getLogger(__name__)


class TransitionEvent(str, Enum):
    ROUND_STARTED = "round_started"
    ROUND_FINISHED = "round_finished"
    BREAK_FINISHED = "break_finished"


NOTIFICATIONS: dict[TransitionEvent, tuple[str, str]] = {
    TransitionEvent.ROUND_FINISHED: ("Time is up!", "Take a break"),
    TransitionEvent.BREAK_FINISHED: ("Back to work!", "Start focusing again :)"),
}


class TransitionEffects(Protocol):
    def on_round_started(self) -> None: ...

    def on_round_finished(self) -> None: ...

    def on_break_finished(self) -> None: ...


class EffectsSink(Protocol):
    def put(self, event: TransitionEvent) -> None: ...


def dispatch(effects: TransitionEffects, event: TransitionEvent) -> bool:
    """Deliver one event; failures are logged and never propagate."""
    handlers = {
        TransitionEvent.ROUND_STARTED: effects.on_round_started,
        TransitionEvent.ROUND_FINISHED: effects.on_round_finished,
        TransitionEvent.BREAK_FINISHED: effects.on_break_finished,
    }
    try:
        handlers[event]()
    except Exception:
        logger.exception("Transition effect %s failed", event.value)
        return False
    return True


class EffectsQueue:
    """Unbounded thread-safe queue of transition events."""

    def __init__(self) -> None:
        self._queue: queue.Queue[TransitionEvent | None] = queue.Queue()

    def put(self, event: TransitionEvent) -> None:
        self._queue.put_nowait(event)

    def get(self, timeout: float | None = None) -> TransitionEvent | None:
        return self._queue.get(timeout=timeout)

    def close(self) -> None:
        self._queue.put_nowait(None)

    def drain(self) -> list[TransitionEvent]:
        events: list[TransitionEvent] = []
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return events
            if item is not None:
                events.append(item)

    def empty(self) -> bool:
        return self._queue.empty()


class EffectsWorker(threading.Thread):
    """Background consumer so slow effects never stall the tick loop."""

    def __init__(self, events: EffectsQueue, effects: TransitionEffects) -> None:
        super().__init__(name="tomato-effects", daemon=True)
        self._events = events
        self._effects = effects

    def run(self) -> None:
        logger.debug("Effects worker started")
        while True:
            event = self._events.get()
            if event is None:
                break
            dispatch(self._effects, event)
        logger.debug("Effects worker stopped")

    def stop(self, timeout: float | None = 2.0) -> None:
        self._events.close()
        self.join(timeout)
