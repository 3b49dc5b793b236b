from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from tomato.core.clock import Clock, MonotonicClock
from tomato.core.display import format_remaining
from tomato.core.effects import EffectsSink, TransitionEvent


logger = logging.getLogger(__name__)

DEFAULT_ROUND_SECONDS = 25 * 60
DEFAULT_BREAK_SECONDS = 5 * 60


class PhaseKind(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    BREAK = "break"


@dataclass(frozen=True)
class Phase:
    kind: PhaseKind
    started_at: float | None = None

    def __post_init__(self) -> None:
        timed = self.kind in {PhaseKind.RUNNING, PhaseKind.BREAK}
        if timed and self.started_at is None:
            raise ValueError(f"{self.kind.value} phase needs a start instant")
        if not timed and self.started_at is not None:
            raise ValueError("stopped phase cannot carry a start instant")

    @classmethod
    def stopped(cls) -> Phase:
        return cls(PhaseKind.STOPPED)

    @classmethod
    def running(cls, started_at: float) -> Phase:
        return cls(PhaseKind.RUNNING, started_at)

    @classmethod
    def on_break(cls, started_at: float) -> Phase:
        return cls(PhaseKind.BREAK, started_at)


@dataclass(frozen=True)
class TimerSnapshot:
    phase: PhaseKind
    elapsed_seconds: float
    remaining_seconds: float
    display_seconds: float
    progress: float
    completed_rounds: int
    total_focus_seconds: float
    text: str


def elapsed_seconds(phase: Phase, now: float) -> float:
    """Time spent in the current phase; a clock that went backwards yields 0."""
    if phase.started_at is None:
        return 0.0
    return max(0.0, now - phase.started_at)


def remaining_seconds(phase: Phase, round_length: float, break_length: float, now: float) -> float:
    """Unclamped remaining time; negative once the phase is overdue."""
    if phase.kind == PhaseKind.RUNNING:
        return round_length - elapsed_seconds(phase, now)
    if phase.kind == PhaseKind.BREAK:
        return break_length - elapsed_seconds(phase, now)
    return 0.0


def is_phase_complete(phase: Phase, round_length: float, break_length: float, now: float) -> bool:
    if phase.kind == PhaseKind.STOPPED:
        return False
    return remaining_seconds(phase, round_length, break_length, now) <= 0


def _checked_length(seconds: float, *, allow_zero: bool = True) -> float:
    value = float(seconds)
    if math.isnan(value) or value < 0:
        raise ValueError("Durations must be non-negative")
    if value == 0 and not allow_zero:
        raise ValueError("Durations must be positive")
    return value


class RoundTimer:
    """Work/break state machine driven by explicit `now` readings.

    The owner polls `tick()`; each call performs at most one transition and
    pushes the matching `TransitionEvent` into the effects sink without
    waiting on it.
    """

    def __init__(
        self,
        round_length: float = DEFAULT_ROUND_SECONDS,
        break_length: float = DEFAULT_BREAK_SECONDS,
        *,
        breaks_enabled: bool = True,
        track_focus_time: bool = True,
        effects: EffectsSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._round_length = _checked_length(round_length)
        self._break_length = _checked_length(break_length, allow_zero=False)
        self._breaks_enabled = breaks_enabled
        self._track_focus_time = track_focus_time
        self._effects = effects
        self._clock = clock or MonotonicClock()
        self._phase = Phase.stopped()
        self._completed_rounds = 0
        self._total_focus_seconds = 0.0

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def round_length(self) -> float:
        return self._round_length

    @property
    def break_length(self) -> float:
        return self._break_length

    @property
    def breaks_enabled(self) -> bool:
        return self._breaks_enabled

    @property
    def completed_round_count(self) -> int:
        return self._completed_rounds

    @property
    def total_focus_seconds(self) -> float:
        return self._total_focus_seconds

    @property
    def is_active(self) -> bool:
        return self._phase.kind != PhaseKind.STOPPED

    def set_round_length(self, seconds: float) -> None:
        self._round_length = _checked_length(seconds)

    def set_break_length(self, seconds: float) -> None:
        self._break_length = _checked_length(seconds, allow_zero=False)

    def set_breaks_enabled(self, enabled: bool) -> None:
        self._breaks_enabled = enabled

    def start(self, now: float | None = None) -> bool:
        if self.is_active:
            return False
        if self._round_length <= 0:
            logger.debug("Refusing to start a zero-length round")
            return False
        now = self._now(now)
        self._phase = Phase.running(now)
        self._emit(TransitionEvent.ROUND_STARTED)
        return True

    def stop(self, now: float | None = None) -> bool:
        if not self.is_active:
            return False
        if self._phase.kind == PhaseKind.RUNNING:
            self._bank_focus(self.elapsed(self._now(now)))
        self._phase = Phase.stopped()
        return True

    def toggle(self, now: float | None = None) -> bool:
        """Start when stopped, stop otherwise; returns True if now active."""
        if self.is_active:
            self.stop(now)
        else:
            self.start(now)
        return self.is_active

    def reset_count(self) -> None:
        self._completed_rounds = 0
        self._total_focus_seconds = 0.0

    def elapsed(self, now: float | None = None) -> float:
        return elapsed_seconds(self._phase, self._now(now))

    def remaining(self, now: float | None = None) -> float:
        return remaining_seconds(self._phase, self._round_length, self._break_length, self._now(now))

    def is_complete(self, now: float | None = None) -> bool:
        return is_phase_complete(self._phase, self._round_length, self._break_length, self._now(now))

    def tick(self, now: float | None = None) -> TransitionEvent | None:
        now = self._now(now)
        if not self.is_complete(now):
            return None

        if self._phase.kind == PhaseKind.RUNNING:
            self._completed_rounds += 1
            self._bank_focus(self.elapsed(now))
            if self._breaks_enabled:
                self._phase = Phase.on_break(now)
            else:
                self._phase = self._next_round(now)
            event = TransitionEvent.ROUND_FINISHED
        else:
            self._phase = self._next_round(now)
            if self._phase.kind == PhaseKind.STOPPED:
                logger.info("Break over, round length is zero so the timer stopped")
                return None
            event = TransitionEvent.BREAK_FINISHED

        logger.info("Transition %s, %d rounds completed", event.value, self._completed_rounds)
        self._emit(event)
        return event

    def snapshot(self, now: float | None = None) -> TimerSnapshot:
        now = self._now(now)
        remaining = self.remaining(now)
        if self._phase.kind == PhaseKind.RUNNING:
            total = self._round_length
        elif self._phase.kind == PhaseKind.BREAK:
            total = self._break_length
        else:
            total = 0.0
        elapsed = self.elapsed(now)
        progress = (elapsed / total) if total > 0 else 0.0
        return TimerSnapshot(
            phase=self._phase.kind,
            elapsed_seconds=elapsed,
            remaining_seconds=remaining,
            display_seconds=max(0.0, remaining),
            progress=max(0.0, min(1.0, progress)),
            completed_rounds=self._completed_rounds,
            total_focus_seconds=self._total_focus_seconds,
            text=format_remaining(remaining),
        )

    def _next_round(self, now: float) -> Phase:
        # a zero-length round would complete on every tick
        if self._round_length <= 0:
            logger.debug("Round length is zero, stopping instead of restarting")
            return Phase.stopped()
        return Phase.running(now)

    def _bank_focus(self, elapsed: float) -> None:
        if self._track_focus_time:
            self._total_focus_seconds += min(elapsed, self._round_length)

    def _emit(self, event: TransitionEvent) -> None:
        if self._effects is not None:
            self._effects.put(event)

    def _now(self, now: float | None) -> float:
        if now is None:
            return self._clock.now()
        return now
