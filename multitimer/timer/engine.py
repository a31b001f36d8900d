"""Countdown state machine for a single MultiTimer timer.

States
------
IDLE        Never started, or reset.  ``remaining == duration``.
RUNNING     Counting down towards ``deadline``.
PAUSED      Frozen; ``remaining`` holds what was left at pause time.
FINISHED    Reached zero.  Only ``reset()`` leaves this state.

Transitions
-----------
IDLE → RUNNING                      (start)
PAUSED → RUNNING                    (start)
RUNNING → PAUSED                    (pause)
RUNNING → FINISHED                  (evaluate_tick at/after deadline)
Any → IDLE                          (reset)

Every other call is a silent no-op.

Remaining time is always recomputed from an absolute ``deadline``
rather than decremented once per tick, so late ticks, skipped ticks and
ticks after the machine woke from sleep all land on the true value.
"""

from __future__ import annotations

import logging
import time
import uuid
from enum import Enum
from typing import Callable, Protocol


_LOGGER = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class TimerEvent(Enum):
    """What happened to a timer, passed to observers."""

    STARTED = "started"
    PAUSED = "paused"
    RESET = "reset"
    TICKED = "ticked"
    FINISHED = "finished"
    RENAMED = "renamed"


# ── collaborator interfaces ───────────────────────────────────────────────

Clock = Callable[[], float]
TimerListener = Callable[["Timer", TimerEvent], None]


class AlertSink(Protocol):
    """Whatever turns timer deadlines into sounds and notifications.

    The engine calls these synchronously and never looks at the result.
    """

    def schedule_alert(self, timer_id: str, name: str, deadline: float) -> None: ...

    def cancel_alert(self, timer_id: str) -> None: ...

    def on_timer_finished(self, timer_id: str, name: str) -> None: ...


class NullAlertSink:
    """Alert sink that does nothing.  Default for headless use."""

    def schedule_alert(self, timer_id: str, name: str, deadline: float) -> None:
        pass

    def cancel_alert(self, timer_id: str) -> None:
        pass

    def on_timer_finished(self, timer_id: str, name: str) -> None:
        pass


# ── timer ─────────────────────────────────────────────────────────────────


class Timer:
    """One named countdown.

    Not thread-safe on its own; ``TimerRegistry`` serialises access when
    timers are driven through it.
    """

    def __init__(
        self,
        name: str,
        duration: float,
        *,
        clock: Clock = time.time,
        alerts: AlertSink | None = None,
        timer_id: str | None = None,
    ) -> None:
        self._id: str = timer_id or uuid.uuid4().hex
        self._name: str = name
        self._duration: float = max(0.0, float(duration))
        self._remaining: float = self._duration
        self._state: TimerState = TimerState.IDLE
        self._deadline: float | None = None

        self._clock = clock
        self._alerts: AlertSink = alerts if alerts is not None else NullAlertSink()
        self._listeners: list[TimerListener] = []

    def __repr__(self) -> str:
        return (
            f"Timer(id={self._id!r}, name={self._name!r}, "
            f"remaining={self._remaining:.1f}/{self._duration:.1f}, "
            f"state={self._state.value})"
        )

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def duration(self) -> float:
        """Configured countdown length in seconds."""
        return self._duration

    @property
    def remaining(self) -> float:
        """Seconds left as of the last start/pause/tick."""
        return self._remaining

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def deadline(self) -> float | None:
        """Wall-clock instant this timer hits zero.  ``None`` unless RUNNING."""
        return self._deadline

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def progress(self) -> float:
        """0.0 → 1.0 fraction of the duration already elapsed."""
        if self._duration <= 0:
            return 0.0
        elapsed = self._duration - self._remaining
        return max(0.0, min(1.0, elapsed / self._duration))

    # ══════════════════════════════════════════════════════════════════
    #  OBSERVERS
    # ══════════════════════════════════════════════════════════════════

    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, event: TimerEvent) -> None:
        for listener in list(self._listeners):
            listener(self, event)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, now: float | None = None) -> None:
        """Start or resume.  No-op while RUNNING or FINISHED."""
        if self._state not in (TimerState.IDLE, TimerState.PAUSED):
            return
        now = self._now(now)
        self._deadline = now + self._remaining
        self._state = TimerState.RUNNING
        _LOGGER.debug("%r started, deadline %.3f", self, self._deadline)
        self._alerts.schedule_alert(self._id, self._name, self._deadline)
        self._notify(TimerEvent.STARTED)

    def pause(self, now: float | None = None) -> None:
        """Freeze the countdown.  No-op unless RUNNING."""
        if self._state != TimerState.RUNNING or self._deadline is None:
            return
        now = self._now(now)
        self._remaining = self._clamp(self._deadline - now)
        self._deadline = None
        self._state = TimerState.PAUSED
        _LOGGER.debug("%r paused", self)
        self._alerts.cancel_alert(self._id)
        self._notify(TimerEvent.PAUSED)

    def reset(self) -> None:
        """Back to IDLE with the full duration, from any state."""
        self._remaining = self._duration
        self._deadline = None
        self._state = TimerState.IDLE
        _LOGGER.debug("%r reset", self)
        self._alerts.cancel_alert(self._id)
        self._notify(TimerEvent.RESET)

    def evaluate_tick(self, now: float | None = None) -> None:
        """Recompute ``remaining`` from the deadline; finish at zero."""
        if self._state != TimerState.RUNNING or self._deadline is None:
            return
        now = self._now(now)
        left = self._deadline - now
        if left <= 0:
            self._finish()
            return
        self._remaining = self._clamp(left)
        self._notify(TimerEvent.TICKED)

    def rename(self, name: str) -> None:
        """Change the label.  Run state is untouched."""
        if name == self._name:
            return
        self._name = name
        self._notify(TimerEvent.RENAMED)

    def bind(self, *, clock: Clock, alerts: AlertSink) -> None:
        """Use *clock* and *alerts* from now on.  Called when a registry adopts the timer."""
        self._clock = clock
        self._alerts = alerts

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _finish(self) -> None:
        self._remaining = 0.0
        self._deadline = None
        self._state = TimerState.FINISHED
        _LOGGER.debug("%r finished", self)
        self._alerts.on_timer_finished(self._id, self._name)
        self._notify(TimerEvent.FINISHED)

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def _clamp(self, seconds: float) -> float:
        return max(0.0, min(self._duration, seconds))
