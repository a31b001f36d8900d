"""Ordered collection of timers sharing one periodic tick.

The registry owns its timers: they are created through ``add()`` and
die with ``remove()``.  Iteration order is insertion order, which is
also the display order.

All mutating calls take a per-registry re-entrant lock, so a host that
drives the tick from a worker thread and handles user input on another
stays consistent.  Contention is negligible at this scale, so one coarse
lock is enough.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Iterable, Iterator

from .engine import AlertSink, Clock, NullAlertSink, Timer, TimerEvent, TimerState


_LOGGER = logging.getLogger(__name__)


class RegistryEvent(Enum):
    """Collection-level changes.  Per-timer changes arrive as ``TimerEvent``."""

    ADDED = "added"
    REMOVED = "removed"


RegistryListener = Callable[["RegistryEvent | TimerEvent", Timer], None]


class TimerRegistry:
    """Owns the timers and fans the shared tick out to the running ones.

    Listeners receive ``(event, timer)`` where *event* is a
    ``RegistryEvent`` for add/remove and the timer's own ``TimerEvent``
    for everything else.
    """

    def __init__(
        self,
        *,
        clock: Clock = time.time,
        alerts: AlertSink | None = None,
        timers: Iterable[Timer] = (),
    ) -> None:
        self._clock = clock
        self._alerts: AlertSink = alerts if alerts is not None else NullAlertSink()
        self._lock = threading.RLock()
        self._timers: list[Timer] = []
        self._unsubscribers: dict[str, Callable[[], None]] = {}
        self._listeners: list[RegistryListener] = []

        for timer in timers:
            self._adopt(timer)

    # ══════════════════════════════════════════════════════════════════
    #  COLLECTION
    # ══════════════════════════════════════════════════════════════════

    def __len__(self) -> int:
        return len(self._timers)

    def __iter__(self) -> Iterator[Timer]:
        with self._lock:
            return iter(list(self._timers))

    def __contains__(self, timer_id: object) -> bool:
        return self.get(timer_id) is not None  # type: ignore[arg-type]

    @property
    def timers(self) -> list[Timer]:
        """Snapshot of the timers in display order."""
        with self._lock:
            return list(self._timers)

    @property
    def running_count(self) -> int:
        with self._lock:
            return sum(1 for t in self._timers if t.is_running)

    def ids(self) -> list[str]:
        with self._lock:
            return [t.id for t in self._timers]

    def get(self, timer_id: str) -> Timer | None:
        with self._lock:
            for timer in self._timers:
                if timer.id == timer_id:
                    return timer
        return None

    def add(self, name: str, duration: float) -> Timer:
        """Append a new IDLE timer.

        Input is not validated here; see
        ``multitimer.timer.validation.validate_timer_input``.
        """
        timer = Timer(name, duration, clock=self._clock, alerts=self._alerts)
        with self._lock:
            self._adopt(timer)
        _LOGGER.info("Added timer %r (%s, %.0fs)", name, timer.id, timer.duration)
        self._notify(RegistryEvent.ADDED, timer)
        return timer

    def remove(self, timer_id: str) -> bool:
        """Drop the timer with *timer_id* and cancel its pending alert.

        Returns ``False`` (and changes nothing) for an unknown id.
        """
        with self._lock:
            timer = self.get(timer_id)
            if timer is None:
                return False
            self._timers.remove(timer)
            unsubscribe = self._unsubscribers.pop(timer_id, None)
            if unsubscribe is not None:
                unsubscribe()
            self._alerts.cancel_alert(timer_id)
        _LOGGER.info("Removed timer %r (%s)", timer.name, timer_id)
        self._notify(RegistryEvent.REMOVED, timer)
        return True

    # ══════════════════════════════════════════════════════════════════
    #  SHARED CLOCK
    # ══════════════════════════════════════════════════════════════════

    def tick(self, now: float | None = None) -> None:
        """Re-evaluate every running timer against *now*."""
        with self._lock:
            if now is None:
                now = self._clock()
            for timer in list(self._timers):
                if timer.state == TimerState.RUNNING:
                    timer.evaluate_tick(now)

    def reset_all(self) -> None:
        with self._lock:
            for timer in list(self._timers):
                timer.reset()

    # ══════════════════════════════════════════════════════════════════
    #  ID-ADDRESSED CONTROLS (no-ops for unknown ids)
    # ══════════════════════════════════════════════════════════════════

    def start(self, timer_id: str, now: float | None = None) -> None:
        with self._lock:
            timer = self.get(timer_id)
            if timer is not None:
                timer.start(now)

    def pause(self, timer_id: str, now: float | None = None) -> None:
        with self._lock:
            timer = self.get(timer_id)
            if timer is not None:
                timer.pause(now)

    def reset(self, timer_id: str) -> None:
        with self._lock:
            timer = self.get(timer_id)
            if timer is not None:
                timer.reset()

    def toggle(self, timer_id: str, now: float | None = None) -> None:
        """Pause a running timer, otherwise start it."""
        with self._lock:
            timer = self.get(timer_id)
            if timer is None:
                return
            if timer.is_running:
                timer.pause(now)
            else:
                timer.start(now)

    def rename(self, timer_id: str, name: str) -> None:
        with self._lock:
            timer = self.get(timer_id)
            if timer is not None:
                timer.rename(name)

    # ══════════════════════════════════════════════════════════════════
    #  OBSERVERS
    # ══════════════════════════════════════════════════════════════════

    def subscribe(self, listener: RegistryListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, event: RegistryEvent | TimerEvent, timer: Timer) -> None:
        for listener in list(self._listeners):
            listener(event, timer)

    def _on_timer_event(self, timer: Timer, event: TimerEvent) -> None:
        self._notify(event, timer)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _adopt(self, timer: Timer) -> None:
        if any(t.id == timer.id for t in self._timers):
            raise ValueError(f"duplicate timer id {timer.id!r}")
        timer.bind(clock=self._clock, alerts=self._alerts)
        self._timers.append(timer)
        self._unsubscribers[timer.id] = timer.subscribe(self._on_timer_event)
