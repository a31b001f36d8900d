"""Qt side of the shared clock.

``TickDriver`` owns the repeating ``QTimer`` that calls
``TimerRegistry.tick`` and turns registry callbacks into Qt signals so
widgets can connect to them the usual way.

Signals
-------
ticked()
    After every tick, whether or not anything changed.
timer_changed(timer: Timer)
    A timer started, paused, reset, ticked, finished or was renamed.
timer_started(timer_id: str)
    A timer started or resumed.
timer_finished(timer_id: str, name: str)
    A timer reached zero.  Emitted once per run.
collection_changed()
    A timer was added or removed.
"""

from __future__ import annotations

import time

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .engine import Clock, Timer, TimerEvent
from .registry import RegistryEvent, TimerRegistry


DEFAULT_INTERVAL_MS = 1000


class TickDriver(QObject):
    """Drives *registry* from the Qt event loop."""

    ticked = pyqtSignal()
    timer_changed = pyqtSignal(object)
    timer_started = pyqtSignal(str)
    timer_finished = pyqtSignal(str, str)
    collection_changed = pyqtSignal()

    def __init__(
        self,
        registry: TimerRegistry,
        parent: QObject | None = None,
        *,
        clock: Clock = time.time,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._registry = registry
        self._clock = clock
        self._unsubscribe = registry.subscribe(self._on_registry_event)

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(max(1, interval_ms))
        self._qt_timer.timeout.connect(self._on_tick)

    @property
    def registry(self) -> TimerRegistry:
        return self._registry

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def set_interval(self, interval_ms: int) -> None:
        self._qt_timer.setInterval(max(1, interval_ms))

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def start(self) -> None:
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()

    def detach(self) -> None:
        """Stop ticking and stop listening to the registry."""
        self.stop()
        self._unsubscribe()

    # ── internal ──────────────────────────────────────────────────────

    def _on_tick(self) -> None:
        self._registry.tick(self._clock())
        self.ticked.emit()

    def _on_registry_event(
        self, event: RegistryEvent | TimerEvent, timer: Timer,
    ) -> None:
        if isinstance(event, RegistryEvent):
            self.collection_changed.emit()
            return
        self.timer_changed.emit(timer)
        if event == TimerEvent.STARTED:
            self.timer_started.emit(timer.id)
        elif event == TimerEvent.FINISHED:
            self.timer_finished.emit(timer.id, timer.name)
