"""Alert delivery for finished timers.

``AlertCenter`` is the ``AlertSink`` the registry talks to.  It keeps
one pending alert per running timer, armed as a single-shot ``QTimer``
for the deadline, so a notification still goes out on time even if the
tick that finishes the timer arrives late.  Whichever comes first, the
armed alert or ``on_timer_finished``, delivers the tray notification;
the other only cleans up.

Failures here (no tray, audio backend gone) are logged and dropped.
They never reach the countdown engine.

Signals
-------
alert_delivered(timer_id: str, name: str)
    A tray notification was shown for a timer.
timer_alerted(timer_id: str, name: str)
    ``on_timer_finished`` ran for a timer (sound + notification).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal
from PyQt6.QtWidgets import QSystemTrayIcon

from ..audio.sounds import SoundManager
from ..timer.engine import Clock


_LOGGER = logging.getLogger(__name__)


@dataclass
class PendingAlert:
    timer_id: str
    name: str
    deadline: float
    qt_timer: QTimer


class AlertCenter(QObject):
    """Schedules, cancels and delivers timer alerts."""

    alert_delivered = pyqtSignal(str, str)
    timer_alerted = pyqtSignal(str, str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sound_manager: SoundManager | None = None,
        tray_icon: QSystemTrayIcon | None = None,
        clock: Clock = time.time,
        notifications_enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._sound_manager = sound_manager
        self._tray_icon = tray_icon
        self._clock = clock
        self._notifications_enabled = notifications_enabled
        self._pending: dict[str, PendingAlert] = {}

    # ── configuration ─────────────────────────────────────────────────

    @property
    def notifications_enabled(self) -> bool:
        return self._notifications_enabled

    def set_notifications_enabled(self, enabled: bool) -> None:
        self._notifications_enabled = enabled

    def set_tray_icon(self, tray_icon: QSystemTrayIcon | None) -> None:
        self._tray_icon = tray_icon

    @property
    def pending_ids(self) -> list[str]:
        return list(self._pending)

    def pending(self, timer_id: str) -> PendingAlert | None:
        return self._pending.get(timer_id)

    # ══════════════════════════════════════════════════════════════════
    #  AlertSink
    # ══════════════════════════════════════════════════════════════════

    def schedule_alert(self, timer_id: str, name: str, deadline: float) -> None:
        self._discard(timer_id)

        qt_timer = QTimer(self)
        qt_timer.setSingleShot(True)
        # Counts monotonic time, so it fires late after a system sleep; the
        # finishing tick, which reads the wall clock, delivers the alert then.
        qt_timer.setTimerType(Qt.TimerType.PreciseTimer)
        qt_timer.setInterval(max(0, int((deadline - self._clock()) * 1000)))
        qt_timer.timeout.connect(lambda: self._on_deadline(timer_id))
        self._pending[timer_id] = PendingAlert(timer_id, name, deadline, qt_timer)
        qt_timer.start()

    def cancel_alert(self, timer_id: str) -> None:
        self._discard(timer_id)

    def on_timer_finished(self, timer_id: str, name: str) -> None:
        pending = self._pending.pop(timer_id, None)
        if pending is not None:
            pending.qt_timer.stop()
            pending.qt_timer.deleteLater()
            self._show_notification(timer_id, name)
        self._play("timer_complete")
        _LOGGER.info("Timer %r (%s) finished", name, timer_id)
        self.timer_alerted.emit(timer_id, name)

    def clear(self) -> None:
        """Cancel every pending alert."""
        for timer_id in list(self._pending):
            self._discard(timer_id)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _discard(self, timer_id: str) -> None:
        pending = self._pending.pop(timer_id, None)
        if pending is None:
            return
        pending.qt_timer.stop()
        pending.qt_timer.deleteLater()

    def _on_deadline(self, timer_id: str) -> None:
        pending = self._pending.pop(timer_id, None)
        if pending is None:
            return
        pending.qt_timer.deleteLater()
        self._show_notification(pending.timer_id, pending.name)

    def _show_notification(self, timer_id: str, name: str) -> None:
        if not self._notifications_enabled or self._tray_icon is None:
            return
        try:
            self._tray_icon.showMessage("Time's up", f"{name} is done")
        except RuntimeError as exc:
            _LOGGER.warning("Could not show notification for %r: %s", name, exc)
            return
        self.alert_delivered.emit(timer_id, name)

    def _play(self, sound: str) -> None:
        if self._sound_manager is None:
            return
        try:
            self._sound_manager.play(sound)
        except RuntimeError as exc:
            _LOGGER.warning("Could not play %s: %s", sound, exc)
