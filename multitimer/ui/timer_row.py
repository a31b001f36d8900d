"""One row of the timer list.

Layout:
    name ................................ HH:MM:SS
    [progress bar                                 ]
    [Start/Pause] [Reset]                    [Delete]

Double-click the name to rename the timer.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame, QHBoxLayout, QInputDialog, QLabel, QLineEdit,
    QProgressBar, QPushButton, QVBoxLayout, QWidget,
)

from ..timer.engine import Timer, TimerState
from ..timer.registry import TimerRegistry
from ..timer.validation import format_hms
from .styles import state_color


PROGRESS_STEPS = 1000


class _NameLabel(QLabel):
    double_clicked = pyqtSignal()

    def mouseDoubleClickEvent(self, event) -> None:  # type: ignore[override]
        self.double_clicked.emit()
        event.accept()


class TimerRow(QFrame):
    """Shows one timer and forwards its buttons to the registry."""

    delete_requested = pyqtSignal(str)

    def __init__(
        self,
        timer: Timer,
        registry: TimerRegistry,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("timerRow")
        self._timer = timer
        self._registry = registry
        self._build_ui()
        self._connect_signals()
        self.refresh()

    @property
    def timer_id(self) -> str:
        return self._timer.id

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        top = QHBoxLayout()
        self._name_label = _NameLabel(self)
        self._name_label.setObjectName("timerName")
        self._name_label.setToolTip("Double-click to rename")
        self._time_label = QLabel(self)
        self._time_label.setObjectName("timerTime")
        self._time_label.setAlignment(
            Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter,
        )
        top.addWidget(self._name_label, 1)
        top.addWidget(self._time_label)
        layout.addLayout(top)

        self._progress = QProgressBar(self)
        self._progress.setRange(0, PROGRESS_STEPS)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        buttons = QHBoxLayout()
        buttons.setSpacing(12)
        self._toggle_btn = QPushButton("Start", self)
        self._toggle_btn.setObjectName("startButton")
        self._reset_btn = QPushButton("Reset", self)
        self._reset_btn.setObjectName("resetButton")
        self._delete_btn = QPushButton("Delete", self)
        self._delete_btn.setObjectName("deleteButton")
        buttons.addWidget(self._toggle_btn)
        buttons.addWidget(self._reset_btn)
        buttons.addStretch()
        buttons.addWidget(self._delete_btn)
        layout.addLayout(buttons)

    def _connect_signals(self) -> None:
        self._toggle_btn.clicked.connect(self._on_toggle)
        self._reset_btn.clicked.connect(
            lambda: self._registry.reset(self._timer.id)
        )
        self._delete_btn.clicked.connect(
            lambda: self.delete_requested.emit(self._timer.id)
        )
        self._name_label.double_clicked.connect(self._on_rename_requested)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_toggle(self) -> None:
        self._registry.toggle(self._timer.id)

    def _on_rename_requested(self) -> None:
        text, ok = QInputDialog.getText(
            self, "Rename Timer", "Name:",
            QLineEdit.EchoMode.Normal, self._timer.name,
        )
        if ok:
            self.rename(text)

    def rename(self, text: str) -> None:
        """Apply a new name; blank input keeps the old one."""
        name = text.strip()
        if name:
            self._registry.rename(self._timer.id, name)

    # ── display ───────────────────────────────────────────────────────────

    def refresh(self) -> None:
        timer = self._timer
        state = timer.state
        self._name_label.setText(timer.name)
        self._time_label.setText(format_hms(timer.remaining))
        self._time_label.setStyleSheet(f"color: {state_color(state)};")
        self._progress.setValue(round(timer.progress * PROGRESS_STEPS))

        if state == TimerState.RUNNING:
            self._toggle_btn.setText("Pause")
            self._toggle_btn.setObjectName("pauseButton")
        else:
            self._toggle_btn.setText("Resume" if state == TimerState.PAUSED else "Start")
            self._toggle_btn.setObjectName("startButton")
        # Object name drives the QSS rule, so re-polish after changing it
        self._toggle_btn.style().unpolish(self._toggle_btn)
        self._toggle_btn.style().polish(self._toggle_btn)
        self._toggle_btn.setEnabled(state != TimerState.FINISHED)
