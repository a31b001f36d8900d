"""Modal dialog for creating a timer.

The dialog is the validation boundary: ``Add`` only closes it once
``validate_timer_input`` accepts the name and duration, otherwise the
message is shown inline and nothing reaches the registry.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog, QFormLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QSpinBox, QVBoxLayout, QWidget,
)

from ..timer.validation import (
    MAX_HOURS,
    ValidationError,
    duration_from_hms,
    validate_timer_input,
)


class AddTimerDialog(QDialog):
    """Name + hours/minutes/seconds picker."""

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        default_name: str = "Timer",
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("New Timer")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._result: tuple[str, float] | None = None
        self._build_ui(default_name)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self, default_name: str) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._name_edit = QLineEdit(default_name, self)
        self._name_edit.setMaxLength(80)
        self._name_edit.selectAll()
        form.addRow("Name:", self._name_edit)

        self._hours_spin = self._spin(MAX_HOURS, " h")
        self._minutes_spin = self._spin(59, " m")
        self._seconds_spin = self._spin(59, " s")

        picker = QHBoxLayout()
        picker.setSpacing(8)
        picker.addWidget(self._hours_spin)
        picker.addWidget(self._minutes_spin)
        picker.addWidget(self._seconds_spin)
        picker_wrapper = QWidget(self)
        picker_wrapper.setLayout(picker)
        form.addRow("Duration:", picker_wrapper)
        root.addLayout(form)

        self._error_label = QLabel("", self)
        self._error_label.setObjectName("errorLabel")
        self._error_label.setVisible(False)
        root.addWidget(self._error_label)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel", self)
        cancel_btn.clicked.connect(self.reject)
        self._add_btn = QPushButton("Add", self)
        self._add_btn.setObjectName("startButton")
        self._add_btn.setDefault(True)
        self._add_btn.clicked.connect(self._on_add)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(self._add_btn)
        root.addLayout(btn_row)

    def _spin(self, maximum: int, suffix: str) -> QSpinBox:
        spin = QSpinBox(self)
        spin.setRange(0, maximum)
        spin.setSuffix(suffix)
        return spin

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_add(self) -> None:
        duration = duration_from_hms(
            self._hours_spin.value(),
            self._minutes_spin.value(),
            self._seconds_spin.value(),
        )
        try:
            self._result = validate_timer_input(self._name_edit.text(), duration)
        except ValidationError as exc:
            self._result = None
            self._error_label.setText(str(exc))
            self._error_label.setVisible(True)
            return
        self.accept()

    # ── public ────────────────────────────────────────────────────────────

    def set_values(self, name: str, hours: int, minutes: int, seconds: int) -> None:
        self._name_edit.setText(name)
        self._hours_spin.setValue(hours)
        self._minutes_spin.setValue(minutes)
        self._seconds_spin.setValue(seconds)

    @property
    def result_value(self) -> tuple[str, float] | None:
        """``(name, duration)`` once accepted, else ``None``."""
        return self._result

    @property
    def error_text(self) -> str:
        return "" if self._error_label.isHidden() else self._error_label.text()
