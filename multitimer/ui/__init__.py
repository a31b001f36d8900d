"""UI package."""

from .add_timer_dialog import AddTimerDialog
from .settings_dialog import SettingsDialog
from .timer_row import TimerRow

__all__ = [
    "AddTimerDialog",
    "SettingsDialog",
    "TimerRow",
]
