"""Timer package."""

from .engine import (
    AlertSink,
    NullAlertSink,
    Timer,
    TimerEvent,
    TimerState,
)
from .registry import RegistryEvent, TimerRegistry
from .validation import (
    ValidationError,
    duration_from_hms,
    format_hms,
    validate_timer_input,
)

__all__ = [
    "AlertSink",
    "NullAlertSink",
    "Timer",
    "TimerEvent",
    "TimerState",
    "RegistryEvent",
    "TimerRegistry",
    "ValidationError",
    "duration_from_hms",
    "format_hms",
    "validate_timer_input",
]
