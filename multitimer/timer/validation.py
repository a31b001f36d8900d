"""Input checks for new timers, applied before anything reaches the registry."""

from __future__ import annotations

import math


MAX_HOURS = 23


class ValidationError(ValueError):
    """Raised with a user-facing message when timer input is rejected."""


def duration_from_hms(hours: int, minutes: int, seconds: int) -> int:
    """Total seconds for an hours/minutes/seconds picker selection."""
    return hours * 3600 + minutes * 60 + seconds


def format_hms(seconds: float) -> str:
    """``HH:MM:SS`` for *seconds*, rounded up so 0.4 s left reads 00:00:01."""
    total = int(math.ceil(max(0.0, seconds)))
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def validate_timer_input(name: str, duration: float) -> tuple[str, float]:
    """Return the cleaned ``(name, duration)`` or raise ``ValidationError``."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Give the timer a name.")
    if duration is None or not math.isfinite(duration) or duration <= 0:
        raise ValidationError("Pick a duration longer than zero.")
    return cleaned, float(duration)
