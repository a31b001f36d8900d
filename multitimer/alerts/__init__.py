"""Alert package."""

from .center import AlertCenter, PendingAlert

__all__ = ["AlertCenter", "PendingAlert"]
