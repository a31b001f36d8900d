"""MultiTimer: several named countdown timers on one shared clock."""

__version__ = "0.1.0"
