"""Shared test helpers for MultiTimer."""


class SignalCollector:
    """Utility to capture pyqtSignal emissions (or plain callbacks) into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now

    def set(self, now: float) -> float:
        self.now = now
        return self.now


class RecordingAlerts:
    """AlertSink that records every call as a tuple."""

    def __init__(self):
        self.calls: list[tuple] = []

    def schedule_alert(self, timer_id, name, deadline):
        self.calls.append(("schedule", timer_id, name, deadline))

    def cancel_alert(self, timer_id):
        self.calls.append(("cancel", timer_id))

    def on_timer_finished(self, timer_id, name):
        self.calls.append(("finished", timer_id, name))

    def of_kind(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]

    def clear(self):
        self.calls.clear()
