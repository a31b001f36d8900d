"""Tests for the Qt tick driver."""

import pytest

from multitimer.timer.driver import DEFAULT_INTERVAL_MS, TickDriver
from multitimer.timer.engine import TimerState

from helpers import SignalCollector


@pytest.fixture
def driver(qapp, registry, clock):
    d = TickDriver(registry, clock=clock)
    yield d
    d.detach()


@pytest.mark.usefixtures("qapp")
class TestTickDriver:

    def test_default_interval_is_one_second(self, driver):
        assert driver.interval_ms == DEFAULT_INTERVAL_MS == 1000
        assert not driver.is_active

    def test_start_stop(self, driver):
        driver.start()
        assert driver.is_active
        driver.stop()
        assert not driver.is_active

    def test_set_interval_floor(self, driver):
        driver.set_interval(0)
        assert driver.interval_ms == 1

    def test_tick_reads_clock_and_evaluates(self, driver, registry, clock):
        t = registry.add("a", 60)
        registry.start(t.id)
        clock.advance(15)
        ticked = SignalCollector()
        driver.ticked.connect(ticked)

        driver._on_tick()

        assert t.remaining == 45
        assert len(ticked) == 1

    def test_timer_changed_signal(self, driver, registry):
        c = SignalCollector()
        driver.timer_changed.connect(c)
        t = registry.add("a", 60)
        registry.start(t.id)
        assert c.last is t

    def test_collection_changed_signal(self, driver, registry):
        c = SignalCollector()
        driver.collection_changed.connect(c)
        t = registry.add("a", 60)
        registry.remove(t.id)
        assert len(c) == 2

    def test_started_and_finished_signals(self, driver, registry, clock):
        started = SignalCollector()
        finished = SignalCollector()
        driver.timer_started.connect(started)
        driver.timer_finished.connect(finished)

        t = registry.add("Tea", 180)
        registry.start(t.id)
        clock.advance(500)  # one late tick after a long gap
        driver._on_tick()
        driver._on_tick()

        assert started.items == [t.id]
        assert finished.items == [(t.id, "Tea")]
        assert t.state == TimerState.FINISHED
        assert t.remaining == 0

    def test_detach_stops_forwarding(self, driver, registry):
        c = SignalCollector()
        driver.collection_changed.connect(c)
        driver.start()
        driver.detach()
        registry.add("a", 10)
        assert len(c) == 0
        assert not driver.is_active
