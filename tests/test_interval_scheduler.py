"""Tests for the polled repeating-timer service."""

import pytest

from controller.interval_scheduler import IntervalScheduler
from shared.interfaces import IScheduler


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return IntervalScheduler(clock=clock)


class TestIntervalScheduler:
    def test_satisfies_protocol(self, scheduler):
        assert isinstance(scheduler, IScheduler)

    def test_not_due_before_interval(self, clock, scheduler):
        calls = []
        scheduler.schedule_interval(lambda: calls.append(1), 100)
        clock.now = 99
        assert scheduler.run_pending() == 0
        assert calls == []

    def test_fires_each_interval(self, clock, scheduler):
        calls = []
        scheduler.schedule_interval(lambda: calls.append(clock.now), 100)
        clock.now = 100
        scheduler.run_pending()
        clock.now = 200
        scheduler.run_pending()
        assert calls == [100, 200]

    def test_catch_up(self, clock, scheduler):
        calls = []
        scheduler.schedule_interval(lambda: calls.append(1), 100)
        clock.now = 350
        assert scheduler.run_pending() == 3
        clock.now = 400
        assert scheduler.run_pending() == 1
        assert len(calls) == 4

    def test_explicit_now(self, scheduler):
        calls = []
        scheduler.schedule_interval(lambda: calls.append(1), 50)
        assert scheduler.run_pending(now_ms=100) == 2

    def test_cancel(self, clock, scheduler):
        calls = []
        handle = scheduler.schedule_interval(lambda: calls.append(1), 100)
        assert scheduler.is_scheduled(handle)
        scheduler.cancel(handle)
        assert not scheduler.is_scheduled(handle)
        clock.now = 1000
        assert scheduler.run_pending() == 0
        assert calls == []

    def test_cancel_is_idempotent(self, scheduler):
        handle = scheduler.schedule_interval(lambda: None, 100)
        scheduler.cancel(handle)
        scheduler.cancel(handle)
        scheduler.cancel(999)
        assert scheduler.active_count() == 0

    def test_cancel_from_callback(self, clock, scheduler):
        """A job cancelled by an earlier job in the same pass does not fire."""
        calls = []
        handles = {}

        def first():
            calls.append("first")
            scheduler.cancel(handles["second"])

        handles["first"] = scheduler.schedule_interval(first, 100)
        handles["second"] = scheduler.schedule_interval(lambda: calls.append("second"), 100)
        clock.now = 100
        scheduler.run_pending()
        assert calls == ["first"]

    def test_self_cancel_stops_catch_up(self, clock, scheduler):
        calls = []
        handle = None

        def once():
            calls.append(1)
            scheduler.cancel(handle)

        handle = scheduler.schedule_interval(once, 100)
        clock.now = 500
        assert scheduler.run_pending() == 1

    def test_unique_handles(self, scheduler):
        a = scheduler.schedule_interval(lambda: None, 10)
        b = scheduler.schedule_interval(lambda: None, 10)
        assert a != b
        assert scheduler.active_count() == 2
        scheduler.cancel_all()
        assert scheduler.active_count() == 0

    @pytest.mark.parametrize("interval", [0, -5])
    def test_invalid_interval(self, scheduler, interval):
        with pytest.raises(ValueError):
            scheduler.schedule_interval(lambda: None, interval)

    def test_default_clock(self):
        scheduler = IntervalScheduler()
        assert scheduler.now() > 0
