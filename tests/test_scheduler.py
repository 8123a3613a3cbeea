"""
Tests for the background tick scheduler and its use with SimEngine.
"""

import threading
import time

import pytest

from spring_sim.engine import SimEngine
from spring_sim.model import MassSpringModel
from spring_sim.scheduler import TickScheduler
from spring_sim.timeseries import TimeSeriesLog


class Counter:
    def __init__(self):
        self.calls = 0
        self.lock = threading.Lock()

    def __call__(self):
        with self.lock:
            self.calls += 1


class TestTickScheduler:

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValueError):
            TickScheduler(lambda: None, period_s=0)

    def test_calls_callback_repeatedly(self):
        counter = Counter()
        scheduler = TickScheduler(counter, period_s=0.005)
        scheduler.start()
        time.sleep(0.2)
        scheduler.stop()

        assert counter.calls >= 2
        assert not scheduler.is_alive

    def test_no_calls_after_stop(self):
        counter = Counter()
        scheduler = TickScheduler(counter, period_s=0.005)
        scheduler.start()
        time.sleep(0.05)
        scheduler.stop()
        calls = counter.calls
        time.sleep(0.05)
        assert counter.calls == calls

    def test_start_is_idempotent(self):
        scheduler = TickScheduler(Counter(), period_s=0.01)
        scheduler.start()
        thread = scheduler._thread
        scheduler.start()
        assert scheduler._thread is thread
        scheduler.stop()

    def test_stop_without_start(self):
        TickScheduler(Counter()).stop()

    def test_context_manager(self):
        counter = Counter()
        with TickScheduler(counter, period_s=0.005) as scheduler:
            time.sleep(0.05)
            assert scheduler.is_alive
        assert not scheduler.is_alive

    def test_callback_error_reraised_on_stop(self):
        def boom():
            raise RuntimeError("tick failed")

        scheduler = TickScheduler(boom, period_s=0.005)
        scheduler.start()
        time.sleep(0.05)
        with pytest.raises(RuntimeError, match="tick failed"):
            scheduler.stop()

    def test_stop_timeout_keeps_single_thread(self):
        release = threading.Event()
        counter = Counter()

        def slow():
            counter()
            release.wait(1.0)

        scheduler = TickScheduler(slow, period_s=0.005)
        scheduler.start()
        while counter.calls == 0:
            time.sleep(0.001)

        scheduler.stop(timeout=0.01)
        assert scheduler.is_alive
        thread = scheduler._thread

        scheduler.start()
        assert scheduler._thread is thread

        release.set()
        scheduler.stop(timeout=1.0)
        assert not scheduler.is_alive
        assert counter.calls == 1


class TestSchedulerWithEngine:

    def test_ticks_only_while_running(self):
        engine = SimEngine(MassSpringModel(), TimeSeriesLog())
        engine.apply_params({"m": 1.0, "k": 20.0, "dt": 0.01})

        with TickScheduler(engine.on_timer, period_s=0.002):
            time.sleep(0.05)
            assert engine.log.count() == 1

            engine.start()
            time.sleep(0.1)
            engine.pause()
            count = engine.log.count()
            time.sleep(0.05)
            assert engine.log.count() == count

        assert count > 1
        times = engine.log.times
        for i, t in enumerate(times):
            assert t == pytest.approx(i * 0.01)

    def test_reads_during_ticks_are_consistent(self):
        engine = SimEngine(MassSpringModel(), TimeSeriesLog())
        engine.apply_params({"m": 1.0, "k": 20.0, "dt": 0.001})

        with TickScheduler(engine.on_timer, period_s=0.001):
            engine.start()
            for _ in range(50):
                snap = engine.snapshot()
                assert snap.total_energy == pytest.approx(snap.kinetic_energy + snap.potential_energy)
                data = engine.log_array()
                assert data.shape[1] == 7
                time.sleep(0.001)
            engine.pause()
