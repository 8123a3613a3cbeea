"""
Stepping engine - the only write path into a model and its log.

Provides:
    - Fixed-step ticking (advance one dt, then log the snapshot)
    - Run/pause/single-step control as a two-state machine
    - Thread-safe reads for renderers

SCHEDULING:
    The engine owns no timer. Whatever drives it (TickScheduler thread, a GUI
    frame loop, a test) calls on_timer() at its own cadence; the cadence only
    decides how often ticks happen, never the physics step size.
"""

import math
import threading
from enum import Enum, auto
from typing import Mapping

import numpy as np

from .exceptions import InvalidParameterError
from .logger import Logger
from .sim_model import Canvas, SimModel, Viewport
from .state import Snapshot
from .timeseries import TimeSeriesLog, rows_to_array


class EngineMode(Enum):
    """Run state of the engine."""
    PAUSED = auto()
    RUNNING = auto()


class SimEngine:
    """
    Drives one SimModel at a fixed step and records every tick into one log.

    Usage:
        engine = SimEngine(MassSpringModel(), TimeSeriesLog())
        engine.apply_params({"m": 1.0, "k": 20.0, "dt": 0.01})
        engine.step_once()
    """

    HEADER = ("t", "x", "v", "a", "KE", "PE", "E")
    MIN_STEP_SIZE = 1e-6
    DEFAULT_STEP_SIZE = 0.016

    def __init__(self, model: SimModel, log: TimeSeriesLog, step_size: float = DEFAULT_STEP_SIZE):
        """
        Args:
            model: Model to advance.
            log: Log to append to. Must not be shared with another engine.
            step_size: Initial dt, clamped like set_step_size.
        """
        self._model = model
        self._log = log
        self._mode = EngineMode.PAUSED
        self._dt = max(self.MIN_STEP_SIZE, step_size)
        self._lock = threading.RLock()

    @property
    def model(self) -> SimModel:
        return self._model

    @property
    def log(self) -> TimeSeriesLog:
        return self._log

    @property
    def mode(self) -> EngineMode:
        return self._mode

    @property
    def is_running(self) -> bool:
        return self._mode == EngineMode.RUNNING

    @property
    def step_size(self) -> float:
        return self._dt

    def set_step_size(self, dt: float) -> None:
        """Store max(MIN_STEP_SIZE, dt); the next tick uses it."""
        with self._lock:
            self._dt = max(self.MIN_STEP_SIZE, dt)
            Logger.log(f"SimEngine step size set to {self._dt}")

    def reset(self, params: Mapping[str, float]) -> None:
        """
        Reinitialise the model and restart the log at t = 0.

        Model validation errors propagate unchanged and leave the log as it
        was. The run mode is not changed.
        """
        with self._lock:
            self._model.reset(params)
            self._log.clear()
            self._record()
            Logger.log(f"SimEngine reset with {dict(params)}", Logger.LogPriority.INFO)

    def apply_params(self, params: Mapping[str, float]) -> None:
        """
        Reset from a full parameter map including the step size "dt".

        dt is checked before anything is touched, so a bad map never leaves
        the engine half-applied.

        Raises:
            InvalidParameterError: For a missing or non-positive dt, or any
                error raised by the model's reset.
        """
        raw = params.get("dt")
        if raw is None:
            raise InvalidParameterError("dt", "is required and must be > 0")
        if isinstance(raw, bool):
            raise InvalidParameterError("dt", "must be a number", raw)
        try:
            dt = float(raw)
        except (TypeError, ValueError):
            raise InvalidParameterError("dt", "must be a number", raw) from None
        if not math.isfinite(dt) or dt <= 0:
            raise InvalidParameterError("dt", "must be > 0", raw)

        with self._lock:
            self.reset(params)
            self.set_step_size(dt)

    def start(self) -> None:
        """PAUSED -> RUNNING. No-op when already running."""
        with self._lock:
            if self._mode == EngineMode.RUNNING:
                return
            self._mode = EngineMode.RUNNING
            Logger.log("SimEngine started", Logger.LogPriority.INFO)

    def pause(self) -> None:
        """RUNNING -> PAUSED. No-op when already paused."""
        with self._lock:
            if self._mode == EngineMode.PAUSED:
                return
            self._mode = EngineMode.PAUSED
            Logger.log(f"SimEngine paused after {self._log.count()} samples", Logger.LogPriority.INFO)

    def toggle(self) -> None:
        with self._lock:
            if self._mode == EngineMode.RUNNING:
                self.pause()
            else:
                self.start()

    def step_once(self) -> bool:
        """
        Advance exactly one tick while paused.

        Returns:
            True if a tick happened, False if ignored because running.
        """
        with self._lock:
            if self._mode == EngineMode.RUNNING:
                return False
            self._tick()
            return True

    def on_timer(self) -> bool:
        """
        Scheduler callback. Ticks only while running.

        Returns:
            True if a tick happened.
        """
        with self._lock:
            if self._mode != EngineMode.RUNNING:
                return False
            self._tick()
            return True

    def snapshot(self) -> Snapshot:
        """Current model snapshot, consistent with the log's last sample."""
        with self._lock:
            return self._model.snapshot()

    def log_array(self) -> np.ndarray:
        """Log as an array. Only the row copy happens under the lock."""
        with self._lock:
            rows = self._log.export_rows()
        return rows_to_array(rows)

    def render(self, canvas: Canvas, viewport: Viewport) -> None:
        """
        Draw a copy of the model taken between ticks.

        The lock is held only for the copy, so a slow canvas never delays
        ticking.
        """
        with self._lock:
            model = self._model.copy()
        model.render(canvas, viewport)

    def _tick(self) -> None:
        self._model.step(self._dt)
        self._record()

    def _record(self) -> None:
        snap = self._model.snapshot()
        self._log.append(snap.time, snap.values())
