"""
Wall-clock tick scheduler.

Calls a callback (normally SimEngine.on_timer) every period_s seconds on a
daemon thread until stopped. The engine's lock makes the callback safe to run
alongside a GUI thread that only reads snapshots.
"""

import threading
import time
from typing import Callable, Optional

from .logger import Logger


class TickScheduler:
    """
    Periodic caller on a background thread.

    Usage:
        with TickScheduler(engine.on_timer, period_s=0.016):
            engine.start()
            ...
    """

    DEFAULT_PERIOD_S = 0.016

    def __init__(self, callback: Callable[[], object], period_s: float = DEFAULT_PERIOD_S):
        """
        Args:
            callback: Function invoked once per period.
            period_s: Target interval between calls, in seconds (> 0).
        """
        if period_s <= 0:
            raise ValueError("period_s must be positive")
        self.callback = callback
        self.period_s = period_s
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the thread. No-op when already running."""
        if self.is_alive:
            return
        self._stop_event.clear()
        self._error = None
        self._thread = threading.Thread(target=self._run, name="TickScheduler", daemon=True)
        self._thread.start()
        Logger.log(f"TickScheduler started with period {self.period_s}s", Logger.LogPriority.INFO)

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """
        Stop the thread and wait for it.

        Raises:
            Exception: Whatever the callback raised, if it failed.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                # start() stays a no-op until this thread exits
                Logger.log(
                    f"TickScheduler thread still running after {timeout}s; it will exit after its current callback",
                    Logger.LogPriority.WARNING
                )
            else:
                self._thread = None
                Logger.log("TickScheduler stopped", Logger.LogPriority.INFO)
        if self._error is not None:
            error, self._error = self._error, None
            raise error

    def _run(self) -> None:
        next_fire = time.monotonic() + self.period_s
        while not self._stop_event.wait(max(0.0, next_fire - time.monotonic())):
            try:
                self.callback()
            except Exception as e:
                self._error = e
                Logger.log(f"TickScheduler callback failed: {e!r}", Logger.LogPriority.ERROR)
                return
            next_fire += self.period_s
            # Drop missed periods instead of bursting to catch up
            now = time.monotonic()
            if next_fire < now:
                next_fire = now + self.period_s

    def __enter__(self) -> "TickScheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
