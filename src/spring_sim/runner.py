"""
Headless simulation runner.

Wires model, log and engine from a SimulationConfig and drives the engine
either as fast as possible (run) or against the wall clock (run_realtime).
"""

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import SimulationConfig
from .engine import SimEngine
from .logger import Logger
from .model import MassSpringModel
from .scheduler import TickScheduler
from .state import Snapshot
from .timeseries import TimeSeriesLog


@dataclass
class SimulationResult:
    """
    Complete simulation results.

    Attributes:
        log: Every logged sample, t = 0 included.
        config: Configuration used.
        final_snapshot: Snapshot after the last tick.
        n_steps: Ticks performed.
        initial_energy: Total energy of the t = 0 sample.
        final_energy: Total energy of the last sample.
        max_energy: Largest total energy seen.
    """
    log: TimeSeriesLog
    config: SimulationConfig
    final_snapshot: Snapshot
    n_steps: int
    initial_energy: float
    final_energy: float
    max_energy: float

    @property
    def energy_ratio(self) -> Optional[float]:
        """max_energy / initial_energy, or None when the initial energy is zero."""
        if self.initial_energy == 0:
            return None
        return self.max_energy / self.initial_energy


class SimulationRunner:
    """
    Main simulation runner for the mass-spring model.
    """

    def __init__(self, config: SimulationConfig):
        """
        Args:
            config: Complete simulation configuration.
        """
        self.config = config
        self.model = MassSpringModel()
        self.log = TimeSeriesLog()
        self.engine = SimEngine(self.model, self.log)

    def run(self) -> SimulationResult:
        """
        Apply parameters and step n_steps ticks.

        Raises:
            InvalidParameterError: If the configured parameters are rejected.
        """
        self.engine.apply_params(self.config.to_params())
        n_steps = self.config.dynamics.n_steps

        Logger.log(f"SimulationRunner.run: {n_steps} steps of {self.engine.step_size}s", Logger.LogPriority.INFO)
        for _ in range(n_steps):
            self.engine.step_once()

        return self._result()

    def run_realtime(self, duration_s: float) -> SimulationResult:
        """
        Let a TickScheduler tick the engine for duration_s of wall clock.

        The number of ticks depends on the scheduler period, not on t_end.
        """
        self.engine.apply_params(self.config.to_params())

        scheduler = TickScheduler(self.engine.on_timer, self.config.scheduler.period_s)
        scheduler.start()
        try:
            self.engine.start()
            time.sleep(duration_s)
        finally:
            self.engine.pause()
            scheduler.stop()

        return self._result()

    def _result(self) -> SimulationResult:
        energies = self.log.to_array()[:, -1]
        return SimulationResult(
            log=self.log,
            config=self.config,
            final_snapshot=self.engine.snapshot(),
            n_steps=self.log.count() - 1,
            initial_energy=float(energies[0]),
            final_energy=float(energies[-1]),
            max_energy=float(np.max(energies))
        )


def run_simulation(config: SimulationConfig) -> SimulationResult:
    """
    Convenience function to run simulation from config.

    Args:
        config: Simulation configuration.

    Returns:
        Simulation results.
    """
    runner = SimulationRunner(config)
    return runner.run()
