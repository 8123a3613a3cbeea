"""
Tests for the headless simulation runner.
"""

import pytest

from spring_sim.config import DynamicsConfig, ModelConfig, SchedulerConfig, SimulationConfig
from spring_sim.exceptions import InvalidParameterError
from spring_sim.runner import SimulationRunner, run_simulation


def _config(damping=0.0, dt=0.01, t_end=1.0, period_ms=5.0):
    return SimulationConfig(
        model=ModelConfig(mass=1.0, spring_constant=20.0, damping=damping, x0=0.2),
        dynamics=DynamicsConfig(dt=dt, t_end=t_end),
        scheduler=SchedulerConfig(period_ms=period_ms)
    )


class TestRun:

    def test_sample_count(self):
        result = run_simulation(_config())
        assert result.n_steps == 100
        assert result.log.count() == 101

    def test_final_time(self):
        result = run_simulation(_config())
        assert result.final_snapshot.time == pytest.approx(1.0)
        assert result.log.last().time == result.final_snapshot.time

    def test_initial_energy(self):
        result = run_simulation(_config())
        assert result.initial_energy == pytest.approx(0.5 * 20.0 * 0.2 ** 2)

    def test_undamped_energy_ratio(self):
        result = run_simulation(_config(dt=0.001, t_end=5.0))
        assert result.energy_ratio < 1.05

    def test_damped_energy_drops(self):
        result = run_simulation(_config(damping=2.0, t_end=5.0))
        assert result.final_energy < 0.1 * result.initial_energy

    def test_energy_ratio_none_at_rest(self):
        config = _config()
        config.model.x0 = 0.0
        assert run_simulation(config).energy_ratio is None

    def test_rejected_parameters(self):
        config = _config()
        config.model.mass = -1.0
        with pytest.raises(InvalidParameterError):
            SimulationRunner(config).run()


class TestRunRealtime:

    def test_ticks_against_wall_clock(self):
        runner = SimulationRunner(_config(period_ms=2.0))
        result = runner.run_realtime(0.1)

        assert result.n_steps >= 1
        assert not runner.engine.is_running
        for i, t in enumerate(result.log.times):
            assert t == pytest.approx(i * 0.01)
