"""
Mass-Spring Simulator

Fixed-step stepping engine for a damped mass-spring model, with a
time-series log of every advanced state.

Units:
    - Length: m
    - Mass: kg
    - Time: s
    - Energy: J
"""

__version__ = "0.1.0"

from .exceptions import InvalidParameterError
from .state import SpringState, Snapshot
from .sim_model import SimModel, Viewport, Canvas
from .model import MassSpringModel, build_state
from .timeseries import TimeSeriesLog, LogSample
from .engine import SimEngine, EngineMode
from .scheduler import TickScheduler
from .runner import SimulationRunner, SimulationResult, run_simulation

from .config import (
    SimulationConfig,
    ModelConfig,
    DynamicsConfig,
    SchedulerConfig,
    OutputConfig,
    load_config
)
