"""
Configuration loading and validation for mass-spring runs.

Loads YAML config and validates all parameters against physical constraints.
"""

import math
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ModelConfig:
    """Physical parameters and initial conditions."""
    mass: float
    spring_constant: float
    damping: float = 0.0
    x0: float = 0.1
    v0: float = 0.0

    def validate(self) -> tuple[bool, Optional[str]]:
        if not self.mass > 0:
            return False, "mass must be positive"
        if not self.spring_constant > 0:
            return False, "spring_constant must be positive"
        if not self.damping >= 0:
            return False, "damping must be non-negative"
        if not math.isfinite(self.x0):
            return False, "x0 must be finite"
        if not math.isfinite(self.v0):
            return False, "v0 must be finite"
        return True, None


@dataclass
class DynamicsConfig:
    """Fixed step size and run length."""
    dt: float = 0.016
    t_end: float = 10.0

    def validate(self) -> tuple[bool, Optional[str]]:
        if not math.isfinite(self.dt) or not self.dt > 0:
            return False, "dt must be positive and finite"
        if not math.isfinite(self.t_end) or not self.t_end > 0:
            return False, "t_end must be positive and finite"
        return True, None

    @property
    def n_steps(self) -> int:
        """Ticks needed to reach t_end."""
        # Round first so 1.0 / 0.01 does not become 101 steps
        return int(math.ceil(round(self.t_end / self.dt, 9)))


@dataclass
class SchedulerConfig:
    """Wall-clock cadence for real-time runs."""
    period_ms: float = 16.0

    def validate(self) -> tuple[bool, Optional[str]]:
        if not self.period_ms > 0:
            return False, "period_ms must be positive"
        return True, None

    @property
    def period_s(self) -> float:
        return self.period_ms / 1000.0


@dataclass
class OutputConfig:
    """Output configuration."""
    out_dir: str = "output"
    run_name: str = "spring_run"
    write_header: bool = True

    def validate(self) -> tuple[bool, Optional[str]]:
        if not self.run_name:
            return False, "run_name must not be empty"
        return True, None


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""
    model: ModelConfig
    dynamics: DynamicsConfig = field(default_factory=DynamicsConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> tuple[bool, Optional[str]]:
        for section_name in ["model", "dynamics", "scheduler", "output"]:
            section = getattr(self, section_name)
            is_valid, error = section.validate()
            if not is_valid:
                return False, f"{section_name}: {error}"
        return True, None

    def to_params(self) -> dict:
        """Parameter map understood by SimEngine.apply_params."""
        return {
            "m": self.model.mass,
            "k": self.model.spring_constant,
            "c": self.model.damping,
            "x0": self.model.x0,
            "v0": self.model.v0,
            "dt": self.dynamics.dt,
        }

    def to_dict(self) -> dict:
        """Serializable form, same layout as the YAML file."""
        return {
            "model": {
                "mass": self.model.mass,
                "spring_constant": self.model.spring_constant,
                "damping": self.model.damping,
                "x0": self.model.x0,
                "v0": self.model.v0
            },
            "dynamics": {
                "dt": self.dynamics.dt,
                "t_end": self.dynamics.t_end
            },
            "scheduler": {
                "period_ms": self.scheduler.period_ms
            },
            "output": {
                "out_dir": self.output.out_dir,
                "run_name": self.output.run_name,
                "write_header": self.output.write_header
            }
        }


def config_from_dict(raw: dict) -> SimulationConfig:
    """
    Build and validate a config from an already-parsed mapping.

    Raises:
        ValueError: If a section is malformed or a value is invalid.
    """
    raw = raw or {}

    model_raw = raw.get("model") or {}
    if "mass" not in model_raw or "spring_constant" not in model_raw:
        raise ValueError("Invalid configuration: model: mass and spring_constant are required")

    try:
        model = ModelConfig(
            mass=float(model_raw["mass"]),
            spring_constant=float(model_raw["spring_constant"]),
            damping=float(model_raw.get("damping", 0.0)),
            x0=float(model_raw.get("x0", 0.1)),
            v0=float(model_raw.get("v0", 0.0))
        )

        dyn_raw = raw.get("dynamics") or {}
        dynamics = DynamicsConfig(
            dt=float(dyn_raw.get("dt", 0.016)),
            t_end=float(dyn_raw.get("t_end", 10.0))
        )

        sched_raw = raw.get("scheduler") or {}
        scheduler = SchedulerConfig(
            period_ms=float(sched_raw.get("period_ms", 16.0))
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    out_raw = raw.get("output") or {}
    output = OutputConfig(
        out_dir=str(out_raw.get("out_dir", "output")),
        run_name=str(out_raw.get("run_name", "spring_run")),
        write_header=bool(out_raw.get("write_header", True))
    )

    config = SimulationConfig(
        model=model,
        dynamics=dynamics,
        scheduler=scheduler,
        output=output
    )

    is_valid, error = config.validate()
    if not is_valid:
        raise ValueError(f"Invalid configuration: {error}")

    return config


def load_config(path: Path) -> SimulationConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated SimulationConfig.

    Raises:
        ValueError: If config is invalid.
        FileNotFoundError: If file doesn't exist.
    """
    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    if raw is not None and not isinstance(raw, dict):
        raise ValueError("Invalid configuration: top level must be a mapping")

    return config_from_dict(raw)
