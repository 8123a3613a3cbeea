"""
Preset configurations for the mass-spring simulator.

Quick starting points for the GUI and CLI. Each preset is a complete
SimulationConfig plus a short description of what to expect.
"""

from dataclasses import dataclass
from typing import Dict, List

from .config import SimulationConfig, ModelConfig, DynamicsConfig


@dataclass(frozen=True)
class Preset:
    """
    A curated simulation preset.

    Attributes:
        name: Short identifier (e.g., "undamped")
        display_name: Human-readable name for GUI
        description: What this preset demonstrates
        config: The actual simulation configuration
    """
    name: str
    display_name: str
    description: str
    config: SimulationConfig


PRESETS: Dict[str, Preset] = {}


def _register_preset(preset: Preset) -> None:
    """Register a preset in the global registry."""
    PRESETS[preset.name] = preset


def _spring_config(damping: float) -> SimulationConfig:
    return SimulationConfig(
        model=ModelConfig(mass=1.0, spring_constant=20.0, damping=damping, x0=0.2, v0=0.0),
        dynamics=DynamicsConfig(dt=0.016, t_end=10.0)
    )


_register_preset(Preset(
    name="undamped",
    display_name="Undamped",
    description="No damping. The block oscillates indefinitely with bounded energy.",
    config=_spring_config(0.0)
))

_register_preset(Preset(
    name="lightly_damped",
    display_name="Lightly Damped",
    description="c = 0.8. Oscillation with a slowly decaying envelope.",
    config=_spring_config(0.8)
))

_register_preset(Preset(
    name="heavily_damped",
    display_name="Heavily Damped",
    description="c = 5.0. Amplitude dies out within a few periods.",
    config=_spring_config(5.0)
))


def list_presets() -> List[str]:
    """List available preset names."""
    return list(PRESETS.keys())


def get_preset(name: str) -> Preset:
    """
    Get a preset by name.

    Raises:
        KeyError: If preset not found.
    """
    if name not in PRESETS:
        available = ", ".join(PRESETS.keys())
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[name]


def get_preset_config(name: str) -> SimulationConfig:
    """Get just the SimulationConfig from a preset."""
    return get_preset(name).config


def get_preset_display_names() -> Dict[str, str]:
    """Get mapping of preset names to display names."""
    return {name: p.display_name for name, p in PRESETS.items()}


__all__ = [
    "Preset",
    "PRESETS",
    "list_presets",
    "get_preset",
    "get_preset_config",
    "get_preset_display_names",
]
