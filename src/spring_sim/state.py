"""
Mass-spring-damper state representation.

One block on a spring attached to a fixed anchor, moving along a single axis.

Units:
    - Mass: kg
    - Spring constant: N/m
    - Damping: N·s/m
    - Displacement: m
    - Time: s
    - Energy: J
"""

import math
from dataclasses import dataclass


@dataclass
class SpringState:
    """
    Physical parameters and kinematic state of the oscillator.

    Attributes:
        mass: Block mass m (> 0).
        spring_constant: Spring stiffness k (> 0).
        damping: Viscous damping coefficient c (>= 0).
        displacement: Position x relative to rest.
        velocity: Velocity v.
        time: Elapsed simulation time t (>= 0).
    """
    mass: float
    spring_constant: float
    damping: float = 0.0
    displacement: float = 0.1
    velocity: float = 0.0
    time: float = 0.0

    @property
    def acceleration(self) -> float:
        """a = -(c/m)·v - (k/m)·x"""
        return -(self.damping / self.mass) * self.velocity - (self.spring_constant / self.mass) * self.displacement

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * self.velocity * self.velocity

    @property
    def potential_energy(self) -> float:
        return 0.5 * self.spring_constant * self.displacement * self.displacement

    @property
    def natural_period(self) -> float:
        """Undamped period 2π·sqrt(m/k)."""
        return 2.0 * math.pi * math.sqrt(self.mass / self.spring_constant)

    def copy(self) -> "SpringState":
        """Create an independent copy of this state."""
        return SpringState(
            mass=self.mass,
            spring_constant=self.spring_constant,
            damping=self.damping,
            displacement=self.displacement,
            velocity=self.velocity,
            time=self.time
        )


@dataclass(frozen=True)
class Snapshot:
    """
    Derived view of a state at one instant: (t, x, v, a, KE, PE, E).

    Never stored as primary state; rebuilt from SpringState on demand.
    """
    time: float
    displacement: float
    velocity: float
    acceleration: float
    kinetic_energy: float
    potential_energy: float
    total_energy: float

    @classmethod
    def from_state(cls, state: SpringState) -> "Snapshot":
        """Compute the snapshot of the given state."""
        ke = state.kinetic_energy
        pe = state.potential_energy
        return cls(
            time=state.time,
            displacement=state.displacement,
            velocity=state.velocity,
            acceleration=state.acceleration,
            kinetic_energy=ke,
            potential_energy=pe,
            total_energy=ke + pe
        )

    def as_tuple(self) -> tuple[float, ...]:
        """All seven fields in (t, x, v, a, KE, PE, E) order."""
        return (
            self.time,
            self.displacement,
            self.velocity,
            self.acceleration,
            self.kinetic_energy,
            self.potential_energy,
            self.total_energy,
        )

    def values(self) -> tuple[float, ...]:
        """Every field except time, in log column order."""
        return self.as_tuple()[1:]
