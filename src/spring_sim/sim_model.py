"""
Capability contract for models the stepping engine can drive.

Any physical system that implements these four operations can be plugged into
SimEngine; the engine never looks past this interface.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Protocol

from .state import Snapshot


@dataclass(frozen=True)
class Viewport:
    """Drawable area in pixels."""
    width: int
    height: int


class Canvas(Protocol):
    """Drawing surface handed to SimModel.render. Colors are RGBA tuples."""

    def clear(self, color) -> None: ...

    def draw_rectangle(self, p_min, p_max, color, fill=None, rounding: float = 0.0) -> None: ...

    def draw_line(self, p1, p2, color, thickness: float = 1.0) -> None: ...

    def draw_text(self, pos, text: str, color, size: float = 12.0) -> None: ...


class SimModel(ABC):
    """Interface for simulation models driven by SimEngine."""

    @abstractmethod
    def reset(self, params: Mapping[str, float]) -> None:
        """
        Validate params and reinitialise state with time = 0.

        Raises:
            InvalidParameterError: If a required key is missing or out of
                range. The previous state must be left untouched.
        """

    @abstractmethod
    def step(self, dt: float) -> None:
        """Advance the state by exactly one step of size dt."""

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """Return the derived view of the current state without side effects."""

    @abstractmethod
    def render(self, canvas: Canvas, viewport: Viewport) -> None:
        """Draw the current state. Must not modify simulation state."""

    def copy(self) -> "SimModel":
        """
        Independent copy of the model for drawing outside the engine lock.

        Subclasses holding resources that cannot be deep-copied override this.
        """
        return copy.deepcopy(self)
