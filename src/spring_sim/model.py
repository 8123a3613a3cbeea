"""
Damped mass-spring model integrated with semi-implicit (symplectic) Euler.

Physics:
    a  = -(c/m)·v - (k/m)·x
    v' = v + a·dt
    x' = x + v'·dt      (position uses the updated velocity)
    t' = t + dt

Updating velocity before position keeps long-run energy drift bounded for
oscillatory systems; the scheme is first-order accurate.
"""

import math
from typing import Mapping, Optional

from .exceptions import InvalidParameterError
from .logger import Logger
from .sim_model import Canvas, SimModel, Viewport
from .state import Snapshot, SpringState


DEFAULT_PARAMS = {"m": 1.0, "k": 20.0}
DEFAULT_X0 = 0.1
DEFAULT_V0 = 0.0


def _number(params: Mapping[str, float], key: str) -> Optional[float]:
    """Fetch params[key] as a finite float, or None if absent."""
    raw = params.get(key)
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise InvalidParameterError(key, "must be a number", raw)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidParameterError(key, "must be a number", raw) from None
    if not math.isfinite(value):
        raise InvalidParameterError(key, "must be finite", raw)
    return value


def _must_get_positive(params: Mapping[str, float], key: str) -> float:
    value = _number(params, key)
    if value is None:
        raise InvalidParameterError(key, "is required and must be > 0")
    if value <= 0:
        raise InvalidParameterError(key, "must be > 0", value)
    return value


def build_state(params: Mapping[str, float]) -> SpringState:
    """
    Validate a parameter map and build the t = 0 state it describes.

    Args:
        params: Keys m, k (required, > 0), c (default 0, clamped to >= 0),
            x0 (default 0.1), v0 (default 0.0). Other keys are ignored.

    Returns:
        Fresh SpringState.

    Raises:
        InvalidParameterError: Naming the first offending key.
    """
    m = _must_get_positive(params, "m")
    k = _must_get_positive(params, "k")

    c = _number(params, "c")
    c = 0.0 if c is None else max(0.0, c)

    x0 = _number(params, "x0")
    v0 = _number(params, "v0")

    return SpringState(
        mass=m,
        spring_constant=k,
        damping=c,
        displacement=DEFAULT_X0 if x0 is None else x0,
        velocity=DEFAULT_V0 if v0 is None else v0,
        time=0.0
    )


class MassSpringModel(SimModel):
    """
    One-dimensional mass on a spring with optional viscous damping.

    Drawing constants are presentation only and never feed back into physics.
    """

    PIXELS_PER_METER = 200.0
    LEFT_MARGIN_PX = 80
    ANCHOR_X_PX = 40
    BLOCK_SIZE_PX = (60, 40)
    COILS = 8
    COIL_AMPLITUDE_PX = 12

    BACKGROUND_COLOR = (255, 255, 255, 255)
    BASELINE_COLOR = (230, 230, 230, 255)
    ANCHOR_COLOR = (64, 64, 64, 255)
    SPRING_COLOR = (90, 90, 90, 255)
    BLOCK_COLOR = (60, 120, 200, 255)
    OUTLINE_COLOR = (0, 0, 0, 255)
    TEXT_COLOR = (20, 20, 20, 255)

    def __init__(self, params: Optional[Mapping[str, float]] = None):
        """
        Args:
            params: Initial parameter map. Defaults to m=1, k=20 so the model
                is usable before the first explicit reset.
        """
        self.state = build_state(DEFAULT_PARAMS if params is None else params)

    def reset(self, params: Mapping[str, float]) -> None:
        """Replace the state in one assignment; a failed validation changes nothing."""
        try:
            new_state = build_state(params)
        except InvalidParameterError as e:
            Logger.log(f"MassSpringModel.reset rejected parameters: {e}", Logger.LogPriority.WARNING)
            raise
        self.state = new_state

    def step(self, dt: float) -> None:
        s = self.state
        a = -(s.damping / s.mass) * s.velocity - (s.spring_constant / s.mass) * s.displacement
        s.velocity += a * dt
        s.displacement += s.velocity * dt
        s.time += dt

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self.state)

    def render(self, canvas: Canvas, viewport: Viewport) -> None:
        """
        Draw anchor, zig-zag spring, block and a t/x/v overlay.

        Reads the state once; nothing here writes to it.
        """
        snap = self.snapshot()
        width, height = viewport.width, viewport.height
        cy = height // 2

        canvas.clear(self.BACKGROUND_COLOR)

        # Baseline and anchor
        canvas.draw_rectangle((0, cy - 1), (width, cy + 1), self.BASELINE_COLOR, fill=self.BASELINE_COLOR)
        canvas.draw_rectangle((20, cy - 30), (self.ANCHOR_X_PX, cy + 30), self.ANCHOR_COLOR, fill=self.ANCHOR_COLOR)

        block_w, block_h = self.BLOCK_SIZE_PX
        block_x = int(self.ANCHOR_X_PX + self.LEFT_MARGIN_PX + snap.displacement * self.PIXELS_PER_METER)
        span = max(10, block_x - self.ANCHOR_X_PX)

        # Spring
        half_turns = self.COILS * 2
        px, py = self.ANCHOR_X_PX, cy
        for i in range(1, half_turns + 1):
            xi = self.ANCHOR_X_PX + (i * span) // half_turns
            yi = cy - self.COIL_AMPLITUDE_PX if i % 2 == 0 else cy + self.COIL_AMPLITUDE_PX
            canvas.draw_line((px, py), (xi, yi), self.SPRING_COLOR, thickness=2.0)
            px, py = xi, yi
        canvas.draw_line((px, py), (block_x, cy), self.SPRING_COLOR, thickness=2.0)

        # Block
        by = cy - block_h // 2
        canvas.draw_rectangle(
            (block_x, by), (block_x + block_w, by + block_h),
            self.OUTLINE_COLOR, fill=self.BLOCK_COLOR, rounding=10.0
        )

        canvas.draw_text(
            (10, 6),
            f"t={snap.time:.2f}s  x={snap.displacement:.3f}m  v={snap.velocity:.3f}m/s",
            self.TEXT_COLOR
        )
