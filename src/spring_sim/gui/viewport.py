"""
Spring viewport - DearPyGui drawlist the model renders onto.

The viewport never touches physics. Each frame it clears its drawlist and
asks the engine to render the current state into it.
"""

import dearpygui.dearpygui as dpg
from dataclasses import dataclass
from typing import Optional, Tuple

from ..engine import SimEngine
from ..sim_model import Viewport


@dataclass
class ViewportConfig:
    """Configuration for the spring viewport."""
    width: int = 800
    height: int = 400


class DrawlistCanvas:
    """
    Canvas implementation backed by a DearPyGui drawlist.

    Coordinates are drawlist pixels with the origin at the top left.
    """

    def __init__(self, drawlist_tag: int, size: Tuple[int, int]):
        self.drawlist_tag = drawlist_tag
        self.size = size

    def clear(self, color) -> None:
        dpg.delete_item(self.drawlist_tag, children_only=True)
        dpg.draw_rectangle(
            (0, 0), self.size,
            color=color, fill=color,
            parent=self.drawlist_tag
        )

    def draw_rectangle(self, p_min, p_max, color, fill=None, rounding: float = 0.0) -> None:
        kwargs = {"color": color, "rounding": rounding, "parent": self.drawlist_tag}
        if fill is not None:
            kwargs["fill"] = fill
        dpg.draw_rectangle(p_min, p_max, **kwargs)

    def draw_line(self, p1, p2, color, thickness: float = 1.0) -> None:
        dpg.draw_line(p1, p2, color=color, thickness=thickness, parent=self.drawlist_tag)

    def draw_text(self, pos, text: str, color, size: float = 12.0) -> None:
        dpg.draw_text(pos, text, color=color, size=size, parent=self.drawlist_tag)


class SpringViewport:
    """
    Window holding the drawlist the mass-spring model is drawn into.
    """

    def __init__(self, config: Optional[ViewportConfig] = None):
        self.config = config or ViewportConfig()
        self._window_tag: Optional[int] = None
        self._drawlist_tag: Optional[int] = None
        self._canvas: Optional[DrawlistCanvas] = None

    def create(self, pos: Optional[Tuple[int, int]] = None) -> int:
        """
        Create viewport window and drawlist.

        Args:
            pos: Window position (x, y).

        Returns:
            Window tag.
        """
        window_kwargs = {
            "label": "Simulation",
            "width": self.config.width + 20,
            "height": self.config.height + 40,
            "no_scrollbar": True,
            "no_resize": True,
        }
        if pos is not None:
            window_kwargs["pos"] = pos

        with dpg.window(**window_kwargs) as self._window_tag:
            self._drawlist_tag = dpg.add_drawlist(
                width=self.config.width,
                height=self.config.height
            )

        self._canvas = DrawlistCanvas(self._drawlist_tag, (self.config.width, self.config.height))
        return self._window_tag

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.config.width, self.config.height)

    def draw(self, engine: SimEngine) -> None:
        """Redraw the current model state."""
        if self._canvas is None:
            return
        engine.render(self._canvas, self.viewport)
