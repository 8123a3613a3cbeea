"""
Mass-spring GUI - DearPyGui front end.

Provides:
    - Live drawing of the model via SimModel.render
    - Run / Pause / Step / Reset / Save CSV controls
    - Parameter entry with revert-to-last-good
    - Energy plot
"""

from .app import SpringSimApp, run_gui
from .viewport import SpringViewport, DrawlistCanvas

__all__ = ["SpringSimApp", "run_gui", "SpringViewport", "DrawlistCanvas"]
