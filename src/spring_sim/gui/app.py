"""
Main application for the mass-spring GUI.

PHYSICS-GUI SEPARATION:
    1. Ticks run on a TickScheduler thread; the frame loop only reads.
    2. Every physics change goes through SimEngine.
    3. The frame rate affects how often the state is drawn, never dt.
"""

import dearpygui.dearpygui as dpg
from pathlib import Path
from typing import Optional

from ..engine import SimEngine
from ..exceptions import InvalidParameterError
from ..exporters import CSV_COLUMNS, write_csv
from ..logger import Logger
from ..model import MassSpringModel
from ..presets import get_preset, get_preset_display_names
from ..scheduler import TickScheduler
from ..timeseries import TimeSeriesLog
from .panels import ControlPanel, EnergyPlot, ParameterPanel, PresetPanel, StatusPanel
from .viewport import SpringViewport, ViewportConfig


class SpringSimApp:
    """
    DearPyGui front end for SimEngine.

    Usage:
        app = SpringSimApp()
        app.run()
    """

    PLOT_EVERY_N_FRAMES = 10

    def __init__(self, title: str = "Mass-Spring Simulator", tick_period_s: float = TickScheduler.DEFAULT_PERIOD_S):
        self.title = title

        self.model = MassSpringModel()
        self.log = TimeSeriesLog()
        self.engine = SimEngine(self.model, self.log)
        self.scheduler = TickScheduler(self.engine.on_timer, tick_period_s)

        self.viewport = SpringViewport(ViewportConfig())
        self.param_panel = ParameterPanel(on_error=self._show_error)
        self.control_panel = ControlPanel(
            on_run=self._on_run,
            on_pause=self._on_pause,
            on_step=self._on_step,
            on_reset=self._on_reset,
            on_save=self._on_save
        )
        self.preset_panel = PresetPanel(get_preset_display_names(), on_apply=self._on_preset)
        self.status_panel = StatusPanel()
        self.energy_plot = EnergyPlot()

        self._frame_count = 0
        self._file_dialog: Optional[int] = None

    def run(self) -> None:
        """Run the application (blocking)."""
        dpg.create_context()
        dpg.create_viewport(title=self.title, width=1110, height=720)

        self._create_ui()

        dpg.setup_dearpygui()
        dpg.show_viewport()

        self._apply_params()
        self.scheduler.start()
        try:
            while dpg.is_dearpygui_running():
                self._frame_update()
                dpg.render_dearpygui_frame()
        finally:
            self.engine.pause()
            self.scheduler.stop()
            dpg.destroy_context()

    def _create_ui(self) -> None:
        self.param_panel.create(pos=(10, 10))
        self.control_panel.create(pos=(10, 220))
        self.preset_panel.create(pos=(10, 300))
        self.status_panel.create(pos=(10, 380))
        self.viewport.create(pos=(270, 10))
        self.energy_plot.create(pos=(270, 460))

        with dpg.file_dialog(
            directory_selector=False,
            show=False,
            callback=self._on_file_selected,
            default_filename="spring_run",
            width=600,
            height=400
        ) as self._file_dialog:
            dpg.add_file_extension(".csv")

    def _frame_update(self) -> None:
        """Per-frame redraw; never advances physics."""
        self._frame_count += 1

        self.viewport.draw(self.engine)
        self.status_panel.update(
            self.engine.mode,
            self.engine.snapshot(),
            self.log.count(),
            self.engine.step_size
        )
        if self._frame_count % self.PLOT_EVERY_N_FRAMES == 0:
            self.energy_plot.update(self.engine.log_array())

    def _apply_params(self) -> bool:
        """Read the parameter fields and reset the engine; False if rejected."""
        try:
            self.engine.apply_params(self.param_panel.read_params())
        except InvalidParameterError as e:
            self._show_error(str(e))
            return False
        return True

    def _show_error(self, message: str) -> None:
        Logger.log(f"GUI rejected input: {message}", Logger.LogPriority.WARNING)
        self.status_panel.set_message(message, is_error=True)

    def _on_run(self) -> None:
        self.engine.start()
        self.status_panel.set_message("Running...")

    def _on_pause(self) -> None:
        self.engine.pause()
        self.status_panel.set_message("Paused.")

    def _on_step(self) -> None:
        if self.engine.step_once():
            self.status_panel.set_message("Stepped once.")

    def _on_reset(self) -> None:
        if self._apply_params():
            self.engine.pause()
            self.status_panel.set_message("Reset.")

    def _on_preset(self, name: str) -> None:
        model = get_preset(name).config.model
        self.param_panel.set_values({"c": model.damping, "x0": model.x0, "v0": model.v0})
        self.status_panel.set_message("Preset applied. Press Reset to use it.")

    def _on_save(self) -> None:
        self.engine.pause()
        dpg.show_item(self._file_dialog)

    def _on_file_selected(self, sender, app_data) -> None:
        path = Path(app_data["file_path_name"])
        try:
            write_csv(self.log, path, CSV_COLUMNS)
        except OSError as e:
            self._show_error(f"Save failed: {e}")
            return
        self.status_panel.set_message(f"Saved {self.log.count()} samples to {path.name}")


def run_gui(title: str = "Mass-Spring Simulator") -> None:
    """Launch the GUI with default parameters."""
    Logger.initialize()
    app = SpringSimApp(title=title)
    app.run()
