"""
UI panels for the mass-spring GUI.

Provides:
    - Parameter panel (m, k, c, x0, v0, dt with revert-to-last-good)
    - Control panel (run, pause, step, reset, save CSV)
    - Preset panel
    - Status panel and energy plot
"""

import dearpygui.dearpygui as dpg
import math
from typing import Callable, Dict, List, Mapping, Optional

import numpy as np

from ..engine import EngineMode
from ..exceptions import InvalidParameterError
from ..state import Snapshot


# Field key, label, default text
PARAMETER_FIELDS = [
    ("m", "m (kg)", "1.0"),
    ("k", "k (N/m)", "20.0"),
    ("c", "c (N·s/m)", "0.0"),
    ("x0", "x0 (m)", "0.2"),
    ("v0", "v0 (m/s)", "0.0"),
    ("dt", "dt (s)", "0.016"),
]

_POSITIVE_KEYS = ("m", "k", "dt")


def parse_params(texts: Mapping[str, str]) -> Dict[str, float]:
    """
    Parse raw field text into a parameter map.

    Args:
        texts: Field key -> text as typed.

    Returns:
        Parameter map for SimEngine.apply_params.

    Raises:
        InvalidParameterError: For the first field that is not a finite
            number, or breaks its sign constraint.
    """
    params = {}
    for key, _, _ in PARAMETER_FIELDS:
        raw = texts.get(key, "").strip()
        try:
            value = float(raw)
        except ValueError:
            raise InvalidParameterError(key, "must be a number", raw) from None
        if not math.isfinite(value):
            raise InvalidParameterError(key, "must be finite", raw)
        if key in _POSITIVE_KEYS and value <= 0:
            raise InvalidParameterError(key, "must be > 0", value)
        if key == "c" and value < 0:
            raise InvalidParameterError(key, "must be >= 0", value)
        params[key] = value
    return params


class ParameterPanel:
    """
    Text fields for the parameter map.

    Remembers the last set of values that parsed, so an invalid edit can be
    reverted in place.
    """

    def __init__(self, on_error: Optional[Callable[[str], None]] = None):
        self._on_error = on_error
        self._fields: Dict[str, int] = {}
        self._last_good: Dict[str, str] = {key: text for key, _, text in PARAMETER_FIELDS}

    def create(self, pos: tuple = (10, 10), width: int = 250) -> int:
        with dpg.window(
            label="Parameters",
            pos=pos,
            width=width,
            height=200,
            no_resize=True
        ) as window:
            for key, label, _ in PARAMETER_FIELDS:
                self._fields[key] = dpg.add_input_text(
                    label=label,
                    default_value=self._last_good[key],
                    width=110,
                    on_enter=True,
                    callback=self._field_changed,
                    user_data=key
                )
        return window

    def texts(self) -> Dict[str, str]:
        return {key: dpg.get_value(tag) for key, tag in self._fields.items()}

    def read_params(self) -> Dict[str, float]:
        """
        Parse every field. On failure the offending field is reverted and
        the error re-raised.
        """
        texts = self.texts()
        try:
            params = parse_params(texts)
        except InvalidParameterError as e:
            self.revert(e.key)
            raise
        self._last_good = texts
        return params

    def set_values(self, values: Mapping[str, float]) -> None:
        for key, value in values.items():
            if key in self._fields:
                dpg.set_value(self._fields[key], str(value))
        self._last_good = self.texts()

    def revert(self, key: str) -> None:
        if key in self._fields:
            dpg.set_value(self._fields[key], self._last_good[key])

    def _field_changed(self, sender, app_data, user_data) -> None:
        try:
            self.read_params()
        except InvalidParameterError as e:
            if self._on_error:
                self._on_error(str(e))


class ControlPanel:
    """Run / Pause / Step / Reset / Save CSV buttons."""

    def __init__(
        self,
        on_run: Callable[[], None],
        on_pause: Callable[[], None],
        on_step: Callable[[], None],
        on_reset: Callable[[], None],
        on_save: Callable[[], None]
    ):
        self._callbacks = [
            ("Run", on_run),
            ("Pause", on_pause),
            ("Step", on_step),
            ("Reset", on_reset),
            ("Save CSV", on_save),
        ]

    def create(self, pos: tuple = (10, 220), width: int = 250) -> int:
        with dpg.window(
            label="Controls",
            pos=pos,
            width=width,
            height=70,
            no_resize=True
        ) as window:
            with dpg.group(horizontal=True):
                for label, callback in self._callbacks:
                    dpg.add_button(label=label, callback=lambda s, a, u: u(), user_data=callback)
        return window


class PresetPanel:
    """Preset selector; applying a preset only fills the parameter fields."""

    def __init__(self, display_names: Dict[str, str], on_apply: Callable[[str], None]):
        self._display_names = display_names
        self._by_display = {v: k for k, v in display_names.items()}
        self._on_apply = on_apply
        self._combo: Optional[int] = None

    def create(self, pos: tuple = (10, 300), width: int = 250) -> int:
        items = list(self._display_names.values())
        with dpg.window(
            label="Presets",
            pos=pos,
            width=width,
            height=70,
            no_resize=True
        ) as window:
            with dpg.group(horizontal=True):
                self._combo = dpg.add_combo(
                    items=items,
                    default_value=items[0] if items else "",
                    width=140
                )
                dpg.add_button(label="Apply Preset", callback=self._apply)
        return window

    def _apply(self, sender=None, app_data=None, user_data=None) -> None:
        name = self._by_display.get(dpg.get_value(self._combo))
        if name is not None:
            self._on_apply(name)


class StatusPanel:
    """Mode, current snapshot and a one-line message."""

    def __init__(self):
        self._mode_text: Optional[int] = None
        self._values_text: Optional[int] = None
        self._message_text: Optional[int] = None

    def create(self, pos: tuple = (10, 380), width: int = 250) -> int:
        with dpg.window(
            label="Status",
            pos=pos,
            width=width,
            height=200,
            no_resize=True
        ) as window:
            self._mode_text = dpg.add_text("")
            self._values_text = dpg.add_text("")
            dpg.add_separator()
            self._message_text = dpg.add_text("Ready.", wrap=width - 20)
        return window

    def update(self, mode: EngineMode, snap: Snapshot, n_samples: int, dt: float) -> None:
        dpg.set_value(self._mode_text, f"{mode.name.title()}  |  dt = {dt:g} s  |  {n_samples} samples")
        dpg.set_value(
            self._values_text,
            f"t  = {snap.time:.3f} s\n"
            f"x  = {snap.displacement:.4f} m\n"
            f"v  = {snap.velocity:.4f} m/s\n"
            f"a  = {snap.acceleration:.4f} m/s^2\n"
            f"KE = {snap.kinetic_energy:.5f} J\n"
            f"PE = {snap.potential_energy:.5f} J\n"
            f"E  = {snap.total_energy:.5f} J"
        )

    def set_message(self, message: str, is_error: bool = False) -> None:
        dpg.set_value(self._message_text, message)
        dpg.configure_item(
            self._message_text,
            color=(255, 110, 110, 255) if is_error else (200, 200, 200, 255)
        )


class EnergyPlot:
    """KE / PE / E against time from the log."""

    SERIES = [("KE", 4), ("PE", 5), ("E", 6)]
    MAX_POINTS = 2000

    def __init__(self):
        self._x_axis: Optional[int] = None
        self._y_axis: Optional[int] = None
        self._series: List[int] = []

    def create(self, pos: tuple = (270, 450), width: int = 820, height: int = 250) -> int:
        with dpg.window(label="Energy", pos=pos, width=width, height=height, no_resize=True) as window:
            with dpg.plot(height=-1, width=-1):
                dpg.add_plot_legend()
                self._x_axis = dpg.add_plot_axis(dpg.mvXAxis, label="t (s)")
                self._y_axis = dpg.add_plot_axis(dpg.mvYAxis, label="J")
                for label, _ in self.SERIES:
                    self._series.append(dpg.add_line_series([], [], label=label, parent=self._y_axis))
        return window

    def update(self, data: np.ndarray) -> None:
        """
        Args:
            data: TimeSeriesLog.to_array() output.
        """
        if data.size == 0:
            return
        # Decimate long runs so the plot stays cheap to redraw
        stride = max(1, len(data) // self.MAX_POINTS)
        data = data[::stride]
        t = data[:, 0].tolist()
        for tag, (_, column) in zip(self._series, self.SERIES):
            dpg.set_value(tag, [t, data[:, column].tolist()])
        dpg.fit_axis_data(self._x_axis)
        dpg.fit_axis_data(self._y_axis)
