"""
Tests for the built-in presets.
"""

import pytest

from spring_sim.presets import (
    PRESETS,
    get_preset,
    get_preset_config,
    get_preset_display_names,
    list_presets,
)


class TestPresets:

    def test_names(self):
        assert list_presets() == ["undamped", "lightly_damped", "heavily_damped"]

    @pytest.mark.parametrize("name", list(PRESETS))
    def test_every_preset_validates(self, name):
        assert get_preset_config(name).validate() == (True, None)

    def test_damping_ordering(self):
        damping = [get_preset_config(n).model.damping for n in list_presets()]
        assert damping == sorted(damping)
        assert damping[0] == 0.0

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Available"):
            get_preset("overdamped_in_space")

    def test_display_names(self):
        names = get_preset_display_names()
        assert set(names) == set(PRESETS)
        assert names["lightly_damped"] == "Lightly Damped"

    def test_get_preset(self):
        preset = get_preset("undamped")
        assert preset.name == "undamped"
        assert preset.description
