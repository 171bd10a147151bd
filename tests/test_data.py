"""Tests for the default catalog builder and name helpers."""

import math

import pytest

from quickshare.constant import DEFAULT_GROCERY_DATA, DEFAULT_PRESET_ID
from quickshare.data import build_default_preset, coerce_step, display_name, short_name, split_icon
from quickshare.errors import ConfigurationError


class TestDefaultPreset:
    def test_default_preset_is_flagged(self):
        preset = build_default_preset()
        assert preset.id == DEFAULT_PRESET_ID
        assert preset.is_default is True
        assert preset.name == "Grocery List"
        assert [cat.name for cat in preset.categories][:2] == ["Bakery", "Dairy & Eggs"]

    def test_steps_are_parsed(self):
        preset = build_default_preset()
        _, milk = preset.find_item("item_milk_004")
        _, bread = preset.find_item("item_bread_001")
        assert milk.increment_step == 0.5
        assert bread.increment_step == 1
        assert isinstance(bread.increment_step, int)

    def test_category_colors_are_kept(self):
        preset = build_default_preset()
        assert preset.find_category("cat_bakery_001").color == "#F1E05A"

    def test_missing_data_is_fatal(self):
        with pytest.raises(ConfigurationError):
            build_default_preset({})

    def test_wrong_id_is_fatal(self):
        raw = dict(DEFAULT_GROCERY_DATA, id="something_else")
        with pytest.raises(ConfigurationError, match="must be"):
            build_default_preset(raw)

    def test_malformed_category_is_fatal(self):
        raw = dict(DEFAULT_GROCERY_DATA, categories=[{"id": "cat_x"}])
        with pytest.raises(ConfigurationError, match="malformed"):
            build_default_preset(raw)

    def test_invalid_step_is_fatal(self):
        raw = dict(
            DEFAULT_GROCERY_DATA,
            categories=[
                {"id": "cat_x", "name": "X", "items": [{"id": "i", "name": "I", "increment_step": -1}]},
            ],
        )
        with pytest.raises(ConfigurationError):
            build_default_preset(raw)


class TestNameHelpers:
    def test_split_icon(self):
        assert split_icon("🍞 Bread") == ("🍞", "Bread")
        assert split_icon("Bread Rolls") == ("", "Bread Rolls")
        assert split_icon("🍞") == ("", "🍞")

    def test_display_name_strips_icon(self):
        assert display_name("🍗 Chicken Breast") == "Chicken Breast"

    def test_short_name(self):
        assert short_name("🍞 Bread") == "Bread"
        assert short_name("🌭 Extraordinarily long") == "Extraordina…"


class TestCoerceStep:
    def test_defaults_when_missing(self):
        assert coerce_step(None) == 1
        assert coerce_step("") == 1

    def test_parses_strings(self):
        assert coerce_step("0.25") == 0.25
        value = coerce_step("2")
        assert value == 2
        assert isinstance(value, int)

    @pytest.mark.parametrize("raw", [0, -1, "abc", math.nan, math.inf])
    def test_rejects_bad_steps(self, raw):
        with pytest.raises(ValueError):
            coerce_step(raw)
