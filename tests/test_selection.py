"""Tests for SelectionStore quantity arithmetic."""

import pytest

from quickshare.models import Item
from quickshare.selection import SelectionStore, apply_step, format_quantity, fractional_digits


class TestApplyStep:
    def test_integer_step_stays_integer(self):
        result = apply_step(2, 1, 1)
        assert result == 3
        assert isinstance(result, int)

    def test_fractional_step_rounds_to_step_precision(self):
        assert apply_step(0.2, 0.1, 0.1) == 0.3
        assert apply_step(0.3, -0.1, 0.1) == 0.2

    def test_previous_quantity_precision_counts(self):
        assert apply_step(0.25, 0.5, 0.5) == 0.75

    @pytest.mark.parametrize("value,digits", [(1, 0), (0.5, 1), (0.25, 2), (0.1, 1), (100, 0)])
    def test_fractional_digits(self, value, digits):
        assert fractional_digits(value) == digits


class TestFormatQuantity:
    def test_integral_float_has_no_decimal_part(self):
        assert format_quantity(1.0) == "1"
        assert format_quantity(12) == "12"

    def test_fraction_keeps_shortest_form(self):
        assert format_quantity(0.5) == "0.5"
        assert format_quantity(0.3) == "0.3"


class TestSelectionStore:
    def test_first_increment_creates_entry_with_step(self, store, bread):
        entry = store.increment(bread.id, bread)
        assert entry.quantity == 1
        assert entry.name == "🍞 Bread"
        assert bread.id in store

    def test_integer_steps_are_exact(self, store, bread):
        for _ in range(3):
            store.increment(bread.id, bread)
        assert store.quantity_of(bread.id) == 3
        store.decrement(bread.id)
        assert store.quantity_of(bread.id) == 2

    def test_half_step_scenario(self, store, milk):
        store.increment(milk.id, milk)
        assert store.quantity_of(milk.id) == 0.5
        store.increment(milk.id, milk)
        assert store.quantity_of(milk.id) == 1.0
        store.decrement(milk.id)
        assert store.quantity_of(milk.id) == 0.5
        assert store.decrement(milk.id) is None
        assert milk.id not in store
        assert len(store) == 0

    def test_tenth_step_is_its_own_inverse(self, store):
        item = Item(id="item_spice", name="Spice", unit="kg", increment_step=0.1)
        for _ in range(3):
            store.increment(item.id, item)
        assert store.quantity_of(item.id) == 0.3
        for _ in range(3):
            store.decrement(item.id)
        assert item.id not in store

    def test_decrement_uses_captured_step(self, store, bread):
        store.increment(bread.id, bread, step=2)
        store.increment(bread.id, bread, step=2)
        remaining = store.decrement(bread.id)
        assert remaining is not None
        assert remaining.quantity == 2

    def test_decrement_missing_is_noop(self, store):
        assert store.decrement("item_unknown") is None
        assert len(store) == 0

    def test_reset_clears_everything(self, store, bread, milk):
        store.increment(bread.id, bread)
        store.increment(milk.id, milk)
        store.reset()
        assert len(store) == 0
        assert store.items() == []

    def test_quantity_of_absent_item_is_zero(self, store):
        assert store.quantity_of("item_bread_001") == 0

    def test_summarize_preview_in_selection_order(self, store, bread, milk):
        store.increment(milk.id, milk)
        store.increment(bread.id, bread)
        store.increment(bread.id, bread)
        summary = store.summarize()
        assert summary.count == 2
        assert summary.preview == ["Milk 0.5l", "Bread 2l"]

    def test_summarize_truncates_long_names(self, store):
        item = Item(id="item_frozveg", name="🥕 Frozen Vegetables", unit="bag")
        store.increment(item.id, item)
        assert store.summarize().preview == ["Frozen Vege… 1b"]

    def test_summarize_without_unit(self, store):
        item = Item(id="item_x", name="Candles")
        store.increment(item.id, item)
        assert store.summarize().preview == ["Candles 1"]

    def test_three_half_steps_then_back_down(self, store, milk):
        for _ in range(3):
            store.increment(milk.id, milk)
        assert store.quantity_of(milk.id) == 1.5
        store.decrement(milk.id)
        assert store.quantity_of(milk.id) == 1.0
        store.decrement(milk.id)
        assert store.quantity_of(milk.id) == 0.5
        store.decrement(milk.id)
        assert store.get(milk.id) is None
