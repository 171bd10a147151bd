"""In-memory selection store with step-precision quantity arithmetic."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from decimal import Decimal

from quickshare.data import short_name, unit_initial
from quickshare.models import Item, SelectedEntry, SelectionSummary

log = logging.getLogger(__name__)


def fractional_digits(value: float) -> int:
    """Number of significant fractional digits in the shortest repr of ``value``."""
    if float(value).is_integer():
        return 0
    exponent = Decimal(repr(float(value))).normalize().as_tuple().exponent
    return max(0, -int(exponent))


def _has_fraction(value: float) -> bool:
    return not float(value).is_integer()


def apply_step(previous: float, delta: float, step: float) -> float:
    """Add ``delta`` to ``previous`` and round by the step-precision rule.

    Rounds to ``max(d(step), d(previous), 1)`` digits when the step or the
    result is fractional, otherwise returns an int. Increment and decrement
    share this so ``+s`` followed by ``-s`` lands back on the prior value.
    """
    result = previous + delta
    if _has_fraction(step) or _has_fraction(result):
        precision = max(fractional_digits(step), fractional_digits(previous), 1)
        return round(result, precision)
    return int(round(result))


def format_quantity(quantity: float) -> str:
    """Render a quantity without a trailing ``.0`` for integral values."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return repr(float(quantity))


class SelectionStore:
    """Owns the selected item map; an entry exists only while its quantity is > 0."""

    def __init__(self) -> None:
        self._entries: dict[str, SelectedEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, item_id: str) -> SelectedEntry | None:
        return self._entries.get(item_id)

    def quantity_of(self, item_id: str) -> float:
        entry = self._entries.get(item_id)
        return entry.quantity if entry is not None else 0

    def items(self) -> list[tuple[str, SelectedEntry]]:
        return list(self._entries.items())

    def increment(self, item_id: str, item: Item, step: float | None = None) -> SelectedEntry:
        """Select ``item`` or add ``step`` (default: the item's own step) to it."""
        if step is None:
            step = item.increment_step

        entry = self._entries.get(item_id)
        if entry is None:
            entry = SelectedEntry(
                name=item.name,
                unit=item.unit,
                increment_step=step,
                quantity=apply_step(0, step, step),
            )
            self._entries[item_id] = entry
            log.debug("selection add item=%s qty=%s", item_id, entry.quantity)
            return entry

        entry.quantity = apply_step(entry.quantity, step, step)
        log.debug("selection increment item=%s qty=%s", item_id, entry.quantity)
        return entry

    def decrement(self, item_id: str) -> SelectedEntry | None:
        """Subtract the entry's captured step; drop it at zero or below.

        Returns the remaining entry, or ``None`` when nothing is left.
        """
        entry = self._entries.get(item_id)
        if entry is None:
            return None

        step = entry.increment_step
        quantity = apply_step(entry.quantity, -step, step)
        if quantity <= 0:
            del self._entries[item_id]
            log.debug("selection remove item=%s", item_id)
            return None

        entry.quantity = quantity
        log.debug("selection decrement item=%s qty=%s", item_id, entry.quantity)
        return entry

    def discard(self, item_id: str) -> None:
        self._entries.pop(item_id, None)

    def reset(self) -> None:
        if self._entries:
            log.debug("selection reset count=%d", len(self._entries))
        self._entries.clear()

    def summarize(self) -> SelectionSummary:
        preview = [
            f"{short_name(entry.name)} {format_quantity(entry.quantity)}{unit_initial(entry.unit)}"
            for entry in self._entries.values()
        ]
        return SelectionSummary(count=len(self._entries), preview=preview)
