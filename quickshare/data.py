"""Static default catalog and item-name display helpers."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from quickshare.constant import DEFAULT_GROCERY_DATA, DEFAULT_PRESET_ID
from quickshare.errors import ConfigurationError
from quickshare.models import Category, Item, Preset

log = logging.getLogger(__name__)

SHORT_NAME_LIMIT = 12


def split_icon(name: str) -> tuple[str, str]:
    """Split a leading icon token (no letters or digits) from an item name."""
    raw = name.strip()
    head, sep, rest = raw.partition(" ")
    if sep and rest.strip() and not any(ch.isalnum() for ch in head):
        return (head, rest.strip())
    return ("", raw)


def display_name(name: str) -> str:
    """Item name without its icon token."""
    return split_icon(name)[1]


def short_name(name: str, limit: int = SHORT_NAME_LIMIT) -> str:
    """Compact item name for the selection preview."""
    plain = display_name(name)
    if len(plain) <= limit:
        return plain
    return plain[: max(1, limit - 1)].rstrip() + "…"


def unit_initial(unit: str) -> str:
    unit = unit.strip()
    return unit[0] if unit else ""


def coerce_step(raw: object, default: float = 1) -> float:
    """Parse an increment step; anything non-positive or non-finite is rejected."""
    if raw is None or raw == "":
        return default
    try:
        step = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"increment step must be a number, got {raw!r}") from exc
    if not math.isfinite(step) or step <= 0:
        raise ValueError(f"increment step must be positive, got {raw!r}")
    if step.is_integer():
        return int(step)
    return step


def _item_from_raw(raw: Mapping[str, object]) -> Item:
    return Item(
        id=str(raw["id"]),
        name=str(raw["name"]),
        unit=str(raw.get("unit") or ""),
        increment_step=coerce_step(raw.get("increment_step")),
    )


def _category_from_raw(raw: Mapping[str, object]) -> Category:
    items = raw.get("items") or []
    return Category(
        id=str(raw["id"]),
        name=str(raw["name"]),
        items=tuple(_item_from_raw(item) for item in items),  # type: ignore[union-attr]
        color=str(raw["color"]) if raw.get("color") else None,
    )


def build_default_preset(raw: Mapping[str, object] | None = DEFAULT_GROCERY_DATA) -> Preset:
    """Build the read-only default preset; malformed data is fatal."""
    if not raw:
        raise ConfigurationError("Default catalog data is missing")
    try:
        preset_id = str(raw["id"])
        categories = tuple(_category_from_raw(cat) for cat in raw.get("categories") or [])  # type: ignore[union-attr]
        preset = Preset(id=preset_id, name=str(raw["name"]), categories=categories, is_default=True)
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Default catalog data is malformed: {exc}") from exc

    if preset.id != DEFAULT_PRESET_ID:
        raise ConfigurationError(f"Default catalog id must be {DEFAULT_PRESET_ID!r}, got {preset.id!r}")
    log.debug("default catalog loaded categories=%d", len(preset.categories))
    return preset
