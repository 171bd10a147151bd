"""Rich text helpers for the item pane, preview pane and status line."""

from __future__ import annotations

from rich.text import Text

from quickshare.data import split_icon
from quickshare.models import Category, Item, Preset, SelectedEntry, SelectionSummary
from quickshare.selection import format_quantity

_FALLBACK_CATEGORY_COLOR = "#a0a0a0"


def item_rows(preset: Preset) -> list[tuple[Category, Item]]:
    """Flatten a preset into cursor rows in display order."""
    return [(category, item) for category in preset.categories for item in category.items]


def category_style(category: Category) -> str:
    return f"bold {category.color or _FALLBACK_CATEGORY_COLOR}"


def format_category_header(category: Category) -> Text:
    text = Text()
    text.append("▌", style=category.color or _FALLBACK_CATEGORY_COLOR)
    text.append(f" {category.name}", style=category_style(category))
    return text


def quantity_badge(entry: SelectedEntry) -> Text:
    label = format_quantity(entry.quantity)
    if entry.unit:
        label = f"{label} {entry.unit}"
    return Text(f" {label} ", style="bold #0b1f0f on #5fbf72")


def format_item_label(item: Item, entry: SelectedEntry | None) -> Text:
    """Render one item row with its icon, name, step hint and quantity badge."""
    icon, name = split_icon(item.name)
    text = Text()
    if icon:
        text.append(f"{icon} ")
    text.append(name, style="bold" if entry is not None else "")
    if entry is not None:
        text.append("  ")
        text.append_text(quantity_badge(entry))
    elif item.increment_step != 1:
        hint = f"+{format_quantity(item.increment_step)} {item.unit}".strip()
        text.append(f"  ({hint})", style="dim")
    return text


def format_preview(summary: SelectionSummary) -> Text:
    if not summary.count:
        return Text("(nothing selected)", style="dim")
    text = Text()
    text.append(f"{summary.count} item{'s' if summary.count != 1 else ''} selected", style="bold")
    for line in summary.preview:
        text.append(f"\n• {line}")
    return text


def format_status(online: bool, printer_status: str, message: str = "") -> Text:
    text = Text()
    if online:
        text.append(" SYNC ", style="bold #0b1f0f on #5fbf72")
    else:
        text.append(" OFFLINE ", style="bold #ffffff on #b23a48")
    text.append(f" {printer_status}", style="dim")
    if message:
        text.append(f"\n{message}")
    return text


def window_bounds(total: int, height: int, cursor: int | None) -> tuple[int, int]:
    """Slice of ``total`` lines to show in ``height`` rows around ``cursor``.

    An overflowing list keeps one row free at each clipped edge for a scroll
    marker.
    """
    height = max(1, height)
    if total <= height:
        return (0, total)
    span = max(1, height - 2)
    start = min(max(0, (cursor or 0) - span // 2), total - span)
    if start == 0:
        return (0, max(1, height - 1))
    if start + span >= total:
        return (total - max(1, height - 1), total)
    return (start, start + span)
