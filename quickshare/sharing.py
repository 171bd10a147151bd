"""Outbound share text and file export."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from quickshare.constant import SHARE_FALLBACK_CATEGORY, SHARE_TITLE_PREFIX
from quickshare.data import display_name
from quickshare.models import Preset, SelectedEntry
from quickshare.selection import SelectionStore, format_quantity

log = logging.getLogger(__name__)


def _entry_line(name: str, entry: SelectedEntry) -> str:
    line = f"- {name}: {format_quantity(entry.quantity)}"
    if entry.unit:
        line = f"{line} {entry.unit}"
    return line


def format_share_text(preset: Preset, store: SelectionStore, title: str | None = None) -> str:
    """Render the selection grouped by the preset's categories.

    Only categories with selected items appear, in catalog order. Selected
    items missing from ``preset`` are listed under a trailing fallback section.
    """
    lines = [f"{SHARE_TITLE_PREFIX}: {title or preset.name}"]
    placed: set[str] = set()

    for category in preset.categories:
        rows = []
        for item in category.items:
            entry = store.get(item.id)
            if entry is None:
                continue
            placed.add(item.id)
            rows.append(_entry_line(display_name(item.name), entry))
        if rows:
            lines.append("")
            lines.append(f"{category.name}:")
            lines.extend(rows)

    leftovers = [
        _entry_line(display_name(entry.name), entry) for item_id, entry in store.items() if item_id not in placed
    ]
    if leftovers:
        lines.append("")
        lines.append(f"{SHARE_FALLBACK_CATEGORY}:")
        lines.extend(leftovers)

    lines.append("")
    lines.append(f"Total unique items selected: {len(store)}")
    return "\n".join(lines)


def export_share_text(text: str, share_dir: str | Path, now: datetime | None = None) -> Path:
    """Write ``text`` to a timestamped file under ``share_dir`` and return its path."""
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    target_dir = Path(share_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"quickshare-{stamp}.txt"
    counter = 1
    while path.exists():
        path = target_dir / f"quickshare-{stamp}-{counter}.txt"
        counter += 1
    path.write_text(text + "\n", encoding="utf-8")
    log.info("share text exported path=%s", path)
    return path
