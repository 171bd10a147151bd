"""Domain models for quickshare."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Item:
    """A catalog item that can be tallied."""

    id: str
    name: str
    unit: str = ""
    increment_step: float = 1


@dataclass(frozen=True)
class Category:
    """An ordered group of items inside a preset."""

    id: str
    name: str
    items: tuple[Item, ...] = ()
    color: str | None = None

    def find_item(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass(frozen=True)
class Preset:
    """A named catalog of categories."""

    id: str
    name: str
    categories: tuple[Category, ...] = ()
    is_default: bool = False

    def find_category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def find_item(self, item_id: str) -> tuple[Category, Item] | None:
        for category in self.categories:
            item = category.find_item(item_id)
            if item is not None:
                return (category, item)
        return None

    def iter_items(self):
        for category in self.categories:
            yield from category.items

    def renamed(self, name: str) -> Preset:
        return replace(self, name=name)


@dataclass
class SelectedEntry:
    """Live quantity record for one selected item."""

    name: str
    unit: str
    increment_step: float
    quantity: float


@dataclass(frozen=True)
class ActivePreset:
    """Identity of the preset currently shown."""

    id: str
    name: str


@dataclass(frozen=True)
class SelectionSummary:
    """Distinct item count plus compact preview strings."""

    count: int
    preview: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ContentLoaded:
    """Notification emitted after a preset was activated and the selection reset."""

    preset_id: str
    preset_name: str
    preset: Preset
