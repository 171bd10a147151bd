"""Shared fixtures: an in-memory sync gateway and catalog wiring."""

from dataclasses import replace

import pytest

from quickshare.catalog import PresetCatalog
from quickshare.data import build_default_preset
from quickshare.errors import RemoteError
from quickshare.gateway import SyncGateway
from quickshare.models import Category, Item, Preset
from quickshare.selection import SelectionStore

WEEKLY = Preset(
    id="preset_weekly",
    name="Weekly Shop",
    categories=(
        Category(
            id="cat_basics",
            name="Basics",
            items=(
                Item(id="item_rice", name="🍚 Rice", unit="kg", increment_step=0.5),
                Item(id="item_tea", name="Tea", unit="box"),
            ),
        ),
    ),
)


class FakeGateway(SyncGateway):
    """In-memory gateway; operations named in ``fail`` raise RemoteError."""

    def __init__(self, presets=None):
        self.presets = list(presets or [])
        self.fail = set()
        self.calls = []
        self._counter = 0

    def _check(self, operation):
        self.calls.append(operation)
        if operation in self.fail:
            raise RemoteError(f"{operation} failed")

    def _next_id(self, prefix):
        self._counter += 1
        return f"{prefix}_{self._counter}"

    def _update_categories(self, update):
        self.presets = [
            replace(preset, categories=tuple(update(cat) for cat in preset.categories)) for preset in self.presets
        ]

    async def fetch_presets(self):
        self._check("fetch")
        return list(self.presets)

    async def create_preset(self, name):
        self._check("create")
        preset = Preset(id=self._next_id("preset"), name=name)
        self.presets.append(preset)
        return preset

    async def rename_preset(self, preset_id, name):
        self._check("rename")
        for idx, preset in enumerate(self.presets):
            if preset.id == preset_id:
                self.presets[idx] = preset.renamed(name)
                return self.presets[idx]
        raise RemoteError(f"Preset {preset_id} no longer exists")

    async def delete_preset(self, preset_id):
        self._check("delete")
        before = len(self.presets)
        self.presets = [preset for preset in self.presets if preset.id != preset_id]
        return len(self.presets) < before

    async def create_category(self, preset_id, name):
        self._check("create_category")
        category = Category(id=self._next_id("cat"), name=name)
        self.presets = [
            replace(preset, categories=(*preset.categories, category)) if preset.id == preset_id else preset
            for preset in self.presets
        ]
        return category

    async def create_item(self, category_id, name, unit, increment_step):
        self._check("create_item")
        item = Item(id=self._next_id("item"), name=name, unit=unit, increment_step=increment_step)
        self._update_categories(
            lambda cat: replace(cat, items=(*cat.items, item)) if cat.id == category_id else cat
        )
        return item

    async def delete_item(self, item_id):
        self._check("delete_item")
        found = any(item.id == item_id for preset in self.presets for item in preset.iter_items())
        self._update_categories(
            lambda cat: replace(cat, items=tuple(item for item in cat.items if item.id != item_id))
        )
        return found


@pytest.fixture
def default_preset():
    return build_default_preset()


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def gateway():
    return FakeGateway([WEEKLY])


@pytest.fixture
def catalog(default_preset, gateway, store):
    return PresetCatalog(default_preset, gateway, store)


@pytest.fixture
def bread(default_preset):
    return default_preset.find_item("item_bread_001")[1]


@pytest.fixture
def milk(default_preset):
    return default_preset.find_item("item_milk_004")[1]
