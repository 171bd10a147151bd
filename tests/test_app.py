"""Pilot-driven smoke tests for the Textual app."""

import asyncio
from unittest.mock import patch

import pytest
from textual.widgets import Select

from quickshare.catalog import PresetCatalog
from quickshare.gateway import OfflineGateway
from quickshare.preset_modal import NoticeModal, PresetNameModal
from quickshare.quickshare_app import QuickShareApp
from quickshare.selection import SelectionStore
from tests.conftest import WEEKLY, FakeGateway


@pytest.fixture(autouse=True)
def no_printer():
    with patch("quickshare.quickshare_app.check_printer_dependencies", return_value=(False, "Printer off")):
        yield


def _app(default_preset, gateway, tmp_path):
    catalog = PresetCatalog(default_preset, gateway, SelectionStore())
    return QuickShareApp(catalog, share_dir=tmp_path / "shared")


@pytest.mark.asyncio
async def test_keys_adjust_highlighted_item(default_preset, tmp_path):
    app = _app(default_preset, OfflineGateway(), tmp_path)
    async with app.run_test() as pilot:
        await pilot.press("enter", "enter")
        assert app.store.quantity_of("item_bread_001") == 2

        await pilot.press("minus")
        assert app.store.quantity_of("item_bread_001") == 1

        await pilot.press("j", "plus")
        assert app.store.quantity_of("item_bagels_002") == 1
        assert app.store.summarize().count == 2


@pytest.mark.asyncio
async def test_offline_create_shows_notice(default_preset, tmp_path):
    app = _app(default_preset, OfflineGateway(), tmp_path)
    async with app.run_test() as pilot:
        await pilot.press("n")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert isinstance(app.screen, NoticeModal)

        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, NoticeModal)


@pytest.mark.asyncio
async def test_share_exports_and_resets(default_preset, tmp_path):
    app = _app(default_preset, OfflineGateway(), tmp_path)
    async with app.run_test() as pilot:
        await pilot.press("enter")
        await pilot.press("ctrl+s")
        await pilot.pause()

        exported = list((tmp_path / "shared").glob("quickshare-*.txt"))
        assert len(exported) == 1
        assert "- Bread: 1 loaf" in exported[0].read_text(encoding="utf-8")
        assert len(app.store) == 0


@pytest.mark.asyncio
async def test_create_flow_activates_new_preset(default_preset, tmp_path):
    gateway = FakeGateway([WEEKLY])
    app = _app(default_preset, gateway, tmp_path)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        await pilot.press("n")
        await pilot.pause()
        assert isinstance(app.screen, PresetNameModal)

        await pilot.press("p", "a", "r", "t", "y", "enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.catalog.active.name == "party"
        assert app.controller.last_valid == app.catalog.active.id
        assert [preset.name for preset in app.catalog.list_presets()] == ["Grocery List", "Weekly Shop", "party"]


class HeldDeleteGateway(FakeGateway):
    """Holds ``delete_item`` until ``release`` is set."""

    def __init__(self, presets):
        super().__init__(presets)
        self.release = asyncio.Event()

    async def delete_item(self, item_id):
        await self.release.wait()
        return await super().delete_item(item_id)


@pytest.mark.asyncio
async def test_item_removal_is_submitted_once(default_preset, tmp_path):
    gateway = HeldDeleteGateway([WEEKLY])
    app = _app(default_preset, gateway, tmp_path)
    async with app.run_test() as pilot:
        await app.workers.wait_for_complete()
        app.catalog.activate(WEEKLY.id)
        await pilot.pause()

        await pilot.press("delete", "delete")
        await pilot.pause()
        assert app.query_one("#preset-select", Select).disabled

        gateway.release.set()
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert gateway.calls.count("delete_item") == 1
        assert app.catalog.get(WEEKLY.id).find_item("item_rice") is None
        assert not app.query_one("#preset-select", Select).disabled
        assert not isinstance(app.screen, NoticeModal)
