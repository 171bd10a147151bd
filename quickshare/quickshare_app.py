"""Main Textual app class."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Header, Select, Static

from quickshare.catalog import PresetCatalog, normalize_name
from quickshare.config import SHARE_DIR
from quickshare.errors import PermissionDeniedError, QuickShareError, UnavailableError
from quickshare.item_modal import AddItemModal
from quickshare.models import Category, ContentLoaded, Item, Preset
from quickshare.preset_modal import ConfirmDeleteModal, NoticeModal, PresetNameModal
from quickshare.printer import check_printer_dependencies, print_share_text
from quickshare.rendering import (
    format_category_header,
    format_item_label,
    format_preview,
    format_status,
    item_rows,
    window_bounds,
)
from quickshare.selector import (
    FlowKind,
    FlowResult,
    FlowRunner,
    RealId,
    SelectorAction,
    SelectorController,
    SelectorValue,
)
from quickshare.sharing import export_share_text, format_share_text

log = logging.getLogger(__name__)


class ItemList(Static, can_focus=True):
    """Focusable item pane; key handling lives on the app."""


class ModalFlowRunner(FlowRunner):
    """Runs preset management flows as modal screens on the app."""

    def __init__(self, app: QuickShareApp) -> None:
        self.app = app

    async def run_flow(self, kind: FlowKind, target: Preset | None) -> FlowResult:
        catalog = self.app.catalog
        self.app.set_selector_enabled(False)
        try:
            if kind is FlowKind.CREATE:
                created = await self.app.push_screen_wait(PresetNameModal("New Preset", catalog.create))
                return FlowResult(completed=created is not None, preset=created)

            assert target is not None
            if kind is FlowKind.RENAME:

                async def rename(name: str) -> Preset:
                    return await catalog.rename(target.id, name)

                renamed = await self.app.push_screen_wait(
                    PresetNameModal("Rename Preset", rename, initial=target.name)
                )
                return FlowResult(completed=renamed is not None, preset=renamed)

            async def delete() -> None:
                await catalog.delete(target.id)

            deleted = await self.app.push_screen_wait(ConfirmDeleteModal(target.name, delete))
            return FlowResult(completed=bool(deleted))
        finally:
            self.app.set_selector_enabled(True)

    def report_error(self, error: Exception) -> None:
        title = getattr(error, "title", "Error")
        self.app.push_screen(NoticeModal(title, str(error)))


class QuickShareApp(App):
    """A Textual app for tallying preset items and sharing the list."""

    TITLE = "QuickShare List"
    SUB_TITLE = "Presets / Selection"

    CSS = """
    #main-layout {
        height: 1fr;
    }

    .pane {
        padding: 0 1;
        border: round $primary;
    }

    #items-pane {
        width: 3fr;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
    }

    .pane-title {
        text-style: bold;
        padding-top: 1;
    }

    #items-list, #preview {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #items-list:focus {
        border: tall $accent;
    }

    #preset-select {
        margin-top: 1;
    }

    #status-bar {
        height: 4;
        margin: 1 0;
        border: heavy $secondary;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("up", "move_cursor(-1)", "Previous item"),
        ("down", "move_cursor(1)", "Next item"),
        Binding("ctrl+s", "share", "Share", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, catalog: PresetCatalog, share_dir: str | Path | None = None) -> None:
        super().__init__()
        self.catalog = catalog
        self.store = catalog.store
        self.share_dir = Path(share_dir or SHARE_DIR)
        self.flow_runner = ModalFlowRunner(self)
        self.controller = SelectorController(catalog, self.flow_runner)
        self.preset: Preset = catalog.active_preset
        self.cursor_index = 0
        self.system_status = ""
        self.printer_ready = False
        self.printer_status = ""
        self.removing_item = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="items-pane", classes="pane"):
                yield Static(id="items-title", classes="pane-title")
                yield ItemList("(no items)", id="items-list")
            with Vertical(id="side-pane", classes="pane"):
                yield Select(
                    self.controller.options(),
                    allow_blank=False,
                    value=self.controller.value,
                    id="preset-select",
                )
                yield Static(id="status-bar")
                yield Static("Selection", classes="pane-title")
                yield Static(id="preview")

    def on_mount(self) -> None:
        self.printer_ready, self.printer_status = check_printer_dependencies()
        log.info("app mounted online=%s printer=%r", self.catalog.online, self.printer_status)
        self.catalog.subscribe(self._on_content_loaded)
        self.query_one("#items-list", ItemList).focus()
        self._refresh_all()
        self._populate()

    def on_unmount(self) -> None:
        self.catalog.unsubscribe(self._on_content_loaded)

    # -- catalog wiring ----------------------------------------------------

    @work(group="catalog")
    async def _populate(self) -> None:
        try:
            await self.catalog.populate()
        except QuickShareError as exc:
            self.system_status = f"Could not load presets: {exc}"
        self._sync_selector()
        self._refresh_status()

    def _on_content_loaded(self, event: ContentLoaded) -> None:
        if event.preset_id != self.preset.id:
            self.cursor_index = 0
        self.preset = event.preset
        self._refresh_all()

    def set_selector_enabled(self, enabled: bool) -> None:
        try:
            self.query_one("#preset-select", Select).disabled = not enabled
        except NoMatches:
            return

    def _sync_selector(self) -> None:
        try:
            select = self.query_one("#preset-select", Select)
        except NoMatches:
            return
        with self.prevent(Select.Changed):
            select.set_options(self.controller.options())
            select.value = self.controller.value
        select.disabled = self.controller.flow_open or self.removing_item

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "preset-select":
            return
        if not isinstance(event.value, (RealId, SelectorAction)):
            return
        self._choose(event.value)

    @work(group="selector")
    async def _choose(self, value: SelectorValue) -> None:
        try:
            await self.controller.choose(value)
        except QuickShareError as exc:
            log.warning("selector choice %r rejected: %s", value, exc)
            self.flow_runner.report_error(exc)
        self._sync_selector()
        self._refresh_all()
        if not isinstance(self.screen, ModalScreen):
            self.query_one("#items-list", ItemList).focus()

    # -- keyboard ----------------------------------------------------------

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if self._modal_open():
            return
        if self.focused is not None and any(isinstance(node, Select) for node in self.focused.ancestors_with_self):
            return

        key = event.key
        if key in {"enter", "space", "plus"}:
            self._increment_current()
        elif key in {"minus", "backspace"}:
            self._decrement_current()
        elif key == "delete":
            self._remove_current_item()
        elif key == "j":
            self.action_move_cursor(1)
        elif key == "k":
            self.action_move_cursor(-1)
        elif key == "n":
            self._choose(SelectorAction.CREATE_NEW)
        elif key == "e":
            self._choose(SelectorAction.EDIT_SELECTED)
        elif key == "x":
            self._choose(SelectorAction.DELETE_SELECTED)
        elif key == "a":
            self._open_add_item()
        elif key == "p":
            self.query_one("#preset-select", Select).focus()
        else:
            return
        event.stop()

    def action_move_cursor(self, delta: int) -> None:
        if self._modal_open():
            return
        rows = item_rows(self.preset)
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_items()

    def _current_row(self) -> tuple[Category, Item] | None:
        rows = item_rows(self.preset)
        if not rows:
            return None
        self.cursor_index = min(self.cursor_index, len(rows) - 1)
        return rows[self.cursor_index]

    def _increment_current(self) -> None:
        row = self._current_row()
        if row is None:
            return
        _, item = row
        self.store.increment(item.id, item)
        self._refresh_items()
        self._refresh_preview()

    def _decrement_current(self) -> None:
        row = self._current_row()
        if row is None:
            return
        self.store.decrement(row[1].id)
        self._refresh_items()
        self._refresh_preview()

    # -- item management -----------------------------------------------------

    def _require_editable_preset(self) -> bool:
        if self.catalog.is_default(self.preset.id):
            self.flow_runner.report_error(PermissionDeniedError("Items of the default preset cannot be changed."))
            return False
        if not self.catalog.online:
            self.flow_runner.report_error(UnavailableError("Editing items requires sync to be online."))
            return False
        return True

    def _open_add_item(self) -> None:
        if not self._require_editable_preset():
            return
        preset_id = self.preset.id

        async def submit(category_name: str, name: str, unit: str, step: str) -> Item:
            return await self._add_item(preset_id, category_name, name, unit, step)

        names = [category.name for category in self.preset.categories]
        self.push_screen(AddItemModal(self.preset.name, names, submit))

    async def _add_item(self, preset_id: str, category_name: str, name: str, unit: str, step: str) -> Item:
        wanted = normalize_name(category_name).casefold()
        preset = self.catalog.get(preset_id)
        category = next((cat for cat in preset.categories if cat.name.casefold() == wanted), None)
        if category is None:
            category = await self.catalog.add_category(preset_id, category_name)
        item = await self.catalog.add_item(preset_id, category.id, name, unit, step)
        self.system_status = f"Added {item.name}"
        self._refresh_status()
        return item

    def _remove_current_item(self) -> None:
        row = self._current_row()
        if self.removing_item or row is None or not self._require_editable_preset():
            return
        self.removing_item = True
        self._remove_item(self.preset.id, row[1])

    @work(group="catalog")
    async def _remove_item(self, preset_id: str, item: Item) -> None:
        self.set_selector_enabled(False)
        try:
            await self.catalog.remove_item(preset_id, item.id)
        except QuickShareError as exc:
            self.flow_runner.report_error(exc)
            return
        finally:
            self.removing_item = False
            self.set_selector_enabled(True)
        self.system_status = f"Removed {item.name}"
        self._refresh_all()

    # -- sharing ---------------------------------------------------------------

    def action_share(self) -> None:
        if self._modal_open():
            return
        if not len(self.store):
            self.system_status = "Nothing to share"
            self._refresh_status()
            return

        text = format_share_text(self.preset, self.store, self.catalog.active.name)
        try:
            path = export_share_text(text, self.share_dir)
        except OSError as exc:
            log.exception("share export failed")
            self.system_status = f"Share failed: {exc}"
            self._refresh_status()
            return
        self.copy_to_clipboard(text)

        status = f"Shared to {path.name} (copied)"
        if self.printer_ready:
            try:
                print_share_text(text)
            except Exception as exc:
                log.exception("share print failed")
                status = f"Saved {path.name} but print failed: {exc}"
            else:
                status = f"Shared + printed: {path.name}"

        self.store.reset()
        self.system_status = status
        self._refresh_all()

    # -- rendering -------------------------------------------------------------

    def _refresh_all(self) -> None:
        self._refresh_items()
        self._refresh_preview()
        self._refresh_status()

    def _item_lines(self) -> tuple[list[Text], int | None]:
        lines: list[Text] = []
        cursor_line = None
        row_idx = 0
        for category in self.preset.categories:
            lines.append(format_category_header(category))
            for item in category.items:
                pointer = "➤ " if row_idx == self.cursor_index else "  "
                if row_idx == self.cursor_index:
                    cursor_line = len(lines)
                line = Text(pointer)
                line.append_text(format_item_label(item, self.store.get(item.id)))
                lines.append(line)
                row_idx += 1
        return (lines, cursor_line)

    def _refresh_items(self) -> None:
        try:
            title = self.query_one("#items-title", Static)
            items_widget = self.query_one("#items-list", ItemList)
        except NoMatches:
            return
        title.update(self.catalog.active.name)

        if not item_rows(self.preset):
            self.cursor_index = 0
            items_widget.update("(no items yet, press A to add one)")
            return
        self.cursor_index = min(self.cursor_index, len(item_rows(self.preset)) - 1)

        lines, cursor_line = self._item_lines()
        start, end = window_bounds(len(lines), items_widget.size.height or 12, cursor_line)

        content = Text()
        if start > 0:
            content.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                content.append("\n")
            content.append_text(lines[idx])
        if end < len(lines):
            content.append("\n⋮", style="dim")
        items_widget.update(content)

    def _refresh_preview(self) -> None:
        try:
            preview = self.query_one("#preview", Static)
        except NoMatches:
            return
        preview.update(format_preview(self.store.summarize()))

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        bar.update(format_status(self.catalog.online, self.printer_status, self.system_status))
