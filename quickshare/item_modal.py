"""Add-item modal screen."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from quickshare.errors import QuickShareError, ValidationError
from quickshare.models import Item

log = logging.getLogger(__name__)

ItemSubmit = Callable[[str, str, str, str], Awaitable[Item]]


class AddItemModal(ModalScreen[Item | None]):
    """Form with category, name, unit and step fields for a user preset.

    A category name that matches none of the preset's categories creates a
    new category before the item is added.
    """

    CSS = """
    AddItemModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #item-body {
        margin-bottom: 1;
        color: white;
    }

    #item-error {
        color: #ffb3b3;
    }

    #item-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    FIELDS = (
        ("category", "Category"),
        ("name", "Name"),
        ("unit", "Unit"),
        ("step", "Step"),
    )

    cursor_index = reactive(0)

    def __init__(self, preset_name: str, category_names: list[str], submit: ItemSubmit) -> None:
        super().__init__()
        self.preset_name = preset_name
        self.category_names = category_names
        self.submit = submit
        self.values = {
            "category": category_names[0] if category_names else "",
            "name": "",
            "unit": "",
            "step": "1",
        }
        self.error = ""
        self.submitting = False

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static(f"Add Item · {self.preset_name}", id="item-title")
            yield Static(id="item-body")
            yield Static(id="item-error")
            yield Static(id="item-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()
        if self.submitting:
            return

        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            return

        if event.key == "enter":
            self._confirm()
            return

        if event.key in {"tab", "down"}:
            self._move_cursor(1)
            return

        if event.key in {"shift+tab", "up"}:
            self._move_cursor(-1)
            return

        field = self._current_field()
        if field == "category" and event.key in {"left", "right"}:
            self._cycle_category(-1 if event.key == "left" else 1)
            return

        if event.key == "backspace":
            self.values[field] = self.values[field][:-1]
            self.error = ""
            self._refresh_content()
            return

        if event.is_printable and event.character:
            self.values[field] += event.character
            self.error = ""
            self._refresh_content()

    def _current_field(self) -> str:
        return self.FIELDS[self.cursor_index][0]

    def _move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self.FIELDS)
        self._refresh_content()

    def _cycle_category(self, delta: int) -> None:
        if not self.category_names:
            return
        current = self.values["category"].strip().casefold()
        names = [name.casefold() for name in self.category_names]
        idx = names.index(current) if current in names else -1
        idx = (idx + delta) % len(self.category_names)
        self.values["category"] = self.category_names[idx]
        self.error = ""
        self._refresh_content()

    def _confirm(self) -> None:
        if not self.values["category"].strip():
            self.error = "Category is required."
            self._refresh_content()
            return
        if not self.values["name"].strip():
            self.error = "Item name is required."
            self._refresh_content()
            return
        self.submitting = True
        self._refresh_content()
        self.run_worker(self._submit(), exclusive=True)

    async def _submit(self) -> None:
        try:
            item = await self.submit(
                self.values["category"],
                self.values["name"],
                self.values["unit"],
                self.values["step"],
            )
        except QuickShareError as exc:
            log.warning("add item flow failed: %s", exc)
            self.error = str(exc) if isinstance(exc, ValidationError) else f"{exc.title}: {exc}"
        else:
            self.dismiss(item)
            return
        finally:
            self.submitting = False
        self._refresh_content()

    def _is_new_category(self) -> bool:
        wanted = self.values["category"].strip().casefold()
        return bool(wanted) and all(name.casefold() != wanted for name in self.category_names)

    def _refresh_content(self) -> None:
        body = self.query_one("#item-body", Static)
        content = Text(style="white")
        for idx, (field, label) in enumerate(self.FIELDS):
            if idx > 0:
                content.append("\n")
            active = idx == self.cursor_index
            pointer = "➤ " if active else "  "
            cursor = "|" if active and not self.submitting else ""
            content.append(f"{pointer}{label:<9}", style="bold white" if active else "white")
            content.append(f"{self.values[field]}{cursor}")
            if field == "category" and self._is_new_category():
                content.append("  (new)", style="dim")
        body.update(content)

        self.query_one("#item-error", Static).update(self.error or "")
        help_widget = self.query_one("#item-help", Static)
        if self.submitting:
            help_widget.update("Saving…")
        else:
            help_widget.update("Tab/↑/↓ field, ←/→ category, Enter save, Esc cancel")
