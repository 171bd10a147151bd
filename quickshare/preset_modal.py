"""Preset management modal screens."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from quickshare.errors import QuickShareError, ValidationError
from quickshare.models import Preset

log = logging.getLogger(__name__)

NAME_LIMIT = 40

_DIALOG_CSS = """
    {screen} {{
        align: center middle;
        background: $background 60%;
    }}

    .dialog {{
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }}

    .dialog-title {{
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }}

    .dialog-prompt {{
        color: white;
        margin-bottom: 1;
    }}

    .dialog-value {{
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }}

    .dialog-error {{
        color: #ffb3b3;
        margin-bottom: 1;
    }}

    .dialog-help {{
        color: #dddddd;
    }}
"""


class PresetNameModal(ModalScreen[Preset | None]):
    """Prompt for a preset name and run the create/rename call before closing."""

    CSS = _DIALOG_CSS.format(screen="PresetNameModal")

    def __init__(
        self,
        title: str,
        submit: Callable[[str], Awaitable[Preset]],
        initial: str = "",
    ) -> None:
        super().__init__()
        self.title_text = title
        self.submit = submit
        self.value = initial
        self.error = ""
        self.submitting = False

    def compose(self) -> ComposeResult:
        with Container(classes="dialog"):
            yield Static(self.title_text, classes="dialog-title")
            yield Static("Preset name", classes="dialog-prompt")
            yield Static(id="preset-name-value", classes="dialog-value")
            yield Static(id="preset-name-error", classes="dialog-error")
            yield Static(id="preset-name-help", classes="dialog-help")

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

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            return

        if event.is_printable and event.character:
            if len(self.value) < NAME_LIMIT:
                self.value += event.character
            self.error = ""
            self._refresh_content()

    def _confirm(self) -> None:
        if not self.value.strip():
            self.error = "Preset name cannot be empty."
            self._refresh_content()
            return
        self.submitting = True
        self._refresh_content()
        self.run_worker(self._submit(self.value), exclusive=True)

    async def _submit(self, name: str) -> None:
        try:
            preset = await self.submit(name)
        except ValidationError as exc:
            self.error = str(exc)
        except QuickShareError as exc:
            log.warning("preset name flow failed: %s", exc)
            self.error = f"{exc.title}: {exc}"
        else:
            self.dismiss(preset)
            return
        finally:
            self.submitting = False
        self._refresh_content()

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#preset-name-value", Static)
        error_widget = self.query_one("#preset-name-error", Static)
        help_widget = self.query_one("#preset-name-help", Static)
        cursor = "" if self.submitting else "|"
        value_widget.update(f"{self.value}{cursor}")
        error_widget.update(self.error or "")
        if self.submitting:
            help_widget.update("Saving…")
        else:
            help_widget.update("Type a name. Enter save. Backspace delete. Esc/Ctrl+C cancel.")


class ConfirmDeleteModal(ModalScreen[bool]):
    """Ask before deleting a preset; runs the delete call on confirmation."""

    CSS = _DIALOG_CSS.format(screen="ConfirmDeleteModal")

    def __init__(self, preset_name: str, submit: Callable[[], Awaitable[None]]) -> None:
        super().__init__()
        self.preset_name = preset_name
        self.submit = submit
        self.error = ""
        self.submitting = False

    def compose(self) -> ComposeResult:
        with Container(classes="dialog"):
            yield Static("Delete Preset", classes="dialog-title")
            yield Static(f"Delete “{self.preset_name}” and all of its items?", classes="dialog-prompt")
            yield Static(id="delete-error", classes="dialog-error")
            yield Static(id="delete-help", classes="dialog-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        event.stop()
        if self.submitting:
            return

        if event.key in {"escape", "n", "q", "ctrl+c"}:
            self.dismiss(False)
            return

        if event.key in {"y", "enter"}:
            self.submitting = True
            self.error = ""
            self._refresh_content()
            self.run_worker(self._submit(), exclusive=True)

    async def _submit(self) -> None:
        try:
            await self.submit()
        except QuickShareError as exc:
            log.warning("delete preset flow failed: %s", exc)
            self.error = f"{exc.title}: {exc}"
        else:
            self.dismiss(True)
            return
        finally:
            self.submitting = False
        self._refresh_content()

    def _refresh_content(self) -> None:
        self.query_one("#delete-error", Static).update(self.error or "")
        help_widget = self.query_one("#delete-help", Static)
        if self.submitting:
            help_widget.update("Deleting…")
        else:
            help_widget.update("Y/Enter delete. N/Esc cancel.")


class NoticeModal(ModalScreen[None]):
    """Blocking notice for errors that abort an operation."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = _DIALOG_CSS.format(screen="NoticeModal")

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(classes="dialog"):
            yield Static(self.title_text, classes="dialog-title")
            yield Static(self.message, classes="dialog-prompt")
            yield Static("Enter/Esc to close", classes="dialog-help")

    def action_close(self) -> None:
        self.dismiss()
