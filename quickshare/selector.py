"""Preset selector state machine.

One control carries both real preset ids and management pseudo-values. The
controller classifies every chosen value and always settles the control back
on a resolvable preset id.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from quickshare.catalog import PresetCatalog
from quickshare.constant import (
    SELECTOR_CREATE_LABEL,
    SELECTOR_DELETE_LABEL,
    SELECTOR_EDIT_LABEL,
    SELECTOR_SEPARATOR_LABEL,
)
from quickshare.errors import NotFoundError, PermissionDeniedError, QuickShareError, UnavailableError
from quickshare.models import Preset

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RealId:
    preset_id: str


class SelectorAction(enum.Enum):
    CREATE_NEW = "create_new"
    EDIT_SELECTED = "edit_selected"
    DELETE_SELECTED = "delete_selected"
    SEPARATOR = "separator"


SelectorValue = Union[RealId, SelectorAction]


class FlowKind(enum.Enum):
    CREATE = "create"
    RENAME = "rename"
    DELETE = "delete"


@dataclass(frozen=True)
class FlowResult:
    """Outcome of a management flow; ``preset`` is the created or renamed record."""

    completed: bool
    preset: Preset | None = None


class FlowRunner(ABC):
    """Host capability that shows a management flow and performs its CRUD call."""

    @abstractmethod
    async def run_flow(self, kind: FlowKind, target: Preset | None) -> FlowResult:
        ...

    @abstractmethod
    def report_error(self, error: Exception) -> None:
        ...


class SelectorController:
    def __init__(self, catalog: PresetCatalog, runner: FlowRunner) -> None:
        self.catalog = catalog
        self.runner = runner
        self.last_valid = catalog.default.id
        self._flow_open = False

    @property
    def flow_open(self) -> bool:
        return self._flow_open

    @property
    def value(self) -> RealId:
        return RealId(self.last_valid)

    def options(self) -> list[tuple[str, SelectorValue]]:
        """(label, value) pairs: presets, a separator, then the management actions."""
        opts: list[tuple[str, SelectorValue]] = [
            (preset.name, RealId(preset.id)) for preset in self.catalog.list_presets()
        ]
        opts.append((SELECTOR_SEPARATOR_LABEL, SelectorAction.SEPARATOR))
        opts.append((SELECTOR_CREATE_LABEL, SelectorAction.CREATE_NEW))
        if self.catalog.online:
            opts.append((SELECTOR_EDIT_LABEL, SelectorAction.EDIT_SELECTED))
            opts.append((SELECTOR_DELETE_LABEL, SelectorAction.DELETE_SELECTED))
        return opts

    async def choose(self, value: SelectorValue) -> RealId:
        """Interpret a chosen control value and return the value to display.

        Raises ``PermissionDeniedError``, ``UnavailableError`` or
        ``NotFoundError`` after reverting; the control keeps ``last_valid``.
        """
        if self._flow_open:
            log.debug("selector choice %r ignored while a flow is open", value)
            return self.value

        if isinstance(value, RealId):
            if value.preset_id == self.last_valid:
                return self.value
            self.catalog.activate(value.preset_id)
            self.last_valid = value.preset_id
            return self.value

        if value is SelectorAction.SEPARATOR:
            return self.value

        if value is SelectorAction.CREATE_NEW:
            if not self.catalog.online:
                raise UnavailableError("Creating presets requires sync to be online.")
            await self._run_create()
            return self.value

        if value in (SelectorAction.EDIT_SELECTED, SelectorAction.DELETE_SELECTED):
            if self.catalog.is_default(self.last_valid):
                raise PermissionDeniedError("The default preset cannot be edited or deleted.")
            if not self.catalog.online:
                raise UnavailableError("Managing presets requires sync to be online.")
            target = self.catalog.get(self.last_valid)
            if value is SelectorAction.EDIT_SELECTED:
                await self._run_rename(target)
            else:
                await self._run_delete(target)
            return self.value

        raise ValueError(f"Unknown selector value: {value!r}")

    async def _open(self, kind: FlowKind, target: Preset | None) -> FlowResult:
        self._flow_open = True
        try:
            return await self.runner.run_flow(kind, target)
        finally:
            self._flow_open = False

    async def _repopulate(self) -> None:
        try:
            await self.catalog.populate()
        except QuickShareError as exc:
            log.warning("repopulate after preset change failed: %s", exc)
            self.runner.report_error(exc)

    async def _run_create(self) -> None:
        result = await self._open(FlowKind.CREATE, None)
        if not result.completed or result.preset is None:
            return
        await self._repopulate()
        try:
            self.catalog.activate(result.preset.id)
        except NotFoundError as exc:
            log.warning("created preset %s missing after repopulate", result.preset.id)
            self.runner.report_error(exc)
            self.last_valid = self.catalog.active.id
            return
        self.last_valid = result.preset.id

    async def _run_rename(self, target: Preset) -> None:
        result = await self._open(FlowKind.RENAME, target)
        if not result.completed:
            return
        await self._repopulate()
        self.last_valid = self.catalog.active.id

    async def _run_delete(self, target: Preset) -> None:
        result = await self._open(FlowKind.DELETE, target)
        if not result.completed:
            return
        await self._repopulate()
        if not self.catalog.is_default(self.catalog.active.id):
            self.catalog.activate(self.catalog.default.id)
        self.last_valid = self.catalog.default.id
