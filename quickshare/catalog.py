"""Preset catalog: default preset, cached user presets, and confirmed CRUD."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from quickshare.data import coerce_step
from quickshare.errors import (
    NotFoundError,
    PermissionDeniedError,
    RemoteError,
    UnavailableError,
    ValidationError,
)
from quickshare.gateway import SyncGateway
from quickshare.models import ActivePreset, Category, ContentLoaded, Item, Preset
from quickshare.selection import SelectionStore

log = logging.getLogger(__name__)

ContentListener = Callable[[ContentLoaded], None]


def normalize_name(name: str | None) -> str:
    return (name or "").strip()


class PresetCatalog:
    """Default preset plus a cache of user presets mirrored from a sync gateway.

    The cache is replaced wholesale by ``populate()``. CRUD calls contact the
    gateway first and only apply the confirmed change locally; a failed call
    leaves the cache untouched.
    """

    def __init__(self, default: Preset, gateway: SyncGateway, store: SelectionStore) -> None:
        if not default.is_default:
            raise ValueError("default preset must be flagged is_default")
        self.default = default
        self.store = store
        self._gateway = gateway
        self._online = bool(gateway.available)
        self._cache: list[Preset] = []
        self._active = ActivePreset(id=default.id, name=default.name)
        self._listeners: list[ContentListener] = []
        self._generation = 0

    # -- queries ------------------------------------------------------------

    @property
    def online(self) -> bool:
        return self._online

    @property
    def active(self) -> ActivePreset:
        return self._active

    @property
    def active_preset(self) -> Preset:
        return self.get(self._active.id)

    @property
    def cache(self) -> list[Preset]:
        return list(self._cache)

    def list_presets(self) -> list[Preset]:
        """Default preset first, then cached user presets in order."""
        return [self.default, *self._cache]

    def is_default(self, preset_id: str) -> bool:
        return preset_id == self.default.id

    def get(self, preset_id: str) -> Preset:
        if self.is_default(preset_id):
            return self.default
        for preset in self._cache:
            if preset.id == preset_id:
                return preset
        raise NotFoundError(f"Preset {preset_id!r} not found")

    def _cache_index(self, preset_id: str) -> int:
        for idx, preset in enumerate(self._cache):
            if preset.id == preset_id:
                return idx
        raise NotFoundError(f"Preset {preset_id!r} not found")

    # -- notifications --------------------------------------------------------

    def subscribe(self, listener: ContentListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ContentListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit_content_loaded(self, preset: Preset) -> None:
        event = ContentLoaded(preset_id=preset.id, preset_name=preset.name, preset=preset)
        for listener in list(self._listeners):
            listener(event)

    # -- activation and population -------------------------------------------

    def activate(self, preset_id: str) -> ActivePreset:
        """Make ``preset_id`` active, reset the selection, then notify listeners."""
        preset = self.get(preset_id)
        self._active = ActivePreset(id=preset.id, name=preset.name)
        self.store.reset()
        log.info("preset activated id=%s name=%r", preset.id, preset.name)
        self._emit_content_loaded(preset)
        return self._active

    async def populate(self) -> list[Preset]:
        """Replace the cache from a fresh gateway fetch.

        Offline catalogs stay default-only. A response overtaken by a newer
        ``populate()`` call is discarded. Returns the resulting preset list.
        """
        if not self._online:
            return self.list_presets()

        self._generation += 1
        generation = self._generation
        try:
            fetched = await self._gateway.fetch_presets()
        except (RemoteError, UnavailableError):
            log.exception("preset fetch failed")
            raise

        if generation != self._generation:
            log.warning("discarding stale preset fetch generation=%d current=%d", generation, self._generation)
            return self.list_presets()

        self._cache = [preset for preset in fetched if not self.is_default(preset.id)]
        log.info("preset cache populated count=%d", len(self._cache))

        if not self.is_default(self._active.id):
            try:
                current = self.get(self._active.id)
            except NotFoundError:
                log.warning("active preset %s vanished remotely; falling back to default", self._active.id)
                self.activate(self.default.id)
            else:
                self._active = ActivePreset(id=current.id, name=current.name)
                self._emit_content_loaded(current)
        return self.list_presets()

    # -- validation -----------------------------------------------------------

    def _require_online(self, operation: str) -> None:
        if not self._online:
            raise UnavailableError(f"Cannot {operation} while offline")

    def _require_user_preset(self, preset_id: str, operation: str, online_operation: str) -> Preset:
        if self.is_default(preset_id):
            raise PermissionDeniedError(f"The default preset cannot be {operation}")
        self._require_online(online_operation)
        return self.get(preset_id)

    def _validate_preset_name(self, name: str | None, exclude_id: str | None = None) -> str:
        cleaned = normalize_name(name)
        if not cleaned:
            raise ValidationError("Preset name cannot be empty.")
        folded = cleaned.casefold()
        for preset in self.list_presets():
            if preset.id == exclude_id:
                continue
            if preset.name.casefold() == folded:
                raise ValidationError("Another preset with this name already exists.")
        return cleaned

    # -- preset CRUD ----------------------------------------------------------

    async def create(self, name: str) -> Preset:
        self._require_online("create presets")
        cleaned = self._validate_preset_name(name)

        try:
            created = await self._gateway.create_preset(cleaned)
        except RemoteError:
            log.exception("create preset failed name=%r", cleaned)
            raise

        self._cache.append(created)
        log.info("preset cached id=%s name=%r", created.id, created.name)
        return created

    async def rename(self, preset_id: str, new_name: str) -> Preset:
        current = self._require_user_preset(preset_id, "renamed", "rename presets")
        if normalize_name(new_name) == current.name:
            return current
        cleaned = self._validate_preset_name(new_name, exclude_id=preset_id)

        try:
            confirmed = await self._gateway.rename_preset(preset_id, cleaned)
        except RemoteError:
            log.exception("rename preset failed id=%s", preset_id)
            raise

        idx = self._cache_index(preset_id)
        updated = self._cache[idx].renamed(confirmed.name)
        self._cache[idx] = updated
        if self._active.id == preset_id:
            self._active = ActivePreset(id=preset_id, name=updated.name)
        log.info("preset renamed id=%s name=%r", preset_id, updated.name)
        return updated

    async def delete(self, preset_id: str) -> None:
        self._require_user_preset(preset_id, "deleted", "delete presets")

        try:
            deleted = await self._gateway.delete_preset(preset_id)
        except RemoteError:
            log.exception("delete preset failed id=%s", preset_id)
            raise
        if not deleted:
            log.error("delete preset rejected remotely id=%s", preset_id)
            raise RemoteError("Failed to delete preset. It might no longer exist.")

        del self._cache[self._cache_index(preset_id)]
        log.info("preset deleted id=%s", preset_id)
        if self._active.id == preset_id:
            self.activate(self.default.id)

    # -- category and item CRUD -----------------------------------------------

    def _replace_preset(self, preset: Preset) -> None:
        self._cache[self._cache_index(preset.id)] = preset
        if self._active.id == preset.id:
            self._emit_content_loaded(preset)

    async def add_category(self, preset_id: str, name: str) -> Category:
        preset = self._require_user_preset(preset_id, "edited", "edit presets")
        cleaned = normalize_name(name)
        if not cleaned:
            raise ValidationError("Category name cannot be empty.")
        if any(cat.name.casefold() == cleaned.casefold() for cat in preset.categories):
            raise ValidationError("This preset already has a category with that name.")

        try:
            category = await self._gateway.create_category(preset_id, cleaned)
        except RemoteError:
            log.exception("create category failed preset=%s", preset_id)
            raise

        preset = self.get(preset_id)
        self._replace_preset(replace(preset, categories=(*preset.categories, category)))
        return category

    async def add_item(
        self,
        preset_id: str,
        category_id: str,
        name: str,
        unit: str = "",
        step: float | str | None = 1,
    ) -> Item:
        preset = self._require_user_preset(preset_id, "edited", "edit presets")
        category = preset.find_category(category_id)
        if category is None:
            raise NotFoundError(f"Category {category_id!r} not found")
        cleaned = normalize_name(name)
        if not cleaned:
            raise ValidationError("Item name cannot be empty.")
        if any(item.name.casefold() == cleaned.casefold() for item in category.items):
            raise ValidationError("This category already has an item with that name.")
        try:
            increment_step = coerce_step(step)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        try:
            item = await self._gateway.create_item(category_id, cleaned, normalize_name(unit), increment_step)
        except RemoteError:
            log.exception("create item failed category=%s", category_id)
            raise

        preset = self.get(preset_id)
        categories = tuple(
            replace(cat, items=(*cat.items, item)) if cat.id == category_id else cat for cat in preset.categories
        )
        self._replace_preset(replace(preset, categories=categories))
        return item

    async def remove_item(self, preset_id: str, item_id: str) -> None:
        preset = self._require_user_preset(preset_id, "edited", "edit presets")
        if preset.find_item(item_id) is None:
            raise NotFoundError(f"Item {item_id!r} not found")

        try:
            deleted = await self._gateway.delete_item(item_id)
        except RemoteError:
            log.exception("delete item failed item=%s", item_id)
            raise
        if not deleted:
            raise RemoteError("Failed to delete item. It might no longer exist.")

        preset = self.get(preset_id)
        categories = tuple(
            replace(cat, items=tuple(item for item in cat.items if item.id != item_id)) for cat in preset.categories
        )
        if self._active.id == preset_id:
            self.store.discard(item_id)
        self._replace_preset(replace(preset, categories=categories))
