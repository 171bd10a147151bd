"""Sync gateway base class, offline variant, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NoReturn

from quickshare.errors import UnavailableError
from quickshare.models import Category, Item, Preset


class SyncGateway(ABC):
    """Abstract persistence capability for user-owned presets.

    Every call may raise ``RemoteError``. Implementations never return the
    default preset.
    """

    available = True

    @abstractmethod
    async def fetch_presets(self) -> list[Preset]:
        """Return the user's presets with their categories, in display order."""
        ...

    @abstractmethod
    async def create_preset(self, name: str) -> Preset:
        ...

    @abstractmethod
    async def rename_preset(self, preset_id: str, name: str) -> Preset:
        ...

    @abstractmethod
    async def delete_preset(self, preset_id: str) -> bool:
        ...

    @abstractmethod
    async def create_category(self, preset_id: str, name: str) -> Category:
        ...

    @abstractmethod
    async def create_item(
        self,
        category_id: str,
        name: str,
        unit: str,
        increment_step: float,
    ) -> Item:
        ...

    @abstractmethod
    async def delete_item(self, item_id: str) -> bool:
        ...


class OfflineGateway(SyncGateway):
    """Stand-in used when no persistence is reachable; every call refuses."""

    available = False

    def __init__(self, reason: str = "Sync is offline") -> None:
        self.reason = reason

    def _refuse(self) -> NoReturn:
        raise UnavailableError(self.reason)

    async def fetch_presets(self) -> list[Preset]:
        self._refuse()

    async def create_preset(self, name: str) -> Preset:
        self._refuse()

    async def rename_preset(self, preset_id: str, name: str) -> Preset:
        self._refuse()

    async def delete_preset(self, preset_id: str) -> bool:
        self._refuse()

    async def create_category(self, preset_id: str, name: str) -> Category:
        self._refuse()

    async def create_item(self, category_id: str, name: str, unit: str, increment_step: float) -> Item:
        self._refuse()

    async def delete_item(self, item_id: str) -> bool:
        self._refuse()


def create_gateway(
    offline: bool | None = None,
    db_path: str | None = None,
    user_id: str | None = None,
) -> SyncGateway:
    """Create the sync gateway from configuration (arguments override config)."""
    from quickshare import config

    if offline is None:
        offline = config.OFFLINE
    if offline:
        return OfflineGateway("Sync is disabled (QUICKSHARE_OFFLINE)")

    from quickshare.persistence import SqliteSyncGateway

    return SqliteSyncGateway(
        db_path=db_path or config.DB_PATH,
        user_id=user_id or config.USER_ID,
    )
