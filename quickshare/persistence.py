"""SQLite-backed sync gateway for user-owned presets."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

from quickshare.data import coerce_step
from quickshare.errors import RemoteError
from quickshare.gateway import SyncGateway
from quickshare.models import Category, Item, Preset

log = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


class SqliteSyncGateway(SyncGateway):
    """Stores one user's presets, categories and items in a sqlite file.

    Blocking sqlite work runs in a worker thread so the UI loop only suspends
    at the awaited gateway call. Every sqlite failure surfaces as ``RemoteError``.
    """

    def __init__(self, db_path: str | Path = "data/quickshare.db", user_id: str = "local") -> None:
        self.db_path = Path(db_path)
        self.user_id = user_id
        self._schema_ready = False

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        if not self._schema_ready:
            self._bootstrap_schema(conn)
            self._schema_ready = True
        return conn

    @staticmethod
    def _bootstrap_schema(conn: sqlite3.Connection) -> None:
        """Create persistence schema if it does not already exist."""
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS presets (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                created_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                preset_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                name TEXT NOT NULL,
                color TEXT,
                FOREIGN KEY(preset_id) REFERENCES presets(id) ON DELETE CASCADE
            );

            CREATE TABLE IF NOT EXISTS items (
                id TEXT PRIMARY KEY,
                category_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                name TEXT NOT NULL,
                unit TEXT NOT NULL DEFAULT '',
                increment_step REAL NOT NULL DEFAULT 1,
                FOREIGN KEY(category_id) REFERENCES categories(id) ON DELETE CASCADE
            );

            CREATE UNIQUE INDEX IF NOT EXISTS idx_presets_user_name
                ON presets(user_id, name COLLATE NOCASE);

            CREATE INDEX IF NOT EXISTS idx_categories_preset_position
                ON categories(preset_id, position);

            CREATE INDEX IF NOT EXISTS idx_items_category_position
                ON items(category_id, position);
            """
        )

    async def _run(self, operation: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except sqlite3.Error as exc:
            raise RemoteError(f"Could not {operation}: {exc}") from exc

    # -- presets ---------------------------------------------------------

    async def fetch_presets(self) -> list[Preset]:
        return await self._run("fetch presets", self._fetch_presets)

    def _fetch_presets(self) -> list[Preset]:
        with closing(self._connect()) as conn:
            preset_rows = conn.execute(
                "SELECT id, name FROM presets WHERE user_id = ? ORDER BY created_at, rowid",
                (self.user_id,),
            ).fetchall()
            category_rows = conn.execute(
                """
                SELECT c.id, c.preset_id, c.name, c.color
                FROM categories c JOIN presets p ON p.id = c.preset_id
                WHERE p.user_id = ?
                ORDER BY c.preset_id, c.position
                """,
                (self.user_id,),
            ).fetchall()
            item_rows = conn.execute(
                """
                SELECT i.id, i.category_id, i.name, i.unit, i.increment_step
                FROM items i
                JOIN categories c ON c.id = i.category_id
                JOIN presets p ON p.id = c.preset_id
                WHERE p.user_id = ?
                ORDER BY i.category_id, i.position
                """,
                (self.user_id,),
            ).fetchall()

        items_by_category: dict[str, list[Item]] = {}
        for row in item_rows:
            items_by_category.setdefault(row["category_id"], []).append(self._item_from_row(row))

        categories_by_preset: dict[str, list[Category]] = {}
        for row in category_rows:
            categories_by_preset.setdefault(row["preset_id"], []).append(
                Category(
                    id=row["id"],
                    name=row["name"],
                    items=tuple(items_by_category.get(row["id"], [])),
                    color=row["color"],
                )
            )

        return [
            Preset(id=row["id"], name=row["name"], categories=tuple(categories_by_preset.get(row["id"], [])))
            for row in preset_rows
        ]

    async def create_preset(self, name: str) -> Preset:
        return await self._run("create preset", self._create_preset, name)

    def _create_preset(self, name: str) -> Preset:
        preset_id = _new_id("preset")
        with closing(self._connect()) as conn, conn:
            conn.execute(
                "INSERT INTO presets (id, user_id, name, created_at) VALUES (?, ?, ?, ?)",
                (preset_id, self.user_id, name, _utc_now_iso()),
            )
        log.info("preset created id=%s", preset_id)
        return Preset(id=preset_id, name=name)

    async def rename_preset(self, preset_id: str, name: str) -> Preset:
        return await self._run("rename preset", self._rename_preset, preset_id, name)

    def _rename_preset(self, preset_id: str, name: str) -> Preset:
        with closing(self._connect()) as conn, conn:
            cur = conn.execute(
                "UPDATE presets SET name = ? WHERE id = ? AND user_id = ?",
                (name, preset_id, self.user_id),
            )
        if cur.rowcount == 0:
            raise RemoteError(f"Preset {preset_id} no longer exists")
        return Preset(id=preset_id, name=name)

    async def delete_preset(self, preset_id: str) -> bool:
        return await self._run("delete preset", self._delete_preset, preset_id)

    def _delete_preset(self, preset_id: str) -> bool:
        with closing(self._connect()) as conn, conn:
            cur = conn.execute(
                "DELETE FROM presets WHERE id = ? AND user_id = ?",
                (preset_id, self.user_id),
            )
        return cur.rowcount > 0

    # -- categories and items ---------------------------------------------

    async def create_category(self, preset_id: str, name: str) -> Category:
        return await self._run("create category", self._create_category, preset_id, name)

    def _create_category(self, preset_id: str, name: str) -> Category:
        category_id = _new_id("cat")
        with closing(self._connect()) as conn, conn:
            owner = conn.execute(
                "SELECT 1 FROM presets WHERE id = ? AND user_id = ?",
                (preset_id, self.user_id),
            ).fetchone()
            if owner is None:
                raise RemoteError(f"Preset {preset_id} no longer exists")
            position = conn.execute(
                "SELECT COALESCE(MAX(position), -1) + 1 FROM categories WHERE preset_id = ?",
                (preset_id,),
            ).fetchone()[0]
            conn.execute(
                "INSERT INTO categories (id, preset_id, position, name) VALUES (?, ?, ?, ?)",
                (category_id, preset_id, position, name),
            )
        return Category(id=category_id, name=name)

    async def create_item(self, category_id: str, name: str, unit: str, increment_step: float) -> Item:
        return await self._run("create item", self._create_item, category_id, name, unit, increment_step)

    def _create_item(self, category_id: str, name: str, unit: str, increment_step: float) -> Item:
        item_id = _new_id("item")
        with closing(self._connect()) as conn, conn:
            owner = conn.execute(
                """
                SELECT 1 FROM categories c JOIN presets p ON p.id = c.preset_id
                WHERE c.id = ? AND p.user_id = ?
                """,
                (category_id, self.user_id),
            ).fetchone()
            if owner is None:
                raise RemoteError(f"Category {category_id} no longer exists")
            position = conn.execute(
                "SELECT COALESCE(MAX(position), -1) + 1 FROM items WHERE category_id = ?",
                (category_id,),
            ).fetchone()[0]
            conn.execute(
                """
                INSERT INTO items (id, category_id, position, name, unit, increment_step)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (item_id, category_id, position, name, unit, float(increment_step)),
            )
        return Item(id=item_id, name=name, unit=unit, increment_step=increment_step)

    async def delete_item(self, item_id: str) -> bool:
        return await self._run("delete item", self._delete_item, item_id)

    def _delete_item(self, item_id: str) -> bool:
        with closing(self._connect()) as conn, conn:
            cur = conn.execute(
                """
                DELETE FROM items WHERE id = ? AND category_id IN (
                    SELECT c.id FROM categories c JOIN presets p ON p.id = c.preset_id
                    WHERE p.user_id = ?
                )
                """,
                (item_id, self.user_id),
            )
        return cur.rowcount > 0

    @staticmethod
    def _item_from_row(row: sqlite3.Row) -> Item:
        return Item(
            id=row["id"],
            name=row["name"],
            unit=row["unit"] or "",
            increment_step=coerce_step(row["increment_step"]),
        )
