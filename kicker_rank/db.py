"""
Path-addressed key-value stores backing the ledger.

Values are JSON documents stored at slash-separated paths such as
``users/<id>`` or ``matches/<id>``. Reading a path that holds no value
returns every value below it as a nested dict keyed by path segment.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

import aiosqlite

from .errors import StoreFailure
from .logging_config import get_logger

log = get_logger(__name__)


def _norm(path: str) -> str:
    return "/".join(seg for seg in path.split("/") if seg)


def _nest(rows: list[tuple[str, str]], prefix: str) -> Optional[dict[str, Any]]:
    """Build a nested dict from (path, json) rows lying under ``prefix``."""
    if not rows:
        return None
    tree: dict[str, Any] = {}
    cut = len(prefix) + 1 if prefix else 0
    for path, raw in rows:
        *parents, leaf = path[cut:].split("/")
        node = tree
        for seg in parents:
            node = node.setdefault(seg, {})
        node[leaf] = json.loads(raw)
    return tree


class KeyValueStore:
    """Interface of the remote mapping.

    ``atomic`` is True when ``write_many`` applies all of its writes or none.
    The base ``write_many`` writes one path at a time and is not atomic.
    """

    atomic = False

    async def read_subtree(self, path: str) -> Any:
        raise NotImplementedError

    async def write(self, path: str, value: Any) -> None:
        raise NotImplementedError

    async def write_many(self, writes: Mapping[str, Any]) -> None:
        for path, value in writes.items():
            await self.write(path, value)


class MemoryStore(KeyValueStore):
    """In-process store. Values are kept as JSON text so callers never share state with it."""

    atomic = True

    def __init__(self) -> None:
        self._nodes: dict[str, str] = {}

    def _under(self, path: str) -> list[str]:
        prefix = path + "/" if path else ""
        return [p for p in self._nodes if p.startswith(prefix)]

    def _apply(self, path: str, encoded: Optional[str]) -> None:
        for child in self._under(path):
            del self._nodes[child]
        if encoded is None:
            self._nodes.pop(path, None)
        else:
            self._nodes[path] = encoded

    async def read_subtree(self, path: str) -> Any:
        path = _norm(path)
        if path in self._nodes:
            return json.loads(self._nodes[path])
        return _nest([(p, self._nodes[p]) for p in self._under(path)], path)

    async def write(self, path: str, value: Any) -> None:
        path = _norm(path)
        self._apply(path, None if value is None else json.dumps(value))
        log.debug("memory write path=%s delete=%s", path, value is None)

    async def write_many(self, writes: Mapping[str, Any]) -> None:
        # encode everything first so a bad value leaves the store untouched
        staged = [(_norm(p), None if v is None else json.dumps(v)) for p, v in writes.items()]
        for path, encoded in staged:
            self._apply(path, encoded)
        log.debug("memory batch write paths=%s", [p for p, _ in staged])


class SqliteStore(KeyValueStore):
    """Store persisted in a single SQLite table through aiosqlite.

    Children are enumerated in insertion order; overwriting a node keeps its
    position.
    """

    atomic = True

    def __init__(self, db_path: str = "kicker_rank.sqlite") -> None:
        self.db_path = db_path

    async def init(self) -> None:
        """Create the nodes table if missing."""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS nodes (
                        path TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
                    )
                    """
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise StoreFailure(f"cannot initialize store at {self.db_path}: {e}") from e
        log.debug("Initialized store at %s", self.db_path)

    async def read_subtree(self, path: str) -> Any:
        path = _norm(path)
        prefix = path + "/" if path else ""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                async with db.execute("SELECT value FROM nodes WHERE path = ?", (path,)) as cursor:
                    row = await cursor.fetchone()
                    if row:
                        return json.loads(row[0])
                async with db.execute(
                    "SELECT path, value FROM nodes WHERE substr(path, 1, ?) = ? ORDER BY rowid",
                    (len(prefix), prefix),
                ) as cursor:
                    rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StoreFailure(f"read {path!r} failed: {e}") from e
        log.debug("Read subtree path=%s rows=%s", path, len(rows))
        return _nest([(p, v) for p, v in rows], path)

    async def _execute_write(self, db: aiosqlite.Connection, path: str, value: Any) -> None:
        prefix = path + "/"
        await db.execute(
            "DELETE FROM nodes WHERE substr(path, 1, ?) = ?", (len(prefix), prefix)
        )
        if value is None:
            await db.execute("DELETE FROM nodes WHERE path = ?", (path,))
            return
        await db.execute(
            """
            INSERT INTO nodes (path, value) VALUES (?, ?)
            ON CONFLICT(path) DO UPDATE SET
                value = excluded.value,
                updated_at = strftime('%Y-%m-%dT%H:%M:%fZ','now')
            """,
            (path, json.dumps(value)),
        )

    async def write(self, path: str, value: Any) -> None:
        await self.write_many({path: value})

    async def write_many(self, writes: Mapping[str, Any]) -> None:
        paths = [_norm(p) for p in writes]
        try:
            async with aiosqlite.connect(self.db_path) as db:
                try:
                    for path, value in zip(paths, writes.values()):
                        await self._execute_write(db, path, value)
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise
        except aiosqlite.Error as e:
            raise StoreFailure(f"write {paths} failed: {e}") from e
        log.debug("Committed writes paths=%s", paths)
