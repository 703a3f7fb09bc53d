"""Typed access to one collection of the key-value store."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from .db import KeyValueStore

T = TypeVar("T")


class Collection(Generic[T]):
    """Records stored as ``<name>/<id>``.

    ``decode`` turns a stored dict into a record; records are encoded with
    their ``to_dict`` method and keyed by their ``id`` attribute.
    """

    def __init__(self, store: KeyValueStore, name: str, decode: Callable[[dict[str, Any]], T]) -> None:
        self.store = store
        self.name = name
        self.decode = decode

    def path(self, record_id: str) -> str:
        return f"{self.name}/{record_id}"

    async def get(self, record_id: str) -> Optional[T]:
        if not record_id or "/" in record_id:
            return None
        raw = await self.store.read_subtree(self.path(record_id))
        return self.decode(raw) if raw else None

    async def list_all(self) -> list[T]:
        """Every record, in the store's enumeration order."""
        raw = await self.store.read_subtree(self.name) or {}
        return [self.decode(value) for value in raw.values()]

    async def put(self, record: Any) -> None:
        await self.store.write(self.path(record.id), record.to_dict())
