import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from kicker_rank.db import MemoryStore
from kicker_rank.errors import StoreFailure
from kicker_rank.ledger import MatchLedger
from kicker_rank.registry import UserRegistry


class TickingClock:
    """Returns an instant one second later on every call."""

    def __init__(self, start=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


class FlakyStore(MemoryStore):
    """Memory store that starts refusing writes once armed."""

    def __init__(self, atomic=True):
        super().__init__()
        self.atomic = atomic
        self.writes_left = None

    def arm(self, writes_left):
        self.writes_left = writes_left

    async def write(self, path, value):
        if self.writes_left is not None:
            if self.writes_left == 0:
                raise StoreFailure(f"write {path} refused")
            self.writes_left -= 1
        await super().write(path, value)

    async def write_many(self, writes):
        if self.writes_left is not None:
            raise StoreFailure("batch refused")
        await super().write_many(writes)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def registry(store):
    return UserRegistry(store)


@pytest.fixture
def ledger(store, registry, clock):
    return MatchLedger(store, registry, clock=clock)


@pytest.fixture
def players(registry):
    """Four registered players rated 1000: Ann, Bob, Cid, Dan."""

    async def make():
        return [await registry.register(name, 1000) for name in ("Ann", "Bob", "Cid", "Dan")]

    return run(make())
