"""Lookup of a player's previous match."""

from __future__ import annotations

from typing import Optional

from .db import KeyValueStore
from .models import Match
from .repository import Collection

MATCHES = "matches"


def latest_match_of(matches: list[Match], name: str) -> Optional[Match]:
    """Most recent match in ``matches`` that ``name`` played in.

    Matches with equal dates resolve to the first one enumerated.
    """
    latest: Optional[Match] = None
    for match in matches:
        if match.involves(name) and (latest is None or match.date > latest.date):
            latest = match
    return latest


class ProvenanceIndex:
    """Scans the whole match history; there is no per-player index."""

    def __init__(self, store: KeyValueStore) -> None:
        self.matches: Collection[Match] = Collection(store, MATCHES, Match.from_dict)

    async def find_latest_match_of(self, name: str) -> Optional[Match]:
        return latest_match_of(await self.matches.list_all(), name)
