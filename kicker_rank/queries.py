"""Read-only views over players and matches."""

from __future__ import annotations

from . import mmr
from .db import KeyValueStore
from .models import Match, User
from .provenance import ProvenanceIndex, latest_match_of
from .registry import UserRegistry


class QueryService:
    def __init__(self, store: KeyValueStore) -> None:
        self.registry = UserRegistry(store)
        self.provenance = ProvenanceIndex(store)

    async def ranked_users(self) -> list[User]:
        """Players by rating, highest first. Ties keep store order."""
        users = await self.registry.list()
        return sorted(users, key=lambda u: u.rating, reverse=True)

    async def ordered_matches(self) -> list[Match]:
        """Matches oldest first. Equal dates keep store order."""
        matches = await self.provenance.matches.list_all()
        return sorted(matches, key=lambda m: m.date)

    @staticmethod
    def render_expectation(match: Match) -> tuple[float, float]:
        """Expectations recomputed from the ratings snapshotted in the match."""
        team_a, team_b = match.teams
        return mmr.expectation(
            mmr.team_rating([p.rating for p in team_a]),
            mmr.team_rating([p.rating for p in team_b]),
        )

    async def history_of(self, name: str) -> list[Match]:
        """A player's matches, newest first, following the parent links."""
        by_id = {m.id: m for m in await self.provenance.matches.list_all()}
        chain: list[Match] = []
        current = latest_match_of(list(by_id.values()), name)
        while current is not None:
            chain.append(current)
            parent_id = current.parent_of(name)
            current = by_id.get(parent_id) if parent_id else None
        return chain
