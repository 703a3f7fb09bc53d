"""
Match recording: validation, rating updates, provenance links and the
commit of the match together with the four updated players.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from . import mmr
from .db import KeyValueStore
from .errors import (
    DuplicateParticipant,
    InvalidResult,
    NotFound,
    PartialCommit,
    StoreFailure,
)
from .logging_config import get_logger
from .models import Match, Snapshot, User
from .provenance import ProvenanceIndex, latest_match_of
from .registry import UserRegistry

log = get_logger(__name__)

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
PENDING = "pending"


def format_date(instant: datetime) -> str:
    """Fixed-width UTC text form; sorts the same as the instants do."""
    return instant.astimezone(timezone.utc).strftime(DATE_FORMAT)


def parse_date(text: str) -> datetime:
    return datetime.strptime(text, DATE_FORMAT).replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_result(result_a, result_b) -> None:
    for value in (result_a, result_b):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidResult(result_a, result_b)


def _check_distinct(players: Sequence[User]) -> None:
    seen: set[str] = set()
    for player in players:
        if player.id in seen:
            raise DuplicateParticipant(player.id)
        seen.add(player.id)


class MatchLedger:
    """The only writer of matches and of rating changes."""

    def __init__(
        self,
        store: KeyValueStore,
        registry: UserRegistry | None = None,
        provenance: ProvenanceIndex | None = None,
        k: int = mmr.K_FACTOR,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.registry = registry or UserRegistry(store)
        self.provenance = provenance or ProvenanceIndex(store)
        self.k = k
        self.clock = clock

    async def record_match(
        self,
        team_a: Sequence[User],
        team_b: Sequence[User],
        result_a: int,
        result_b: int,
    ) -> Match:
        """Record a 2v2 match and apply its rating changes.

        Ratings are read once from the registry when the call starts; the
        users passed in only identify the players. Validation errors are
        raised before anything is read or written.
        """
        if len(team_a) != 2 or len(team_b) != 2:
            raise ValueError("each team needs exactly two players")
        _check_distinct([*team_a, *team_b])
        _check_result(result_a, result_b)

        current = {user.id: user for user in await self.registry.list()}
        for player in (*team_a, *team_b):
            if player.id not in current:
                raise NotFound(player.id)
        a = [current[p.id] for p in team_a]
        b = [current[p.id] for p in team_b]

        # snapshot before any rating is touched
        teams = (
            (Snapshot.of(a[0]), Snapshot.of(a[1])),
            (Snapshot.of(b[0]), Snapshot.of(b[1])),
        )

        history = await self.provenance.matches.list_all()
        parents = tuple(
            tuple(self._parent_id(history, player.name) for player in team) for team in teams
        )

        expected_a, expected_b = mmr.expectation(
            mmr.team_rating([p.rating for p in a]),
            mmr.team_rating([p.rating for p in b]),
        )
        score_a, score_b = mmr.outcome_scores(result_a, result_b)
        updated = [
            User(p.id, p.name, mmr.rating_change(p.rating, score_a, expected_a, self.k)) for p in a
        ] + [
            User(p.id, p.name, mmr.rating_change(p.rating, score_b, expected_b, self.k)) for p in b
        ]

        match = Match(
            id=str(uuid.uuid4()),
            date=self._next_date(history),
            teams=teams,
            parent=parents,  # type: ignore[arg-type]
            result=(result_a, result_b),
        )

        writes = {self.provenance.matches.path(match.id): match.to_dict()}
        for user in updated:
            writes[self.registry.users.path(user.id)] = user.to_dict()
        await self._commit(match, writes)

        log.info(
            "Recorded match %s: %s %s:%s %s (E=%.2f/%.2f)",
            match.id,
            "/".join(p.name for p in teams[0]),
            result_a,
            result_b,
            "/".join(p.name for p in teams[1]),
            expected_a,
            expected_b,
        )
        return match

    @staticmethod
    def _parent_id(history: list[Match], name: str) -> str | None:
        previous = latest_match_of(history, name)
        return previous.id if previous else None

    def _next_date(self, history: list[Match]) -> str:
        """Clock time, nudged past the newest stored match if the clock lags it."""
        date = format_date(self.clock())
        newest = max((m.date for m in history), default=None)
        if newest is not None and date <= newest:
            date = format_date(parse_date(newest) + timedelta(microseconds=1))
        return date

    async def _commit(self, match: Match, writes: dict) -> None:
        if self.store.atomic:
            try:
                await self.store.write_many(writes)
            except StoreFailure:
                log.error("Commit of match %s failed; nothing was written", match.id)
                raise
            except Exception as e:
                log.error("Commit of match %s failed; nothing was written", match.id)
                raise StoreFailure(f"commit of match {match.id} failed: {e}") from e
            return
        await self._staged_commit(match, writes)

    async def _staged_commit(self, match: Match, writes: dict) -> None:
        """Write one path at a time behind a pending marker.

        The marker is removed only after every write landed, so an
        interrupted commit stays visible through ``pending_matches``.
        """
        marker = f"{PENDING}/{match.id}"
        written: list[str] = []
        try:
            await self.store.write(marker, {"id": match.id, "date": match.date, "paths": list(writes)})
            written.append(marker)
            for path, value in writes.items():
                await self.store.write(path, value)
                written.append(path)
            await self.store.write(marker, None)
        except Exception as e:
            if not written:
                log.error("Commit of match %s failed; nothing was written", match.id)
                if isinstance(e, StoreFailure):
                    raise
                raise StoreFailure(f"commit of match {match.id} failed: {e}") from e
            log.error("Match %s partially committed: %s", match.id, written)
            raise PartialCommit(match.id, written, e) from e

    async def pending_matches(self) -> list[str]:
        """Ids of matches whose staged commit never finished."""
        raw = await self.store.read_subtree(PENDING) or {}
        return list(raw)
