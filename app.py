# app.py
# Console front-end for the kicker rating ledger: register players, record 2v2 matches, list both.

from __future__ import annotations

import asyncio
import sys
from typing import Callable, Optional

import fmt
from kicker_rank import MatchLedger, QueryService, UserRegistry, ValidationError
from kicker_rank.config import Settings
from kicker_rank.db import KeyValueStore, MemoryStore, SqliteStore
from kicker_rank.logging_config import get_logger, setup_logging
from kicker_rank.models import User

log = get_logger("kicker_rank.app")

PLAYER_SLOTS = ("Team A Player 1", "Team A Player 2", "Team B Player 1", "Team B Player 2")


async def open_store(settings: Settings) -> KeyValueStore:
    if settings.ephemeral_db:
        log.info("Using in-memory store; nothing will be saved")
        return MemoryStore()
    store = SqliteStore(settings.database_path)
    await store.init()
    return store


class Console:
    """Menu loop. ``ask`` reads one line of input, ``out`` prints one block of text."""

    def __init__(
        self,
        store: KeyValueStore,
        settings: Settings,
        ask: Callable[[str], str] = input,
        out: Callable[[str], None] = print,
    ) -> None:
        self.settings = settings
        self.registry = UserRegistry(store)
        self.ledger = MatchLedger(store, self.registry, k=settings.k_factor)
        self.queries = QueryService(store)
        self._ask = ask
        self.out = out
        self.tasks = {
            "add user": self.add_user,
            "list user": self.list_users,
            "add match": self.add_match,
            "list matches": self.list_matches,
            "exit": None,
        }

    def ask(self, message: str) -> str:
        """Prompt for a line; end of input reads as an empty answer."""
        try:
            return self._ask(message).strip()
        except EOFError:
            return ""

    def ask_int(self, message: str, default: int) -> int:
        while True:
            raw = self.ask(f"{message} [{default}]: ")
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                self.out(f"'{raw}' is not a whole number.")

    def choose_task(self) -> Optional[str]:
        names = list(self.tasks)
        while True:
            answer = self.ask(f"Do ({', '.join(names)}): ").lower()
            if not answer:
                return None
            hits = [n for n in names if n.startswith(answer)]
            if answer in names:
                return answer
            if len(hits) == 1:
                return hits[0]
            self.out(f"Unknown task '{answer}'.")

    async def loop(self) -> int:
        while True:
            task = self.choose_task()
            if task is None or task == "exit":
                self.out("Bye")
                return 0
            await self.tasks[task]()

    async def add_user(self) -> None:
        while True:
            name = self.ask("Name: ")
            if not name:
                return
            rating = self.ask_int("Initial ELO", self.settings.default_rating)
            try:
                user = await self.registry.register(name, rating)
            except ValidationError as e:
                self.out(str(e))
                continue
            self.out(f"Added {user.name} ({user.rating}).")
            return

    async def list_users(self) -> None:
        users = await self.queries.ranked_users()
        rows = [[str(i), str(u.rating), u.name] for i, u in enumerate(users, start=1)]
        self.out(fmt.mono_table(rows, headers=["#", "ELO", "Name"], align="rrl"))

    def pick_player(self, slot: str, by_name: dict[str, User], taken: list[User]) -> Optional[User]:
        while True:
            name = self.ask(f"{slot}: ")
            if not name:
                return None
            user = by_name.get(name)
            if user is None:
                self.out(f"No user named '{name}'.")
            elif any(t.id == user.id for t in taken):
                self.out(f"'{name}' is already playing in this match.")
            else:
                return user

    async def add_match(self) -> None:
        by_name = {u.name: u for u in await self.registry.list()}
        picked: list[User] = []
        for slot in PLAYER_SLOTS:
            user = self.pick_player(slot, by_name, picked)
            if user is None:
                return
            picked.append(user)

        while True:
            result_a = self.ask_int("Result Team A", 0)
            result_b = self.ask_int("Result Team B", 0)
            try:
                match = await self.ledger.record_match(picked[:2], picked[2:], result_a, result_b)
            except ValidationError as e:
                self.out(str(e))
                continue
            break

        lines = [f"Match {match.id} recorded at {match.date}."]
        for before in match.participants:
            after = await self.registry.get(before.id)
            lines.append(f"  {before.name}: {before.rating} -> {after.rating}")
        self.out("\n".join(lines))

    async def list_matches(self) -> None:
        rows = []
        for match in await self.queries.ordered_matches():
            e_a, e_b = self.queries.render_expectation(match)
            rows.append([
                match.date,
                fmt.team_label(match.teams[0]),
                fmt.prob(e_a),
                fmt.score(match.result),
                fmt.prob(e_b),
                fmt.team_label(match.teams[1]),
            ])
        self.out(fmt.mono_table(rows, headers=["Date", "Team A", "", "Result", "", "Team B"], align="lrrlll"))


async def main(
    ask: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStore] = None,
) -> int:
    """Run the menu until exit. Returns the process exit status."""
    try:
        settings = settings or Settings.from_env()
        if store is None:
            store = await open_store(settings)
        return await Console(store, settings, ask=ask, out=out).loop()
    except Exception:
        log.exception("Fatal error")
        return 1


def run() -> None:
    setup_logging()
    sys.exit(asyncio.run(main()))


# --- Entrypoint ---
if __name__ == "__main__":
    run()
