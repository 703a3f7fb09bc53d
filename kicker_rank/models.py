"""
Data models for the kicker rating ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

Team = tuple["Snapshot", "Snapshot"]
Parents = tuple[tuple[Optional[str], Optional[str]], tuple[Optional[str], Optional[str]]]


@dataclass
class User:
    id: str
    name: str
    rating: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "rating": self.rating}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(id=data["id"], name=data["name"], rating=data["rating"])


@dataclass(frozen=True)
class Snapshot:
    """A player's name and rating as they stood entering a match."""

    id: str
    name: str
    rating: int

    @classmethod
    def of(cls, user: User) -> "Snapshot":
        return cls(id=user.id, name=user.name, rating=user.rating)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "rating": self.rating}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Snapshot":
        return cls(id=data["id"], name=data["name"], rating=data["rating"])


@dataclass(frozen=True)
class Match:
    id: str
    date: str
    teams: tuple[Team, Team]
    parent: Parents
    result: tuple[int, int]

    @property
    def participants(self) -> list[Snapshot]:
        return [player for team in self.teams for player in team]

    def involves(self, name: str) -> bool:
        return any(player.name == name for player in self.participants)

    def parent_of(self, name: str) -> Optional[str]:
        """Id of the named player's previous match, or None."""
        for team, parents in zip(self.teams, self.parent):
            for player, parent_id in zip(team, parents):
                if player.name == name:
                    return parent_id
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "teams": [[p.to_dict() for p in team] for team in self.teams],
            "parent": [list(pair) for pair in self.parent],
            "result": list(self.result),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Match":
        teams = tuple(tuple(Snapshot.from_dict(p) for p in team) for team in data["teams"])
        parent = tuple(tuple(pair) for pair in data["parent"])
        return cls(
            id=data["id"],
            date=data["date"],
            teams=teams,  # type: ignore[arg-type]
            parent=parent,  # type: ignore[arg-type]
            result=(data["result"][0], data["result"][1]),
        )

