"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .logging_config import get_logger

log = get_logger(__name__)

DEFAULT_K_FACTOR = 30
DEFAULT_RATING = 1000


def _truthy(value: str | None) -> bool:
    return (value or "0").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    database_path: str
    ephemeral_db: bool
    k_factor: int
    default_rating: int

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        test_mode = _truthy(os.getenv("TEST_MODE"))
        database_path = os.getenv(
            "DATABASE_PATH",
            "./test_kicker_rank.sqlite" if test_mode else "./kicker_rank.sqlite",
        )

        k_factor = int(os.getenv("K_FACTOR", str(DEFAULT_K_FACTOR)))

        # Initial rating offered at registration - must not be negative
        try:
            default_rating = int(os.getenv("DEFAULT_RATING", str(DEFAULT_RATING)))
            if default_rating < 0:
                log.warning("DEFAULT_RATING must not be negative, using default %s", DEFAULT_RATING)
                default_rating = DEFAULT_RATING
        except ValueError:
            log.warning("Invalid DEFAULT_RATING value, using default %s", DEFAULT_RATING)
            default_rating = DEFAULT_RATING

        return cls(
            database_path=database_path,
            ephemeral_db=_truthy(os.getenv("EPHEMERAL_DB")),
            k_factor=k_factor,
            default_rating=default_rating,
        )
