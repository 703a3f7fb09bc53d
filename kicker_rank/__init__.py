"""Kicker Rank core package.

Exports commonly used modules for convenience.
"""

from . import db as db
from . import mmr as mmr
from . import logging_config as logging_config
from .errors import (
    DuplicateName,
    DuplicateParticipant,
    InvalidRating,
    InvalidResult,
    LedgerError,
    NotFound,
    PartialCommit,
    StoreFailure,
    ValidationError,
)
from .ledger import MatchLedger
from .models import Match, Snapshot, User
from .provenance import ProvenanceIndex
from .queries import QueryService
from .registry import UserRegistry

__all__ = [
    "db",
    "mmr",
    "logging_config",
    "User",
    "Snapshot",
    "Match",
    "UserRegistry",
    "ProvenanceIndex",
    "MatchLedger",
    "QueryService",
    "LedgerError",
    "ValidationError",
    "DuplicateName",
    "InvalidRating",
    "DuplicateParticipant",
    "InvalidResult",
    "NotFound",
    "StoreFailure",
    "PartialCommit",
]
