"""Exceptions raised by the rating ledger."""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger errors."""


class ValidationError(LedgerError):
    """Rejected input. Raised before anything is read from or written to the store."""


class DuplicateName(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"User '{name}' already exists.")
        self.name = name


class InvalidRating(ValidationError):
    def __init__(self, rating) -> None:
        super().__init__(f"Rating must not be negative (got {rating}).")
        self.rating = rating


class DuplicateParticipant(ValidationError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"Player '{user_id}' appears more than once in the match.")
        self.user_id = user_id


class InvalidResult(ValidationError):
    def __init__(self, result_a, result_b) -> None:
        super().__init__(f"Result must be two non-negative integers (got {result_a}:{result_b}).")
        self.result = (result_a, result_b)


class NotFound(LedgerError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User '{user_id}' not found.")
        self.user_id = user_id


class StoreFailure(LedgerError):
    """A read or write against the store failed."""


class PartialCommit(StoreFailure):
    """A staged match commit failed after some of its writes were applied.

    ``written`` lists the store paths that landed before the failure. The
    pending marker for ``match_id`` stays in the store until reconciled.
    """

    def __init__(self, match_id: str, written: list[str], cause: BaseException) -> None:
        super().__init__(
            f"Match {match_id} partially committed ({len(written)} write(s) applied): {cause}"
        )
        self.match_id = match_id
        self.written = written
