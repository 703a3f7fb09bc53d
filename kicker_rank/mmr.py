"""
MMR (Matchmaking Rating) calculations using the ELO system.
Pure functions for expectations and rating changes in 2v2 matches.
"""

import math

K_FACTOR = 30
MAX_DIFF = 400


def rating_diff(ra: float, rb: float) -> float:
    """Rating gap ``rb - ra`` clamped to +/-400 points."""
    return max(-MAX_DIFF, min(MAX_DIFF, rb - ra))


def expectation(ra: float, rb: float) -> tuple[float, float]:
    """
    Calculate the expected scores of side A and side B.

    The gap is clamped to 400 points, so widening it further does not move
    the result.

    Args:
        ra: Rating of side A
        rb: Rating of side B

    Returns:
        Tuple of (expected_a, expected_b), summing to exactly 1.0
    """
    expected_a = 1 / (1 + math.pow(10, rating_diff(ra, rb) / MAX_DIFF))
    return (expected_a, 1 - expected_a)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (1014.5 -> 1015, -0.5 -> -1)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rating_change(rating: float, score: float, expected: float, k: int = K_FACTOR) -> int:
    """
    Calculate a single player's new rating after a match.

    Args:
        rating: Player's rating before the match
        score: Actual score (1.0 for win, 0.0 for loss, 0.5 for draw)
        expected: Expected score of the player's side
        k: K-factor determining maximum rating change per game

    Returns:
        New rating, rounded half away from zero
    """
    return round_half_away(rating + k * (score - expected))


update = rating_change


def team_rating(ratings: list[float]) -> float:
    """Average rating of a team's players."""
    return sum(ratings) / len(ratings)


def outcome_scores(result_a: int, result_b: int) -> tuple[float, float]:
    """Map a numeric result to (score_a, score_b): 1/0 for win/loss, 0.5 each for a draw."""
    if result_a > result_b:
        score_a = 1.0
    elif result_a < result_b:
        score_a = 0.0
    else:
        score_a = 0.5
    return (score_a, 1 - score_a)
