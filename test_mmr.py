import pytest

from kicker_rank.mmr import (
    expectation,
    outcome_scores,
    rating_change,
    round_half_away,
    team_rating,
    update,
)

PAIRS = [(1000, 1000), (1000, 1100), (1234, 987), (0, 3000), (1500, 1499), (-20, 40.5)]


@pytest.mark.parametrize("ra, rb", PAIRS)
def test_expectations_sum_to_one(ra, rb):
    e_a, e_b = expectation(ra, rb)
    assert e_a + e_b == 1


@pytest.mark.parametrize("rating", [0, 1000, 1873.5])
def test_equal_ratings_are_even(rating):
    assert expectation(rating, rating) == (0.5, 0.5)


@pytest.mark.parametrize("ra, rb", PAIRS)
def test_expectation_is_symmetric(ra, rb):
    assert expectation(ra, rb)[0] == pytest.approx(expectation(rb, ra)[1])


def test_expectation_saturates_at_400_points():
    assert expectation(1000, 1500) == expectation(1000, 1400)
    assert expectation(1500, 1000) == expectation(1400, 1000)
    assert expectation(1000, 1400)[0] == pytest.approx(1 / 11)


def test_stronger_side_is_favoured():
    e_a, e_b = expectation(1100, 1000)
    assert e_a == pytest.approx(0.640065, abs=1e-6)
    assert e_a > e_b


def test_rating_change_fixed_points():
    assert update(1000, 1, 0.5, k=30) == 1015
    assert update(1000, 0, 0.5, k=30) == 985
    assert update(1000, 0.5, 0.5, k=30) == 1000
    assert rating_change(1000, 1, 0.5) == 1015


def test_rating_change_rounds_half_away_from_zero():
    assert rating_change(1000, 1, 0.25, k=2) == 1002
    assert round_half_away(2.5) == 3
    assert round_half_away(1014.5) == 1015
    assert round_half_away(-0.5) == -1
    assert round_half_away(1014.4) == 1014


def test_team_rating_is_average():
    assert team_rating([1200, 1400]) == 1300
    assert team_rating([1001, 1000]) == 1000.5


def test_outcome_scores():
    assert outcome_scores(10, 5) == (1.0, 0.0)
    assert outcome_scores(3, 10) == (0.0, 1.0)
    assert outcome_scores(7, 7) == (0.5, 0.5)
