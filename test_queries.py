import pytest

from conftest import run
from kicker_rank.models import Match, Snapshot
from kicker_rank.queries import QueryService


def _match(match_id, date, ratings=(1000, 1000, 1000, 1000)):
    names = ("Ann", "Bob", "Cid", "Dan")
    snaps = [Snapshot(id=n.lower(), name=n, rating=r) for n, r in zip(names, ratings)]
    return Match(
        id=match_id,
        date=date,
        teams=((snaps[0], snaps[1]), (snaps[2], snaps[3])),
        parent=((None, None), (None, None)),
        result=(10, 5),
    )


def test_ranked_users_by_rating_ties_keep_order(store, registry):
    for name, rating in [("Ann", 1000), ("Bob", 1200), ("Cid", 1000), ("Dan", 900), ("Eve", 1000)]:
        run(registry.register(name, rating))
    ranked = run(QueryService(store).ranked_users())
    assert [u.name for u in ranked] == ["Bob", "Ann", "Cid", "Eve", "Dan"]


def test_ranked_users_after_matches(store, ledger, players):
    ann, bob, cid, dan = players
    run(ledger.record_match([cid, dan], [ann, bob], 10, 5))
    ranked = run(QueryService(store).ranked_users())
    assert [u.name for u in ranked] == ["Cid", "Dan", "Ann", "Bob"]


def test_ordered_matches_oldest_first(store):
    for m in (
        _match("m2", "2026-01-02T00:00:00.000000Z"),
        _match("m3", "2026-01-03T00:00:00.000000Z"),
        _match("m1", "2026-01-01T00:00:00.000000Z"),
    ):
        run(store.write(f"matches/{m.id}", m.to_dict()))
    ordered = run(QueryService(store).ordered_matches())
    assert [m.id for m in ordered] == ["m1", "m2", "m3"]


def test_ordered_matches_of_recorded_sequence(store, ledger, players):
    ann, bob, cid, dan = players
    recorded = [run(ledger.record_match([ann, bob], [cid, dan], 10, i)) for i in range(4)]
    ordered = run(QueryService(store).ordered_matches())
    assert [m.id for m in ordered] == [m.id for m in recorded]
    dates = [m.date for m in ordered]
    assert dates == sorted(dates)


def test_render_expectation_uses_snapshot():
    even = _match("m", "2026-01-01T00:00:00.000000Z")
    assert QueryService.render_expectation(even) == (0.5, 0.5)
    lopsided = _match("m", "2026-01-01T00:00:00.000000Z", ratings=(1200, 1000, 1000, 1000))
    e_a, e_b = QueryService.render_expectation(lopsided)
    assert e_a == pytest.approx(0.640065, abs=1e-6)
    assert e_a + e_b == 1


def test_render_expectation_unchanged_by_later_play(store, ledger, players):
    ann, bob, cid, dan = players
    first = run(ledger.record_match([ann, bob], [cid, dan], 10, 5))
    run(ledger.record_match([ann, bob], [cid, dan], 10, 5))
    service = QueryService(store)
    stored = [m for m in run(service.ordered_matches()) if m.id == first.id][0]
    assert service.render_expectation(stored) == (0.5, 0.5)


def test_history_follows_parent_links(store, ledger, registry, players):
    ann, bob, cid, dan = players
    eve = run(registry.register("Eve", 1000))
    m1 = run(ledger.record_match([ann, bob], [cid, dan], 10, 5))
    m2 = run(ledger.record_match([eve, cid], [bob, dan], 10, 5))
    m3 = run(ledger.record_match([ann, eve], [bob, cid], 3, 10))
    service = QueryService(store)
    assert [m.id for m in run(service.history_of("Ann"))] == [m3.id, m1.id]
    assert [m.id for m in run(service.history_of("Bob"))] == [m3.id, m2.id, m1.id]
    assert [m.id for m in run(service.history_of("Eve"))] == [m3.id, m2.id]
    assert run(service.history_of("Nobody")) == []
    dates = [m.date for m in run(service.history_of("Bob"))]
    assert dates == sorted(dates, reverse=True)
