from datetime import datetime, timezone

from slidepuzzle.backend.stats import get_stats, round_half_up
from slidepuzzle.backend.store import InMemoryLeaderboardStore

T0 = datetime(2024, 3, 15, tzinfo=timezone.utc)


def test_stats_default_to_zero_without_data() -> None:
    stats = get_stats(InMemoryLeaderboardStore())

    assert stats.to_dict() == {
        "totalUsers": 0,
        "totalScores": 0,
        "averageMoves": 0.0,
        "bestScore": 0,
        "worstScore": 0,
        "completionRate": 0,
    }


def test_stats_aggregate_scores_and_completion_rate() -> None:
    store = InMemoryLeaderboardStore()
    players = [store.create_player(name=f"Player {n}", email=f"cs22b{n:04d}@iiitdm.ac.in") for n in range(1, 4)]
    store.upsert_best_score(players[0].id, 12, T0)
    store.upsert_best_score(players[1].id, 15, T0)

    stats = get_stats(store)

    assert stats.total_users == 3
    assert stats.total_scores == 2
    assert stats.average_moves == 13.5
    assert stats.best_score == 12
    assert stats.worst_score == 15
    assert stats.completion_rate == 67


def test_average_rounds_half_up_to_one_decimal() -> None:
    store = InMemoryLeaderboardStore()
    moves = [10, 11, 11, 11]
    for n, value in enumerate(moves, start=1):
        player = store.create_player(name=f"Player {n}", email=f"cs22b{n:04d}@iiitdm.ac.in")
        store.upsert_best_score(player.id, value, T0)

    stats = get_stats(store)

    assert stats.average_moves == 10.8
    assert stats.completion_rate == 100


def test_round_half_up() -> None:
    assert round_half_up(12.25, 1) == 12.3
    assert round_half_up(0.5) == 1.0
    assert round_half_up(2.5) == 3.0
