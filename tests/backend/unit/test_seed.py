from slidepuzzle.backend.ranking import get_leaderboard
from slidepuzzle.backend.seed import SAMPLE_PLAYERS, seed_store
from slidepuzzle.backend.store import InMemoryLeaderboardStore


def test_seed_store_adds_sample_players_with_scores() -> None:
    store = InMemoryLeaderboardStore()

    added = seed_store(store)

    assert added == len(SAMPLE_PLAYERS)
    assert store.count_players() == 5
    page = get_leaderboard(store)
    assert [entry.moves for entry in page.entries] == [12, 15, 18, 20, 22]
    assert page.entries[0].name == "Alice Kumar"


def test_seed_store_is_idempotent() -> None:
    store = InMemoryLeaderboardStore()
    seed_store(store)

    added = seed_store(store)

    assert added == 0
    assert store.count_players() == 5
    assert store.count_scores() == 5
