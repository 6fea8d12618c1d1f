import threading
from datetime import datetime, timedelta, timezone

import pytest

from slidepuzzle.backend.errors import NotFoundError, ValidationError
from slidepuzzle.backend.ledger import result_message, submit_score
from slidepuzzle.backend.store import InMemoryLeaderboardStore

T0 = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def _store_with_player():
    store = InMemoryLeaderboardStore()
    player = store.create_player(name="Alice", email="cs22b1001@iiitdm.ac.in")
    return store, player.id


def test_first_submission_creates_record() -> None:
    store, player_id = _store_with_player()

    result = submit_score(store, player_id, 10, now=T0)

    assert result.moves == 10
    assert result.completed_at == T0
    assert result.improved is True
    assert result.created is True
    assert result_message(result) == "Score submitted successfully!"
    assert store.get_score(player_id).moves == 10


def test_worse_submission_keeps_existing_record() -> None:
    store, player_id = _store_with_player()
    submit_score(store, player_id, 10, now=T0)

    result = submit_score(store, player_id, 15, now=T0 + timedelta(hours=1))

    assert result.improved is False
    assert result.moves == 10
    assert result.completed_at == T0
    assert result_message(result) == "Score submitted, but not your best"
    assert store.get_score(player_id).moves == 10
    assert store.count_scores() == 1


def test_equal_submission_is_not_an_improvement() -> None:
    store, player_id = _store_with_player()
    submit_score(store, player_id, 10, now=T0)

    result = submit_score(store, player_id, 10, now=T0 + timedelta(hours=1))

    assert result.improved is False
    assert store.get_score(player_id).completed_at == T0


def test_better_submission_updates_record_in_place() -> None:
    store, player_id = _store_with_player()
    submit_score(store, player_id, 10, now=T0)
    later = T0 + timedelta(days=1)

    result = submit_score(store, player_id, 5, now=later)

    assert result.improved is True
    assert result.created is False
    assert result_message(result) == "New best score updated!"
    record = store.get_score(player_id)
    assert record.moves == 5
    assert record.completed_at == later
    assert store.count_scores() == 1


@pytest.mark.parametrize("moves", [0, -1, 2.5, "12", None])
def test_invalid_moves_are_rejected(moves) -> None:
    store, player_id = _store_with_player()

    with pytest.raises(ValidationError):
        submit_score(store, player_id, moves)

    assert store.count_scores() == 0


def test_unknown_player_is_not_found() -> None:
    store = InMemoryLeaderboardStore()

    with pytest.raises(NotFoundError):
        submit_score(store, "missing", 10)


def test_concurrent_submissions_keep_one_best_record() -> None:
    store, player_id = _store_with_player()
    results = []

    def submit(moves: int) -> None:
        results.append(submit_score(store, player_id, moves))

    threads = [threading.Thread(target=submit, args=(moves,)) for moves in range(30, 10, -1)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.count_scores() == 1
    assert store.get_score(player_id).moves == 11
    assert sum(1 for result in results if result.created) == 1
