"""Best-score ledger: one record per player, only ever improved."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from .errors import NotFoundError
from .models import ScoreResult
from .store import LeaderboardStore
from .validation import validate_moves

logger = logging.getLogger(__name__)

MESSAGE_CREATED = "Score submitted successfully!"
MESSAGE_IMPROVED = "New best score updated!"
MESSAGE_NOT_BEST = "Score submitted, but not your best"


def submit_score(
    store: LeaderboardStore,
    player_id: str,
    moves: Any,
    now: datetime | None = None,
) -> ScoreResult:
    """Record ``moves`` for the player if it beats the stored best.

    A worse or equal submission leaves the record untouched and returns it
    with ``improved=False``.
    """
    clean_moves = validate_moves(moves).unwrap()
    if store.get_player(player_id) is None:
        raise NotFoundError("User not found")

    completed_at = now or datetime.now(timezone.utc)
    result = store.upsert_best_score(player_id=player_id, moves=clean_moves, completed_at=completed_at)
    if result.created:
        logger.info("First score for player %s: %d moves", player_id, result.moves)
    elif result.improved:
        logger.info("New best score for player %s: %d moves", player_id, result.moves)
    return result


def result_message(result: ScoreResult) -> str:
    if result.created:
        return MESSAGE_CREATED
    if result.improved:
        return MESSAGE_IMPROVED
    return MESSAGE_NOT_BEST
