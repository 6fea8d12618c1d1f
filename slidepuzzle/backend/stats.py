"""Summary metrics over registered players and their best scores."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .models import GameStats
from .store import LeaderboardStore


def round_half_up(value: float, digits: int = 0) -> float:
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def get_stats(store: LeaderboardStore) -> GameStats:
    total_users = store.count_players()
    summary = store.score_summary()
    completion_rate = 0
    if total_users > 0:
        completion_rate = int(round_half_up(100 * summary.count / total_users))
    return GameStats(
        total_users=total_users,
        total_scores=summary.count,
        average_moves=round_half_up(summary.average_moves, 1),
        best_score=summary.min_moves,
        worst_score=summary.max_moves,
        completion_rate=completion_rate,
    )
