"""Leaderboard ordering, pagination and per-player rank."""

from __future__ import annotations

import math
from typing import Any

from .models import LeaderboardEntry, LeaderboardPage, Pagination, PlayerRank
from .store import LeaderboardStore
from .validation import DEFAULT_LIMIT, DEFAULT_PAGE, parse_positive_int


def page_window(page: int, limit: int) -> tuple[int, int]:
    """Return ``(skip, limit)`` for a 1-based page."""
    return (page - 1) * limit, limit


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_scores=total,
        has_next=page * limit < total,
        has_prev=page > 1,
    )


def get_leaderboard(store: LeaderboardStore, page: Any = None, limit: Any = None) -> LeaderboardPage:
    page_number = parse_positive_int(page, DEFAULT_PAGE)
    page_size = parse_positive_int(limit, DEFAULT_LIMIT)
    skip, page_size = page_window(page_number, page_size)

    rows = store.list_ranked_scores(skip=skip, limit=page_size)
    entries = [
        LeaderboardEntry(
            rank=skip + position + 1,
            name=row.name,
            email=row.email,
            moves=row.moves,
            completed_at=row.completed_at,
        )
        for position, row in enumerate(rows)
    ]
    total = store.count_scores()
    return LeaderboardPage(entries=entries, pagination=build_pagination(page_number, page_size, total))


def get_player_rank(store: LeaderboardStore, player_id: str) -> PlayerRank:
    record = store.get_score(player_id)
    if record is None:
        return PlayerRank(has_score=False)
    better = store.count_better_scores(moves=record.moves, completed_at=record.completed_at)
    return PlayerRank(
        has_score=True,
        moves=record.moves,
        completed_at=record.completed_at,
        rank=better + 1,
    )
