"""Domain models for players, scores and leaderboard responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

INITIAL_CONFIGURATION: tuple[int, ...] = (3, 6, 4, 2, 5, 8, 1, 7, 9)
TARGET_CONFIGURATION: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 9)


def utc_isoformat(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat()


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    email: str
    registered_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class IssuedIdentity:
    player: Player
    token: str


@dataclass(frozen=True)
class ScoreRecord:
    player_id: str
    moves: int
    completed_at: datetime
    starting_configuration: tuple[int, ...] = INITIAL_CONFIGURATION


@dataclass(frozen=True)
class ScoreResult:
    moves: int
    completed_at: datetime
    improved: bool
    created: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "moves": self.moves,
            "completedAt": utc_isoformat(self.completed_at),
            "improved": self.improved,
        }


@dataclass(frozen=True)
class RankedScore:
    """A score record joined with the owning player's public fields."""

    player_id: str
    name: str
    email: str
    moves: int
    completed_at: datetime


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    name: str
    email: str
    moves: int
    completed_at: datetime

    @property
    def date(self) -> str:
        """Calendar day of completion in UTC."""
        return self.completed_at.astimezone(timezone.utc).date().isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "name": self.name,
            "email": self.email,
            "moves": self.moves,
            "completedAt": utc_isoformat(self.completed_at),
            "date": self.date,
        }


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_scores: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalScores": self.total_scores,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


@dataclass(frozen=True)
class LeaderboardPage:
    entries: list[LeaderboardEntry] = field(default_factory=list)
    pagination: Pagination | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "leaderboard": [entry.to_dict() for entry in self.entries],
            "pagination": self.pagination.to_dict() if self.pagination else None,
        }


@dataclass(frozen=True)
class PlayerRank:
    has_score: bool
    moves: int | None = None
    completed_at: datetime | None = None
    rank: int | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.has_score or self.completed_at is None:
            return {"hasScore": False}
        return {
            "hasScore": True,
            "score": {
                "moves": self.moves,
                "completedAt": utc_isoformat(self.completed_at),
                "rank": self.rank,
            },
        }


@dataclass(frozen=True)
class ScoreSummary:
    """Raw aggregates over all score records, before rounding."""

    count: int
    average_moves: float
    min_moves: int
    max_moves: int


@dataclass(frozen=True)
class GameStats:
    total_users: int
    total_scores: int
    average_moves: float
    best_score: int
    worst_score: int
    completion_rate: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalUsers": self.total_users,
            "totalScores": self.total_scores,
            "averageMoves": self.average_moves,
            "bestScore": self.best_score,
            "worstScore": self.worst_score,
            "completionRate": self.completion_rate,
        }
