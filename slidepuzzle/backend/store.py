"""Persistence interfaces and implementations for players and best scores."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterator, Protocol

from .errors import ConflictError, InternalError
from .models import INITIAL_CONFIGURATION, Player, RankedScore, ScoreRecord, ScoreResult, ScoreSummary

logger = logging.getLogger(__name__)


class LeaderboardStore(Protocol):
    def create_player(self, name: str, email: str, registered_at: datetime | None = None) -> Player:
        """Persist a new player. Raise ``ConflictError`` when the email is taken."""

    def get_player(self, player_id: str) -> Player | None:
        """Return the player with ``player_id`` if it exists."""

    def get_player_by_email(self, email: str) -> Player | None:
        """Return the player registered with the lower-cased ``email``."""

    def count_players(self) -> int:
        """Return the number of registered players."""

    def get_score(self, player_id: str) -> ScoreRecord | None:
        """Return the best score record of a player."""

    def upsert_best_score(self, player_id: str, moves: int, completed_at: datetime) -> ScoreResult:
        """Atomically insert or lower the player's best score and report what happened."""

    def list_ranked_scores(self, skip: int, limit: int) -> list[RankedScore]:
        """Return a window of the globally ordered score list joined with players."""

    def count_scores(self) -> int:
        """Return the number of score records that belong to a known player."""

    def count_better_scores(self, moves: int, completed_at: datetime) -> int:
        """Count records with fewer moves, or equal moves completed earlier."""

    def score_summary(self) -> ScoreSummary:
        """Return count, average, min and max of moves across all records."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InMemoryLeaderboardStore:
    def __post_init__(self) -> None:
        self._players: dict[str, Player] = {}
        self._player_ids_by_email: dict[str, str] = {}
        self._scores: dict[str, ScoreRecord] = {}
        self._lock = threading.Lock()
        self._score_locks: dict[str, threading.Lock] = {}

    def create_player(self, name: str, email: str, registered_at: datetime | None = None) -> Player:
        with self._lock:
            if email in self._player_ids_by_email:
                raise ConflictError("Email already registered")
            player = Player(
                id=str(uuid.uuid4()),
                name=name,
                email=email,
                registered_at=registered_at or _utc_now(),
            )
            self._players[player.id] = player
            self._player_ids_by_email[email] = player.id
        return player

    def get_player(self, player_id: str) -> Player | None:
        return self._players.get(player_id)

    def get_player_by_email(self, email: str) -> Player | None:
        player_id = self._player_ids_by_email.get(email)
        if player_id is None:
            return None
        return self._players.get(player_id)

    def count_players(self) -> int:
        return len(self._players)

    def get_score(self, player_id: str) -> ScoreRecord | None:
        return self._scores.get(player_id)

    def upsert_best_score(self, player_id: str, moves: int, completed_at: datetime) -> ScoreResult:
        with self._player_lock(player_id):
            existing = self._scores.get(player_id)
            if existing is None:
                self._scores[player_id] = ScoreRecord(player_id=player_id, moves=moves, completed_at=completed_at)
                return ScoreResult(moves=moves, completed_at=completed_at, improved=True, created=True)
            if moves < existing.moves:
                self._scores[player_id] = ScoreRecord(
                    player_id=player_id,
                    moves=moves,
                    completed_at=completed_at,
                    starting_configuration=existing.starting_configuration,
                )
                return ScoreResult(moves=moves, completed_at=completed_at, improved=True)
            return ScoreResult(moves=existing.moves, completed_at=existing.completed_at, improved=False)

    def list_ranked_scores(self, skip: int, limit: int) -> list[RankedScore]:
        ordered = sorted(self._scores.values(), key=lambda record: (record.moves, record.completed_at, record.player_id))
        ranked: list[RankedScore] = []
        for record in ordered:
            player = self._players.get(record.player_id)
            if player is None:
                continue
            ranked.append(
                RankedScore(
                    player_id=record.player_id,
                    name=player.name,
                    email=player.email,
                    moves=record.moves,
                    completed_at=record.completed_at,
                )
            )
        return ranked[skip : skip + limit]

    def count_scores(self) -> int:
        return sum(1 for player_id in self._scores if player_id in self._players)

    def count_better_scores(self, moves: int, completed_at: datetime) -> int:
        return sum(
            1
            for record in self._scores.values()
            if record.moves < moves or (record.moves == moves and record.completed_at < completed_at)
        )

    def score_summary(self) -> ScoreSummary:
        moves = [record.moves for record in self._scores.values()]
        if not moves:
            return ScoreSummary(count=0, average_moves=0.0, min_moves=0, max_moves=0)
        return ScoreSummary(
            count=len(moves),
            average_moves=sum(moves) / len(moves),
            min_moves=min(moves),
            max_moves=max(moves),
        )

    def _player_lock(self, player_id: str) -> threading.Lock:
        with self._lock:
            lock = self._score_locks.get(player_id)
            if lock is None:
                lock = threading.Lock()
                self._score_locks[player_id] = lock
            return lock


@dataclass
class PostgresLeaderboardStore:
    database_url: str

    def _connect(self) -> Any:
        import psycopg

        return psycopg.connect(self.database_url)

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        import psycopg

        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    yield cur
                conn.commit()
        except psycopg.Error as exc:
            logger.exception("Database operation failed")
            raise InternalError("Database error") from exc

    def create_player(self, name: str, email: str, registered_at: datetime | None = None) -> Player:
        player_id = str(uuid.uuid4())
        registered_at = registered_at or _utc_now()
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO players (id, name, email, registered_at)
                VALUES (%s, %s, %s, %s)
                ON CONFLICT (email) DO NOTHING
                RETURNING id
                """,
                (player_id, name, email, registered_at),
            )
            row = cur.fetchone()
        if row is None:
            raise ConflictError("Email already registered")
        return Player(id=player_id, name=name, email=email, registered_at=registered_at)

    def get_player(self, player_id: str) -> Player | None:
        with self._cursor() as cur:
            cur.execute(
                "SELECT id, name, email, registered_at FROM players WHERE id = %s",
                (player_id,),
            )
            row = cur.fetchone()
        return _player_from_row(row)

    def get_player_by_email(self, email: str) -> Player | None:
        with self._cursor() as cur:
            cur.execute(
                "SELECT id, name, email, registered_at FROM players WHERE email = %s",
                (email,),
            )
            row = cur.fetchone()
        return _player_from_row(row)

    def count_players(self) -> int:
        with self._cursor() as cur:
            cur.execute("SELECT COUNT(*) FROM players", ())
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def get_score(self, player_id: str) -> ScoreRecord | None:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT player_id, moves, completed_at, starting_configuration
                FROM scores
                WHERE player_id = %s
                """,
                (player_id,),
            )
            row = cur.fetchone()
        if row is None:
            return None
        player_id, moves, completed_at, configuration = row
        return ScoreRecord(
            player_id=str(player_id),
            moves=int(moves),
            completed_at=completed_at,
            starting_configuration=tuple(configuration or INITIAL_CONFIGURATION),
        )

    def upsert_best_score(self, player_id: str, moves: int, completed_at: datetime) -> ScoreResult:
        with self._cursor() as cur:
            # the WHERE clause keeps a worse score from ever replacing the stored one
            cur.execute(
                """
                INSERT INTO scores (player_id, moves, completed_at, starting_configuration)
                VALUES (%s, %s, %s, %s)
                ON CONFLICT (player_id) DO UPDATE
                SET moves = EXCLUDED.moves, completed_at = EXCLUDED.completed_at
                WHERE scores.moves > EXCLUDED.moves
                RETURNING moves, completed_at, (xmax = 0) AS inserted
                """,
                (player_id, moves, completed_at, list(INITIAL_CONFIGURATION)),
            )
            row = cur.fetchone()
            if row is not None:
                stored_moves, stored_at, inserted = row
                return ScoreResult(
                    moves=int(stored_moves),
                    completed_at=stored_at,
                    improved=True,
                    created=bool(inserted),
                )
            cur.execute(
                "SELECT moves, completed_at FROM scores WHERE player_id = %s",
                (player_id,),
            )
            existing = cur.fetchone()
        if existing is None:
            raise InternalError("Score record vanished during update")
        return ScoreResult(moves=int(existing[0]), completed_at=existing[1], improved=False)

    def list_ranked_scores(self, skip: int, limit: int) -> list[RankedScore]:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT s.player_id, p.name, p.email, s.moves, s.completed_at
                FROM scores s
                JOIN players p ON p.id = s.player_id
                ORDER BY s.moves ASC, s.completed_at ASC, s.player_id ASC
                OFFSET %s
                LIMIT %s
                """,
                (skip, limit),
            )
            rows = cur.fetchall()
        return [
            RankedScore(
                player_id=str(player_id),
                name=name,
                email=email,
                moves=int(moves),
                completed_at=completed_at,
            )
            for player_id, name, email, moves, completed_at in rows
        ]

    def count_scores(self) -> int:
        with self._cursor() as cur:
            cur.execute("SELECT COUNT(*) FROM scores s JOIN players p ON p.id = s.player_id", ())
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def count_better_scores(self, moves: int, completed_at: datetime) -> int:
        with self._cursor() as cur:
            cur.execute(
                """
                SELECT COUNT(*)
                FROM scores
                WHERE moves < %s OR (moves = %s AND completed_at < %s)
                """,
                (moves, moves, completed_at),
            )
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def score_summary(self) -> ScoreSummary:
        with self._cursor() as cur:
            cur.execute("SELECT COUNT(*), AVG(moves), MIN(moves), MAX(moves) FROM scores", ())
            row = cur.fetchone()
        if row is None or not row[0]:
            return ScoreSummary(count=0, average_moves=0.0, min_moves=0, max_moves=0)
        count, average, minimum, maximum = row
        return ScoreSummary(
            count=int(count),
            average_moves=float(average),
            min_moves=int(minimum),
            max_moves=int(maximum),
        )


def _player_from_row(row: tuple | None) -> Player | None:
    if row is None:
        return None
    player_id, name, email, registered_at = row
    return Player(id=str(player_id), name=name, email=email, registered_at=registered_at)


def create_store(database_url: str | None) -> LeaderboardStore:
    if database_url:
        return PostgresLeaderboardStore(database_url=database_url)
    return InMemoryLeaderboardStore()
