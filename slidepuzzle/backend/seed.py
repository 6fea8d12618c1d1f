"""Insert the sample players and scores used for demos and local development."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from slidepuzzle.backend.config import load_settings
from slidepuzzle.backend.errors import ConflictError
from slidepuzzle.backend.log import setup_logging
from slidepuzzle.backend.store import LeaderboardStore, create_store

logger = logging.getLogger(__name__)

SAMPLE_PLAYERS: list[tuple[str, str, int]] = [
    ("Alice Kumar", "cs22b1001@iiitdm.ac.in", 12),
    ("Bob Sharma", "me21a2002@iiitdm.ac.in", 15),
    ("Carol Singh", "ec23b3003@iiitdm.ac.in", 18),
    ("David Patel", "cs22a4004@iiitdm.ac.in", 20),
    ("Eva Reddy", "me23c5005@iiitdm.ac.in", 22),
]


def seed_store(store: LeaderboardStore, now: datetime | None = None) -> int:
    """Create missing sample players with their scores. Returns how many were added."""
    now = now or datetime.now(timezone.utc)
    added = 0
    for offset, (name, email, moves) in enumerate(SAMPLE_PLAYERS):
        try:
            player = store.create_player(name=name, email=email)
        except ConflictError:
            logger.info("Sample player %s already present", email)
            continue
        store.upsert_best_score(player_id=player.id, moves=moves, completed_at=now - timedelta(days=offset + 1))
        added += 1
    return added


def main() -> None:
    settings = load_settings()
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    added = seed_store(create_store(settings.database_url))
    logger.info("Seeded %d sample players", added)


if __name__ == "__main__":
    main()
