"""Backend package for the slide puzzle leaderboard."""

from .config import BackendSettings, load_settings
from .errors import AuthError, ConflictError, GameError, InternalError, NotFoundError, ValidationError
from .ledger import submit_score
from .puzzle import PuzzleState, new_game, reset, select_or_swap, shortest_solution
from .ranking import get_leaderboard, get_player_rank
from .registry import login_player, register_player
from .security import TokenIdentity, TokenSigner
from .stats import get_stats
from .store import InMemoryLeaderboardStore, LeaderboardStore, PostgresLeaderboardStore, create_store

__all__ = [
    "AuthError",
    "BackendSettings",
    "ConflictError",
    "create_store",
    "GameError",
    "get_leaderboard",
    "get_player_rank",
    "get_stats",
    "InMemoryLeaderboardStore",
    "InternalError",
    "LeaderboardStore",
    "load_settings",
    "login_player",
    "new_game",
    "NotFoundError",
    "PostgresLeaderboardStore",
    "PuzzleState",
    "register_player",
    "reset",
    "select_or_swap",
    "shortest_solution",
    "submit_score",
    "TokenIdentity",
    "TokenSigner",
    "ValidationError",
]
