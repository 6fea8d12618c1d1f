"""Client-side play session: puzzle state, identity and leaderboard cache."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from slidepuzzle.backend.puzzle import MoveResult, PuzzleState, new_game, reset, select_or_swap
from slidepuzzle.backend.validation import validate_email, validate_name

from .api import ApiError, GameApiClient

logger = logging.getLogger(__name__)

LOCAL_SAVE_MESSAGE = "Score saved locally"
DUPLICATE_EMAIL_MESSAGE = "Email already registered"

# shown when the server cannot be reached and nothing has been fetched yet
SAMPLE_LEADERBOARD: list[dict[str, Any]] = [
    {"rank": 1, "name": "Alice Kumar", "email": "cs22b1001@iiitdm.ac.in", "moves": 12, "date": "2024-03-15"},
    {"rank": 2, "name": "Bob Sharma", "email": "me21a2002@iiitdm.ac.in", "moves": 15, "date": "2024-03-14"},
    {"rank": 3, "name": "Carol Singh", "email": "ec23b3003@iiitdm.ac.in", "moves": 18, "date": "2024-03-13"},
    {"rank": 4, "name": "David Patel", "email": "cs22a4004@iiitdm.ac.in", "moves": 20, "date": "2024-03-12"},
    {"rank": 5, "name": "Eva Reddy", "email": "me23c5005@iiitdm.ac.in", "moves": 22, "date": "2024-03-11"},
]


@dataclass(frozen=True)
class SessionPlayer:
    name: str
    email: str
    token: str | None = None

    @property
    def online(self) -> bool:
        return self.token is not None


@dataclass
class PlaySession:
    api: GameApiClient | None = None
    puzzle: PuzzleState = field(default_factory=new_game)
    player: SessionPlayer | None = None
    leaderboard: list[dict[str, Any]] = field(default_factory=list)
    status_message: str = ""
    submitting: bool = False

    def click(self, index: int) -> MoveResult:
        # input is ignored while a winning score is on its way to the server
        if self.submitting:
            return MoveResult(state=self.puzzle)

        result = select_or_swap(self.puzzle, index)
        self.puzzle = result.state
        final_moves = result.solved_moves
        if final_moves is not None:
            self.status_message = ""
            if self.player is not None:
                self._submit(final_moves)
        return result

    def restart(self) -> PuzzleState:
        self.puzzle = reset(self.puzzle)
        self.status_message = ""
        return self.puzzle

    def sign_in(self, name: str, email: str) -> SessionPlayer:
        """Register (or log in an already registered email); go offline if the server is unreachable.

        Raises ``ValidationError`` for malformed input and ``ApiError`` when
        the server rejects the request.
        """
        clean_name = validate_name(name).unwrap()
        clean_email = validate_email(email).unwrap()

        if self.api is None:
            return self._go_offline(clean_name, clean_email)

        try:
            data = self.api.register(clean_name, clean_email)
        except ApiError as exc:
            if exc.is_network_error:
                logger.warning("Registration failed, playing offline: %s", exc)
                return self._go_offline(clean_name, clean_email)
            if exc.message != DUPLICATE_EMAIL_MESSAGE:
                raise
            data = self.api.login(clean_email)

        user = data["user"]
        self.player = SessionPlayer(name=user["name"], email=user["email"], token=data["token"])
        self.refresh_leaderboard()
        return self.player

    def sign_out(self) -> None:
        self.player = None

    def refresh_leaderboard(self) -> list[dict[str, Any]]:
        if self.api is None:
            if not self.leaderboard:
                self.leaderboard = list(SAMPLE_LEADERBOARD)
            return self.leaderboard
        try:
            data = self.api.leaderboard()
        except ApiError as exc:
            logger.warning("Failed to fetch leaderboard: %s", exc)
            if not self.leaderboard:
                self.leaderboard = list(SAMPLE_LEADERBOARD)
            return self.leaderboard
        self.leaderboard = list(data.get("leaderboard") or [])
        return self.leaderboard

    def _go_offline(self, name: str, email: str) -> SessionPlayer:
        self.player = SessionPlayer(name=name, email=email)
        return self.player

    def _submit(self, moves: int) -> None:
        if self.api is None or self.player is None or not self.player.online:
            self.status_message = LOCAL_SAVE_MESSAGE
            return

        self.submitting = True
        try:
            data = self.api.submit_score(self.player.token, moves)
        except ApiError as exc:
            logger.warning("Failed to submit score: %s", exc)
            self.status_message = LOCAL_SAVE_MESSAGE
        else:
            self.status_message = str(data.get("message", ""))
            self.refresh_leaderboard()
        finally:
            self.submitting = False
