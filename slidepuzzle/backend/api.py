"""FastAPI endpoints for registration, score submission and the leaderboard."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import BackendSettings, load_settings
from .errors import GameError, MissingTokenError
from .ledger import result_message, submit_score
from .log import setup_logging
from .ranking import get_leaderboard, get_player_rank
from .registry import login_player, register_player
from .security import TokenIdentity, TokenSigner
from .stats import get_stats
from .store import LeaderboardStore, create_store

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None


class ScoreRequest(BaseModel):
    moves: Any = None


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


def _identity_response(message: str, identity: Any, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"message": message, "user": identity.player.to_dict(), "token": identity.token},
        status_code=status_code,
    )


def create_app(store: LeaderboardStore | None = None, settings: BackendSettings | None = None) -> FastAPI:
    settings = settings if settings is not None else load_settings()
    leaderboard_store = store if store is not None else create_store(settings.database_url)
    signer = TokenSigner(secret_key=settings.token_secret, max_age_seconds=settings.token_max_age_seconds)
    started = time.monotonic()

    app = FastAPI(title="Slide Puzzle API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.store = leaderboard_store
    app.state.signer = signer

    bearer = HTTPBearer(auto_error=False)

    def get_store() -> LeaderboardStore:
        return leaderboard_store

    def current_identity(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    ) -> TokenIdentity:
        if credentials is None or not credentials.credentials:
            raise MissingTokenError()
        return signer.verify(credentials.credentials)

    @app.exception_handler(GameError)
    async def handle_game_error(_request: Request, exc: GameError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = str(errors[0].get("msg", "Invalid request")) if errors else "Invalid request"
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error(404, "Route not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if settings.is_production:
            return _error(500, "Internal server error")
        return _error(500, "Internal server error", detail=str(exc))

    @app.post("/api/auth/register")
    def register(payload: RegisterRequest, local_store: LeaderboardStore = Depends(get_store)) -> JSONResponse:
        identity = register_player(local_store, signer, name=payload.name, email=payload.email)
        return _identity_response("User registered successfully", identity, 201)

    @app.post("/api/auth/login")
    def login(payload: LoginRequest, local_store: LeaderboardStore = Depends(get_store)) -> JSONResponse:
        identity = login_player(local_store, signer, email=payload.email)
        return _identity_response("Login successful", identity, 200)

    @app.post("/api/scores")
    def post_score(
        payload: ScoreRequest,
        identity: TokenIdentity = Depends(current_identity),
        local_store: LeaderboardStore = Depends(get_store),
    ) -> JSONResponse:
        result = submit_score(local_store, player_id=identity.player_id, moves=payload.moves)
        return JSONResponse(
            {"message": result_message(result), "score": result.to_dict()},
            status_code=201 if result.created else 200,
        )

    @app.get("/api/leaderboard")
    def leaderboard(
        limit: str | None = None,
        page: str | None = None,
        local_store: LeaderboardStore = Depends(get_store),
    ) -> dict[str, Any]:
        return get_leaderboard(local_store, page=page, limit=limit).to_dict()

    @app.get("/api/user/score")
    def user_score(
        identity: TokenIdentity = Depends(current_identity),
        local_store: LeaderboardStore = Depends(get_store),
    ) -> dict[str, Any]:
        return get_player_rank(local_store, identity.player_id).to_dict()

    @app.get("/api/stats")
    def stats(local_store: LeaderboardStore = Depends(get_store)) -> dict[str, Any]:
        return get_stats(local_store).to_dict()

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - started,
        }

    logger.info("API ready with %s", type(leaderboard_store).__name__)
    return app


def build_app() -> FastAPI:
    """Entry point for `uvicorn --factory`: configure logging from the environment, then build the app."""
    settings = load_settings()
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    return create_app(settings=settings)
