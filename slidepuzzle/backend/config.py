"""Configuration helpers for backend runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class BackendSettings:
    token_secret: str
    database_url: str | None
    host: str
    port: int
    token_ttl_days: int = 7
    environment: str = "development"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3001"])
    log_dir: str | None = None
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def token_max_age_seconds(self) -> int:
        return self.token_ttl_days * 24 * 60 * 60


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_settings() -> BackendSettings:
    port_raw = os.getenv("SLIDEPUZZLE_PORT", "5009")
    ttl_raw = os.getenv("SLIDEPUZZLE_TOKEN_TTL_DAYS", "7")
    return BackendSettings(
        token_secret=os.getenv("SLIDEPUZZLE_TOKEN_SECRET", "dev-secret"),
        database_url=os.getenv("SLIDEPUZZLE_DATABASE_URL") or None,
        host=os.getenv("SLIDEPUZZLE_HOST", "127.0.0.1"),
        port=int(port_raw),
        token_ttl_days=int(ttl_raw),
        environment=os.getenv("SLIDEPUZZLE_ENVIRONMENT", "development").lower(),
        cors_origins=_parse_origins(os.getenv("SLIDEPUZZLE_CORS_ORIGINS", "http://localhost:3001")),
        log_dir=os.getenv("SLIDEPUZZLE_LOG_DIR") or None,
        log_level=os.getenv("SLIDEPUZZLE_LOG_LEVEL", "INFO").upper(),
    )
