"""HTTP client for the slide puzzle API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

DEFAULT_TIMEOUT_S = 5.0


class ApiError(Exception):
    """Raised for error answers and for transport failures (``status_code`` is None)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


@dataclass
class GameApiClient:
    http: httpx.Client

    def _request(self, method: str, path: str, token: str | None = None, **kwargs: Any) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            response = self.http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(f"Network error: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(message or f"Request failed with status {response.status_code}", response.status_code)
        return data

    def register(self, name: str, email: str) -> dict[str, Any]:
        return self._request("POST", "/api/auth/register", json={"name": name, "email": email})

    def login(self, email: str) -> dict[str, Any]:
        return self._request("POST", "/api/auth/login", json={"email": email})

    def submit_score(self, token: str, moves: int) -> dict[str, Any]:
        return self._request("POST", "/api/scores", token=token, json={"moves": moves})

    def leaderboard(self, page: int = 1, limit: int = 50) -> dict[str, Any]:
        return self._request("GET", "/api/leaderboard", params={"page": page, "limit": limit})

    def my_score(self, token: str) -> dict[str, Any]:
        return self._request("GET", "/api/user/score", token=token)

    def stats(self) -> dict[str, Any]:
        return self._request("GET", "/api/stats")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/api/health")


def connect(server_url: str, timeout_s: float = DEFAULT_TIMEOUT_S) -> GameApiClient:
    return GameApiClient(http=httpx.Client(base_url=server_url, timeout=timeout_s))
