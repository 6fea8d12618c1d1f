"""Error taxonomy shared by the core services and the HTTP layer."""

from __future__ import annotations


class GameError(Exception):
    """Base class for failures that map onto an HTTP status and a JSON error body."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GameError):
    status_code = 400


class ConflictError(GameError):
    status_code = 400


class NotFoundError(GameError):
    status_code = 404


class AuthError(GameError):
    status_code = 401


class MissingTokenError(AuthError):
    def __init__(self, message: str = "Access token required") -> None:
        super().__init__(message)


class InvalidTokenError(AuthError):
    status_code = 403

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class InternalError(GameError):
    status_code = 500
