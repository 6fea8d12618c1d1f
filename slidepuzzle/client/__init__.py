"""Client package for playing the slide puzzle against the API."""

from .api import ApiError, GameApiClient, connect
from .session import PlaySession, SessionPlayer

__all__ = [
    "ApiError",
    "connect",
    "GameApiClient",
    "PlaySession",
    "SessionPlayer",
]
