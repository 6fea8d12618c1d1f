"""Signed bearer tokens binding a request to a registered player."""

from __future__ import annotations

from dataclasses import dataclass

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from .errors import InvalidTokenError

TOKEN_SALT = "slidepuzzle-auth"
DEFAULT_MAX_AGE_SECONDS = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class TokenIdentity:
    player_id: str
    email: str


@dataclass
class TokenSigner:
    """Issue and verify stateless tokens carrying ``userId`` and ``email``."""

    secret_key: str
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS

    def _serializer(self) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(self.secret_key, salt=TOKEN_SALT)

    def issue(self, player_id: str, email: str) -> str:
        return self._serializer().dumps({"userId": player_id, "email": email})

    def verify(self, token: str) -> TokenIdentity:
        """Return the identity inside ``token`` or raise ``InvalidTokenError``."""
        try:
            data = self._serializer().loads(token, max_age=self.max_age_seconds)
        except SignatureExpired as exc:
            raise InvalidTokenError() from exc
        except BadSignature as exc:
            raise InvalidTokenError() from exc

        if not isinstance(data, dict):
            raise InvalidTokenError()
        player_id = data.get("userId")
        email = data.get("email")
        if not isinstance(player_id, str) or not isinstance(email, str):
            raise InvalidTokenError()
        return TokenIdentity(player_id=player_id, email=email)
