import time

import pytest

from slidepuzzle.backend.errors import InvalidTokenError
from slidepuzzle.backend.security import TokenSigner


def test_issued_token_round_trips_identity() -> None:
    signer = TokenSigner(secret_key="local-dev-secret")

    token = signer.issue("player-1", "cs22b1001@iiitdm.ac.in")
    identity = signer.verify(token)

    assert identity.player_id == "player-1"
    assert identity.email == "cs22b1001@iiitdm.ac.in"


def test_verify_rejects_token_signed_with_other_secret() -> None:
    token = TokenSigner(secret_key="secret-a").issue("player-1", "cs22b1001@iiitdm.ac.in")

    with pytest.raises(InvalidTokenError) as excinfo:
        TokenSigner(secret_key="secret-b").verify(token)

    assert excinfo.value.status_code == 403


def test_verify_rejects_garbage() -> None:
    with pytest.raises(InvalidTokenError):
        TokenSigner(secret_key="secret").verify("not-a-token")


def test_verify_rejects_expired_token(monkeypatch) -> None:
    signer = TokenSigner(secret_key="secret", max_age_seconds=60)
    token = signer.issue("player-1", "cs22b1001@iiitdm.ac.in")

    real_time = time.time
    monkeypatch.setattr(time, "time", lambda: real_time() + 3600)

    with pytest.raises(InvalidTokenError):
        signer.verify(token)


def test_tokens_differ_per_player() -> None:
    signer = TokenSigner(secret_key="secret")

    assert signer.issue("player-1", "a") != signer.issue("player-2", "a")
