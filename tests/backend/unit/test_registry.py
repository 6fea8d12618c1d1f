import pytest

from slidepuzzle.backend.errors import ConflictError, NotFoundError, ValidationError
from slidepuzzle.backend.registry import login_player, register_player
from slidepuzzle.backend.security import TokenSigner
from slidepuzzle.backend.store import InMemoryLeaderboardStore


def _setup():
    return InMemoryLeaderboardStore(), TokenSigner(secret_key="test-secret")


def test_register_player_normalises_input_and_issues_token() -> None:
    store, signer = _setup()

    identity = register_player(store, signer, name="  Alice Kumar ", email="CS22B1001@iiitdm.ac.in")

    assert identity.player.name == "Alice Kumar"
    assert identity.player.email == "cs22b1001@iiitdm.ac.in"
    assert store.get_player(identity.player.id) == identity.player
    token_identity = signer.verify(identity.token)
    assert token_identity.player_id == identity.player.id
    assert token_identity.email == "cs22b1001@iiitdm.ac.in"


def test_register_player_rejects_wrong_digit_count() -> None:
    store, signer = _setup()

    with pytest.raises(ValidationError):
        register_player(store, signer, name="Alice", email="cs2b1001@iiitdm.ac.in")

    assert store.count_players() == 0


def test_register_player_requires_both_fields() -> None:
    store, signer = _setup()

    with pytest.raises(ValidationError) as excinfo:
        register_player(store, signer, name="", email="cs22b1001@iiitdm.ac.in")

    assert excinfo.value.message == "Name and email are required"


def test_register_player_rejects_short_and_long_names() -> None:
    store, signer = _setup()

    with pytest.raises(ValidationError):
        register_player(store, signer, name=" A ", email="cs22b1001@iiitdm.ac.in")
    with pytest.raises(ValidationError):
        register_player(store, signer, name="x" * 51, email="cs22b1001@iiitdm.ac.in")


def test_register_player_rejects_duplicate_email_case_insensitively() -> None:
    store, signer = _setup()
    register_player(store, signer, name="Alice", email="cs22b1001@iiitdm.ac.in")

    with pytest.raises(ConflictError) as excinfo:
        register_player(store, signer, name="Other", email="CS22B1001@iiitdm.ac.in")

    assert excinfo.value.message == "Email already registered"
    assert store.count_players() == 1


def test_login_player_returns_existing_player_with_fresh_token() -> None:
    store, signer = _setup()
    registered = register_player(store, signer, name="Alice", email="cs22b1001@iiitdm.ac.in")

    identity = login_player(store, signer, email="CS22B1001@IIITDM.AC.IN")

    assert identity.player == registered.player
    assert signer.verify(identity.token).player_id == registered.player.id


def test_login_player_unknown_email_is_not_found() -> None:
    store, signer = _setup()

    with pytest.raises(NotFoundError):
        login_player(store, signer, email="cs22b1001@iiitdm.ac.in")


def test_login_player_requires_email() -> None:
    store, signer = _setup()

    with pytest.raises(ValidationError):
        login_player(store, signer, email=None)
