"""Player registration and email-based login.

Identity here is non-authoritative: login only needs a registered email and
registration never proves control of the mailbox. Tokens are issued for
whoever presents the address.
"""

from __future__ import annotations

import logging

from .errors import ConflictError, NotFoundError, ValidationError
from .models import IssuedIdentity
from .security import TokenSigner
from .store import LeaderboardStore
from .validation import validate_email, validate_name

logger = logging.getLogger(__name__)


def register_player(
    store: LeaderboardStore,
    signer: TokenSigner,
    name: str | None,
    email: str | None,
) -> IssuedIdentity:
    if not name or not email:
        raise ValidationError("Name and email are required")

    clean_name = validate_name(name).unwrap()
    clean_email = validate_email(email).unwrap()

    # create_player re-checks uniqueness atomically
    if store.get_player_by_email(clean_email) is not None:
        raise ConflictError("Email already registered")

    player = store.create_player(name=clean_name, email=clean_email)
    logger.info("Registered player %s", player.id)
    return IssuedIdentity(player=player, token=signer.issue(player.id, player.email))


def login_player(store: LeaderboardStore, signer: TokenSigner, email: str | None) -> IssuedIdentity:
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")

    player = store.get_player_by_email(email.strip().lower())
    if player is None:
        raise NotFoundError("User not found")
    return IssuedIdentity(player=player, token=signer.issue(player.id, player.email))
