"""Pure input validators run before anything touches the store."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import ValidationError

T = TypeVar("T")

EMAIL_DOMAIN = "iiitdm.ac.in"
EMAIL_PATTERN = re.compile(r"^[A-Za-z]{2}\d{2}[A-Za-z]\d{4}@iiitdm\.ac\.in$")
EMAIL_FORMAT_MESSAGE = "Email must match IIITDM format: cs23b2007@iiitdm.ac.in"

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


@dataclass(frozen=True)
class Validated(Generic[T]):
    """Either a cleaned value or the message explaining why the input was rejected."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise ValidationError(self.error)
        return self.value  # type: ignore[return-value]


def validate_name(raw: Any) -> Validated[str]:
    if not isinstance(raw, str):
        return Validated(error="Name is required")
    name = raw.strip()
    if len(name) < NAME_MIN_LENGTH:
        return Validated(error=f"Name must be at least {NAME_MIN_LENGTH} characters long")
    if len(name) > NAME_MAX_LENGTH:
        return Validated(error=f"Name must be at most {NAME_MAX_LENGTH} characters long")
    return Validated(value=name)


def validate_email(raw: Any) -> Validated[str]:
    if not isinstance(raw, str) or raw.strip() == "":
        return Validated(error="Email is required")
    email = raw.strip().lower()
    if EMAIL_PATTERN.fullmatch(email) is None:
        return Validated(error=EMAIL_FORMAT_MESSAGE)
    return Validated(value=email)


def validate_moves(raw: Any) -> Validated[int]:
    # bool is an int subclass; reject it along with floats and strings
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
        return Validated(error="Valid moves count is required")
    return Validated(value=raw)


def parse_positive_int(raw: Any, default: int) -> int:
    """Parse ``raw`` as a positive integer, falling back to ``default``."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw if raw > 0 else default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value > 0 else default
