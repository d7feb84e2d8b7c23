"""Password complexity rules applied before an account is created."""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..config import get_settings

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True, slots=True)
class PasswordCheck:
    """Outcome of a policy check: ``valid`` plus the reasons it failed."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_password(password: str, *, min_length: int | None = None, max_length: int | None = None) -> PasswordCheck:
    """Check ``password`` against the configured complexity rules.

    Every failing rule contributes one reason so clients can show them all at once.
    """

    settings = get_settings()
    minimum = min_length if min_length is not None else settings.password_min_length
    maximum = max_length if max_length is not None else settings.password_max_length

    errors: list[str] = []
    if len(password) < minimum:
        errors.append(f"Password must be at least {minimum} characters long.")
    if len(password) > maximum:
        errors.append(f"Password must be at most {maximum} characters long.")
    if not _UPPERCASE.search(password):
        errors.append("Password must contain at least one uppercase letter.")
    if not _LOWERCASE.search(password):
        errors.append("Password must contain at least one lowercase letter.")
    if not _DIGIT.search(password):
        errors.append("Password must contain at least one number.")
    if not _SPECIAL.search(password):
        errors.append("Password must contain at least one special character.")
    return PasswordCheck(valid=not errors, errors=errors)


__all__ = ["PasswordCheck", "validate_password"]
