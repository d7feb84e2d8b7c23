"""Login orchestration: credential check followed by the optional TOTP gate."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ..models import User
from ..security import verify_password
from .errors import ErrorKind, UserServiceError
from .user_service import find_user_by_username, verify_2fa

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."


def authenticate_user(db: Session, *, username: str, password: str, token: str | None = None) -> User:
    """Return the user when ``username``/``password`` match and the 2FA gate passes.

    Unknown users and wrong passwords share one message so callers cannot discover
    which usernames exist.
    """

    user = find_user_by_username(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Rejected login for %s", username)
        raise UserServiceError(ErrorKind.FORBIDDEN, INVALID_CREDENTIALS_MESSAGE)
    if not user.active:
        raise UserServiceError(ErrorKind.FORBIDDEN, "User account is disabled.")

    if user.two_factor_enabled:
        if not token:
            raise UserServiceError(ErrorKind.UNAUTHORIZED, "2FA token required.")
        if not verify_2fa(db, username=username, token=token):
            raise UserServiceError(ErrorKind.UNAUTHORIZED, "Invalid 2FA token.")

    logger.info("User %s logged in", username)
    return user


__all__ = ["INVALID_CREDENTIALS_MESSAGE", "authenticate_user"]
