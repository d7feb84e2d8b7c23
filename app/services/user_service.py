"""Account lifecycle and two-factor enrollment for application users."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Friendship, Profile, User
from ..security import hash_password
from . import totp_service
from .errors import ErrorKind, UserServiceError
from .password_policy import validate_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TwoFactorProvisioning:
    """Secret material returned when a user starts two-factor enrollment."""

    secret: str
    otpauth_url: str


def _get_user_or_404(db: Session, username: str) -> User:
    user = find_user_by_username(db, username)
    if user is None:
        raise UserServiceError(ErrorKind.NOT_FOUND, "User not found")
    return user


def _commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s", failure_message)
        raise UserServiceError(ErrorKind.INTERNAL, failure_message) from exc


def find_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username))


def get_all_users(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.created_at.asc(), User.username.asc())))


def create_user(db: Session, *, username: str, password: str, email: str | None = None) -> User:
    """Create an account after the password passes the complexity policy.

    Raises
    ------
    UserServiceError
        ``INVALID_INPUT`` with the list of policy failures, or ``CONFLICT`` when
        the username is already taken.
    """

    check = validate_password(password)
    if not check.valid:
        raise UserServiceError(
            ErrorKind.INVALID_INPUT,
            "Password does not meet security requirements.",
            error=check.errors,
        )

    user = User(username=username, email=email, hashed_password=hash_password(password))
    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise UserServiceError(ErrorKind.CONFLICT, "Username already exists.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create user %s", username)
        raise UserServiceError(ErrorKind.INTERNAL, "Failed to create user") from exc

    db.refresh(user)
    logger.info("Created user %s", username)
    return user


def update_user(db: Session, *, username: str, email: str | None = None, password: str | None = None) -> User:
    user = _get_user_or_404(db, username)
    if email is not None:
        user.email = email
    if password:
        user.hashed_password = hash_password(password)
    _commit(db, "Failed to update user")
    db.refresh(user)
    return user


def disable_user(db: Session, *, username: str) -> User:
    user = _get_user_or_404(db, username)
    user.active = False
    _commit(db, "Failed to disable user")
    logger.info("Disabled user %s", username)
    return user


def _purge_friendships(db: Session, username: str) -> None:
    db.execute(
        delete(Friendship).where(
            or_(Friendship.requester_username == username, Friendship.addressee_username == username)
        )
    )


def _purge_profile(db: Session, username: str) -> None:
    db.execute(delete(Profile).where(Profile.username == username))


def delete_user(db: Session, *, username: str) -> User:
    """Remove ``username`` together with its friendships and profile in one transaction.

    Nothing is removed unless every step succeeds.
    """

    user = _get_user_or_404(db, username)
    try:
        _purge_friendships(db, username)
        _purge_profile(db, username)
        db.execute(delete(User).where(User.username == username))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete user %s; changes rolled back", username)
        raise UserServiceError(ErrorKind.INTERNAL, "Failed to delete user") from exc

    logger.info("Deleted user %s", username)
    return user


def generate_2fa_secret(db: Session, *, username: str) -> TwoFactorProvisioning:
    """Store a fresh TOTP secret for ``username``; it stays inert until enabled."""

    user = _get_user_or_404(db, username)
    secret = totp_service.generate_secret()
    user.two_factor_secret = secret
    user.two_factor_enabled = False
    _commit(db, "Failed to store 2FA secret")
    return TwoFactorProvisioning(secret=secret, otpauth_url=totp_service.provisioning_uri(secret, username))


def enable_2fa(db: Session, *, username: str, token: str) -> User:
    user = _get_user_or_404(db, username)
    if not user.two_factor_secret:
        raise UserServiceError(ErrorKind.INVALID_INPUT, "2FA not initialized")
    if not totp_service.verify_code(user.two_factor_secret, token):
        raise UserServiceError(ErrorKind.INVALID_INPUT, "Invalid 2FA token")

    user.two_factor_enabled = True
    _commit(db, "Failed to enable 2FA")
    logger.info("Enabled 2FA for %s", username)
    return user


def disable_2fa(db: Session, *, username: str) -> User:
    user = _get_user_or_404(db, username)
    user.two_factor_enabled = False
    user.two_factor_secret = None
    _commit(db, "Failed to disable 2FA")
    logger.info("Disabled 2FA for %s", username)
    return user


def verify_2fa(db: Session, *, username: str, token: str) -> bool:
    user = find_user_by_username(db, username)
    if user is None or not user.two_factor_enabled or not user.two_factor_secret:
        return False
    return totp_service.verify_code(user.two_factor_secret, token)


__all__ = [
    "TwoFactorProvisioning",
    "create_user",
    "delete_user",
    "disable_2fa",
    "disable_user",
    "enable_2fa",
    "find_user_by_username",
    "generate_2fa_secret",
    "get_all_users",
    "update_user",
    "verify_2fa",
]
