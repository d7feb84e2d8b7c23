"""Profile CRUD and avatar storage for application users."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import filetype
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Profile, User
from .errors import ErrorKind, ProfileServiceError

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "application/octet-stream"

# Never writable through the generic create/update path.
_PROTECTED_FIELDS = frozenset({"id", "avatar", "username"})
_NON_NULLABLE_FIELDS = frozenset({"language", "status"})


@dataclass(frozen=True, slots=True)
class Avatar:
    content: bytes
    mime_type: str


def sniff_mime_type(data: bytes) -> str | None:
    """Detect the MIME type of ``data`` from its magic number."""

    kind = filetype.guess(data)
    return kind.mime if kind is not None else None


def _get_profile_or_404(db: Session, username: str) -> Profile:
    profile = db.scalar(select(Profile).where(Profile.username == username))
    if profile is None:
        raise ProfileServiceError(ErrorKind.NOT_FOUND, "Profile not found")
    return profile


def _commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s", failure_message)
        raise ProfileServiceError(ErrorKind.INTERNAL, failure_message) from exc


def create_profile(db: Session, *, username: str, fields: Mapping[str, Any] | None = None) -> Profile:
    """Create the profile for ``username``, applying only the provided fields."""

    if db.scalar(select(User.id).where(User.username == username)) is None:
        raise ProfileServiceError(ErrorKind.NOT_FOUND, "User does not exist.")
    if db.scalar(select(Profile.id).where(Profile.username == username)) is not None:
        raise ProfileServiceError(ErrorKind.CONFLICT, "Profile already exists.")

    profile = Profile(username=username)
    for field, value in (fields or {}).items():
        if field in _PROTECTED_FIELDS or not value:
            continue
        setattr(profile, field, value)

    try:
        db.add(profile)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ProfileServiceError(ErrorKind.CONFLICT, "Profile already exists.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create profile for %s", username)
        raise ProfileServiceError(ErrorKind.INTERNAL, "Failed to create profile") from exc

    db.refresh(profile)
    logger.info("Created profile for %s", username)
    return profile


def get_profile_by_username(db: Session, *, username: str) -> Profile:
    return _get_profile_or_404(db, username)


def update_profile(db: Session, *, username: str, changes: Mapping[str, Any]) -> Profile:
    """Apply a partial update; ``id`` and ``avatar`` keys are silently dropped."""

    profile = _get_profile_or_404(db, username)
    for field, value in changes.items():
        if field in _PROTECTED_FIELDS:
            continue
        if value is None and field in _NON_NULLABLE_FIELDS:
            continue
        setattr(profile, field, value)

    _commit(db, "Failed to update profile")
    db.refresh(profile)
    return profile


def delete_profile(db: Session, *, username: str) -> None:
    profile = _get_profile_or_404(db, username)
    db.delete(profile)
    _commit(db, "Failed to delete profile")
    logger.info("Deleted profile for %s", username)


def get_avatar(db: Session, *, username: str) -> Avatar:
    """Return the stored avatar bytes with their sniffed MIME type."""

    if not username:
        raise ProfileServiceError(ErrorKind.INVALID_INPUT, "Username is required.")

    content = db.scalar(select(Profile.avatar).where(Profile.username == username))
    if not content:
        raise ProfileServiceError(ErrorKind.NOT_FOUND, "Avatar not found.")
    return Avatar(content=content, mime_type=sniff_mime_type(content) or FALLBACK_MIME_TYPE)


def upload_avatar(db: Session, *, username: str, data: bytes) -> Profile:
    """Persist ``data`` as the avatar; size and type checks happen at the API boundary."""

    profile = _get_profile_or_404(db, username)
    profile.avatar = data
    _commit(db, "Failed to store avatar")
    logger.info("Stored %d byte avatar for %s", len(data), username)
    return profile


__all__ = [
    "Avatar",
    "FALLBACK_MIME_TYPE",
    "create_profile",
    "delete_profile",
    "get_avatar",
    "get_profile_by_username",
    "sniff_mime_type",
    "update_profile",
    "upload_avatar",
]
