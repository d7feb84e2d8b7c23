"""ORM model for the one-to-one profile attached to each user."""
from __future__ import annotations

import uuid
from enum import StrEnum

from sqlalchemy import Column, Enum, ForeignKey, LargeBinary, String, Text, Uuid
from sqlalchemy.orm import deferred, relationship

from app.database import Base
from .base import TimestampMixin


class UserGender(StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class ProfileLanguage(StrEnum):
    ENGLISH = "ENGLISH"
    PORTUGUESE = "PORTUGUESE"


class UserStatus(StrEnum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    IN_GAME = "IN_GAME"


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(150), ForeignKey("users.username", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    nickname = Column(String(150), nullable=True)
    bio = Column(Text, nullable=True)
    gender = Column(Enum(UserGender, name="user_gender"), nullable=True)
    first_name = Column(String(150), nullable=True)
    last_name = Column(String(150), nullable=True)
    language = Column(
        Enum(ProfileLanguage, name="profile_language"),
        nullable=False,
        default=ProfileLanguage.ENGLISH,
        server_default=ProfileLanguage.ENGLISH.value,
    )
    status = Column(
        Enum(UserStatus, name="user_status"),
        nullable=False,
        default=UserStatus.OFFLINE,
        server_default=UserStatus.OFFLINE.value,
    )
    # Deferred so regular profile reads never pull the blob.
    avatar = deferred(Column(LargeBinary, nullable=True))

    user = relationship("User", foreign_keys=[username])


__all__ = ["Profile", "ProfileLanguage", "UserGender", "UserStatus"]
