"""ORM model for directed friendship records between two usernames."""
from __future__ import annotations

import uuid
from enum import StrEnum

from sqlalchemy import Column, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.database import Base
from .base import TimestampMixin


class FriendshipStatus(StrEnum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    BLOCKED = "BLOCKED"
    DECLINED = "DECLINED"


class Friendship(TimestampMixin, Base):
    __tablename__ = "friendships"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    requester_username = Column(
        String(150), ForeignKey("users.username", ondelete="CASCADE"), nullable=False, index=True
    )
    addressee_username = Column(
        String(150), ForeignKey("users.username", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(
        Enum(FriendshipStatus, name="friendship_status"),
        nullable=False,
        default=FriendshipStatus.PENDING,
    )
    blocked_by_username = Column(String(150), nullable=True)
    # Status held before a block; NULL when the block created the row.
    previous_status = Column(Enum(FriendshipStatus, name="friendship_previous_status"), nullable=True)

    requester = relationship("User", foreign_keys=[requester_username])
    addressee = relationship("User", foreign_keys=[addressee_username])

    def involves(self, username: str) -> bool:
        return username in {self.requester_username, self.addressee_username}

    def counterpart(self, username: str) -> str:
        """Return the other party, deciding direction from the requester field."""
        if self.requester_username == username:
            return self.addressee_username
        return self.requester_username


__all__ = ["Friendship", "FriendshipStatus"]
