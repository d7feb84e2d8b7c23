"""SQLAlchemy ORM model for application users."""
from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, String, Uuid
from sqlalchemy.sql import expression

from app.database import Base
from .base import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(150), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    active = Column(Boolean, nullable=False, server_default=expression.true(), default=True)
    two_factor_enabled = Column(Boolean, nullable=False, server_default=expression.false(), default=False)
    two_factor_secret = Column(String(64), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username}>"


__all__ = ["User"]
