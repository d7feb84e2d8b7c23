"""Schemas for user account endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserResponse(BaseModel):
    """Public view of an account; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str | None = None
    active: bool
    two_factor_enabled: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserUpdateRequest(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1, max_length=128)


class UserEnvelope(BaseModel):
    message: str
    user: UserResponse


class UserListResponse(BaseModel):
    message: str
    users: list[UserResponse]


__all__ = ["UserEnvelope", "UserListResponse", "UserResponse", "UserUpdateRequest"]
