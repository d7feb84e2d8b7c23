"""Schemas for profile endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models import ProfileLanguage, UserGender, UserStatus


class ProfileFields(BaseModel):
    nickname: str | None = Field(default=None, max_length=150)
    bio: str | None = Field(default=None, max_length=1000)
    gender: UserGender | None = None
    first_name: str | None = Field(default=None, max_length=150)
    last_name: str | None = Field(default=None, max_length=150)
    language: ProfileLanguage | None = None
    status: UserStatus | None = None


class ProfileCreateRequest(ProfileFields):
    pass


class ProfileUpdateRequest(ProfileFields):
    pass


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    nickname: str | None = None
    bio: str | None = None
    gender: UserGender | None = None
    first_name: str | None = None
    last_name: str | None = None
    language: ProfileLanguage
    status: UserStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileEnvelope(BaseModel):
    message: str
    profile: ProfileResponse


__all__ = [
    "ProfileCreateRequest",
    "ProfileEnvelope",
    "ProfileFields",
    "ProfileResponse",
    "ProfileUpdateRequest",
]
