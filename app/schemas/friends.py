"""Schemas for friend requests, friend lists and blocking."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models import FriendshipStatus, UserStatus


class FriendRequestPayload(BaseModel):
    from_username: str = Field(..., min_length=1, max_length=150)
    to_username: str = Field(..., min_length=1, max_length=150)


class FriendshipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    requester_username: str
    addressee_username: str
    status: FriendshipStatus
    blocked_by_username: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FriendshipEnvelope(BaseModel):
    message: str
    friendship: FriendshipResponse | None = None


class RequesterIdentity(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class FriendRequestItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: FriendshipStatus
    created_at: datetime | None = None
    requester: RequesterIdentity


class FriendRequestsResponse(BaseModel):
    message: str
    requests: list[FriendRequestItem]


class RespondRequest(BaseModel):
    status: FriendshipStatus


class FriendSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    status: UserStatus | None = None


class FriendsListResponse(BaseModel):
    message: str
    friends: list[FriendSummaryResponse]


class RemoveFriendRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    friend_username: str = Field(..., min_length=1, max_length=150)


class BlockRequest(BaseModel):
    blocked_by: str = Field(..., min_length=1, max_length=150)


class UnblockRequest(BaseModel):
    unblocked_by: str = Field(..., min_length=1, max_length=150)


class FriendshipStatusResponse(BaseModel):
    status: FriendshipStatus
    blocked_by: str | None = None


class BlockedUsersResponse(BaseModel):
    message: str
    blocked_users: list[str]


__all__ = [
    "BlockRequest",
    "BlockedUsersResponse",
    "FriendRequestItem",
    "FriendRequestPayload",
    "FriendRequestsResponse",
    "FriendSummaryResponse",
    "FriendshipEnvelope",
    "FriendshipResponse",
    "FriendshipStatusResponse",
    "FriendsListResponse",
    "RemoveFriendRequest",
    "RequesterIdentity",
    "RespondRequest",
    "UnblockRequest",
]
