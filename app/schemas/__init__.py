"""Convenience exports for schema layer."""
from .auth import AuthResponse, LoginRequest, RegisterRequest, TwoFactorSetupResponse, TwoFactorTokenRequest
from .common import MessageResponse
from .friends import (
    BlockedUsersResponse,
    BlockRequest,
    FriendRequestItem,
    FriendRequestPayload,
    FriendRequestsResponse,
    FriendshipEnvelope,
    FriendshipResponse,
    FriendshipStatusResponse,
    FriendsListResponse,
    FriendSummaryResponse,
    RemoveFriendRequest,
    RespondRequest,
    UnblockRequest,
)
from .profiles import ProfileCreateRequest, ProfileEnvelope, ProfileResponse, ProfileUpdateRequest
from .users import UserEnvelope, UserListResponse, UserResponse, UserUpdateRequest

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TwoFactorSetupResponse",
    "TwoFactorTokenRequest",
    "MessageResponse",
    "BlockRequest",
    "BlockedUsersResponse",
    "FriendRequestItem",
    "FriendRequestPayload",
    "FriendRequestsResponse",
    "FriendshipEnvelope",
    "FriendshipResponse",
    "FriendshipStatusResponse",
    "FriendsListResponse",
    "FriendSummaryResponse",
    "RemoveFriendRequest",
    "RespondRequest",
    "UnblockRequest",
    "ProfileCreateRequest",
    "ProfileEnvelope",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "UserEnvelope",
    "UserListResponse",
    "UserResponse",
    "UserUpdateRequest",
]
