"""Convenience exports for service layer."""
from .auth_service import authenticate_user
from .errors import ErrorKind, FriendshipServiceError, ProfileServiceError, ServiceError, UserServiceError
from .friendship_service import (
    FriendshipState,
    FriendSummary,
    block_user,
    get_blocked_users_list,
    get_friend_requests,
    get_friendship_status,
    list_friends,
    remove_friend,
    respond_to_friend_request,
    send_friend_request,
    unblock_user,
)
from .health_service import DatabaseHealth, check_database, ping_database
from .password_policy import PasswordCheck, validate_password
from .profile_service import (
    Avatar,
    create_profile,
    delete_profile,
    get_avatar,
    get_profile_by_username,
    sniff_mime_type,
    update_profile,
    upload_avatar,
)
from .user_service import (
    TwoFactorProvisioning,
    create_user,
    delete_user,
    disable_2fa,
    disable_user,
    enable_2fa,
    find_user_by_username,
    generate_2fa_secret,
    get_all_users,
    update_user,
    verify_2fa,
)

__all__ = [
    "authenticate_user",
    "ErrorKind",
    "ServiceError",
    "UserServiceError",
    "ProfileServiceError",
    "FriendshipServiceError",
    "FriendSummary",
    "FriendshipState",
    "send_friend_request",
    "get_friend_requests",
    "respond_to_friend_request",
    "list_friends",
    "remove_friend",
    "block_user",
    "unblock_user",
    "get_friendship_status",
    "get_blocked_users_list",
    "DatabaseHealth",
    "check_database",
    "ping_database",
    "PasswordCheck",
    "validate_password",
    "Avatar",
    "create_profile",
    "get_profile_by_username",
    "update_profile",
    "delete_profile",
    "get_avatar",
    "upload_avatar",
    "sniff_mime_type",
    "TwoFactorProvisioning",
    "create_user",
    "find_user_by_username",
    "get_all_users",
    "update_user",
    "disable_user",
    "delete_user",
    "generate_2fa_secret",
    "enable_2fa",
    "disable_2fa",
    "verify_2fa",
]
