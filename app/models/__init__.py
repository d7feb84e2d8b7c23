"""Convenience exports for ORM models."""
from .friendship import Friendship, FriendshipStatus
from .profile import Profile, ProfileLanguage, UserGender, UserStatus
from .user import User

__all__ = [
    "Friendship",
    "FriendshipStatus",
    "Profile",
    "ProfileLanguage",
    "User",
    "UserGender",
    "UserStatus",
]
