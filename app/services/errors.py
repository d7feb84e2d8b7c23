"""Typed errors raised by the service layer and their HTTP status mapping."""
from __future__ import annotations

from enum import StrEnum
from typing import Any

from fastapi import status


class ErrorKind(StrEnum):
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.PAYLOAD_TOO_LARGE: status.HTTP_413_CONTENT_TOO_LARGE,
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ServiceError(RuntimeError):
    """Base error for domain failures that the API reports verbatim.

    Parameters
    ----------
    kind:
        The :class:`ErrorKind` describing the failure; determines the HTTP status.
    message:
        Human readable message returned to the client.
    error:
        Optional structured detail (for example a list of validation reasons).
    """

    def __init__(self, kind: ErrorKind, message: str, *, error: Any = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.error = error

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.error is not None:
            payload["error"] = self.error
        return payload


class UserServiceError(ServiceError):
    """Raised by account lifecycle and two-factor operations."""


class ProfileServiceError(ServiceError):
    """Raised by profile and avatar operations."""


class FriendshipServiceError(ServiceError):
    """Raised by the friendship state machine."""


__all__ = [
    "ErrorKind",
    "FriendshipServiceError",
    "ProfileServiceError",
    "STATUS_BY_KIND",
    "ServiceError",
    "UserServiceError",
]
