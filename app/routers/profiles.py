"""Profile and avatar API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..schemas import (
    MessageResponse,
    ProfileCreateRequest,
    ProfileEnvelope,
    ProfileResponse,
    ProfileUpdateRequest,
)
from ..services import (
    ErrorKind,
    ProfileServiceError,
    create_profile,
    delete_profile,
    get_avatar,
    get_profile_by_username,
    sniff_mime_type,
    update_profile,
    upload_avatar,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])

ALLOWED_AVATAR_TYPES = frozenset({"image/jpeg", "image/png", "image/gif"})


async def _read_avatar_upload(file: UploadFile) -> bytes:
    """Read the upload, enforcing the size ceiling and the image allow-list."""

    limit = get_settings().avatar_max_bytes
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise ProfileServiceError(
            ErrorKind.PAYLOAD_TOO_LARGE,
            "Avatar exceeds the maximum allowed size.",
            error={"max_bytes": limit},
        )
    if not data:
        raise ProfileServiceError(ErrorKind.INVALID_INPUT, "Uploaded avatar is empty.")

    mime_type = sniff_mime_type(data)
    if mime_type not in ALLOWED_AVATAR_TYPES:
        raise ProfileServiceError(
            ErrorKind.UNSUPPORTED_MEDIA_TYPE,
            "Unsupported avatar type.",
            error={"detected": mime_type, "allowed": sorted(ALLOWED_AVATAR_TYPES)},
        )
    return data


@router.post("/{username}", response_model=ProfileEnvelope, status_code=status.HTTP_201_CREATED)
async def create_profile_endpoint(
    username: str,
    payload: ProfileCreateRequest,
    db: Session = Depends(get_session),
) -> ProfileEnvelope:
    profile = create_profile(db, username=username, fields=payload.model_dump(exclude_none=True))
    return ProfileEnvelope(message="Profile created", profile=ProfileResponse.model_validate(profile))


@router.get("/{username}", response_model=ProfileEnvelope)
async def retrieve_profile(
    username: str,
    db: Session = Depends(get_session),
) -> ProfileEnvelope:
    profile = get_profile_by_username(db, username=username)
    return ProfileEnvelope(message="Profile found", profile=ProfileResponse.model_validate(profile))


@router.put("/{username}", response_model=ProfileEnvelope)
async def update_profile_endpoint(
    username: str,
    payload: ProfileUpdateRequest,
    db: Session = Depends(get_session),
) -> ProfileEnvelope:
    # Only update fields that were actually sent by the client
    profile = update_profile(db, username=username, changes=payload.model_dump(exclude_unset=True))
    return ProfileEnvelope(message="Profile updated", profile=ProfileResponse.model_validate(profile))


@router.delete("/{username}", response_model=MessageResponse)
async def delete_profile_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> MessageResponse:
    delete_profile(db, username=username)
    return MessageResponse(message="Profile successfully deleted.")


@router.get("/{username}/avatar", response_class=Response)
async def get_avatar_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> Response:
    avatar = get_avatar(db, username=username)
    return Response(content=avatar.content, media_type=avatar.mime_type)


@router.post("/{username}/avatar", response_model=MessageResponse)
async def upload_avatar_endpoint(
    username: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_session),
) -> MessageResponse:
    # A missing profile is reported before anything about the upload itself.
    get_profile_by_username(db, username=username)
    data = await _read_avatar_upload(file)
    upload_avatar(db, username=username, data=data)
    return MessageResponse(message="Avatar updated successfully.")


__all__ = ["ALLOWED_AVATAR_TYPES", "router"]
