"""User account management routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import MessageResponse, UserEnvelope, UserListResponse, UserResponse, UserUpdateRequest
from ..services import (
    ErrorKind,
    UserServiceError,
    delete_user,
    disable_user,
    find_user_by_username,
    get_all_users,
    update_user,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users_endpoint(db: Session = Depends(get_session)) -> UserListResponse:
    users = get_all_users(db)
    if not users:
        raise UserServiceError(ErrorKind.NOT_FOUND, "No user was found!")
    return UserListResponse(
        message="Users retrieved",
        users=[UserResponse.model_validate(user) for user in users],
    )


@router.get("/{username}", response_model=UserEnvelope)
async def get_user_endpoint(username: str, db: Session = Depends(get_session)) -> UserEnvelope:
    user = find_user_by_username(db, username)
    if user is None:
        raise UserServiceError(ErrorKind.NOT_FOUND, "User not found")
    return UserEnvelope(message="User found", user=UserResponse.model_validate(user))


@router.put("/{username}", response_model=UserEnvelope)
async def update_user_endpoint(
    username: str,
    payload: UserUpdateRequest,
    db: Session = Depends(get_session),
) -> UserEnvelope:
    user = update_user(db, username=username, email=payload.email, password=payload.password)
    return UserEnvelope(message="User updated", user=UserResponse.model_validate(user))


@router.patch("/{username}", response_model=UserEnvelope)
async def disable_user_endpoint(username: str, db: Session = Depends(get_session)) -> UserEnvelope:
    user = disable_user(db, username=username)
    return UserEnvelope(message="User disabled successfully", user=UserResponse.model_validate(user))


@router.delete("/{username}", response_model=MessageResponse)
async def delete_user_endpoint(username: str, db: Session = Depends(get_session)) -> MessageResponse:
    delete_user(db, username=username)
    return MessageResponse(message="User deleted successfully!")


__all__ = ["router"]
