"""Friendship API routes: requests, friend lists and blocking."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
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
    MessageResponse,
    RemoveFriendRequest,
    RespondRequest,
    UnblockRequest,
)
from ..services import (
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

router = APIRouter(prefix="/friendships", tags=["friendships"])


@router.post("", response_model=FriendshipEnvelope, status_code=status.HTTP_201_CREATED)
async def send_friend_request_endpoint(
    payload: FriendRequestPayload,
    db: Session = Depends(get_session),
) -> FriendshipEnvelope:
    friendship = send_friend_request(db, from_username=payload.from_username, to_username=payload.to_username)
    return FriendshipEnvelope(
        message="Friend request sent",
        friendship=FriendshipResponse.model_validate(friendship),
    )


@router.get("/requests/{username}", response_model=FriendRequestsResponse)
async def friend_requests_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> FriendRequestsResponse:
    requests = get_friend_requests(db, username=username)
    return FriendRequestsResponse(
        message="Friend requests retrieved",
        requests=[FriendRequestItem.model_validate(item) for item in requests],
    )


@router.get("/list/{username}", response_model=FriendsListResponse)
async def list_friends_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> FriendsListResponse:
    friends = list_friends(db, username=username)
    return FriendsListResponse(
        message="Friends retrieved",
        friends=[FriendSummaryResponse.model_validate(friend) for friend in friends],
    )


@router.patch("/respond/{friendship_id}", response_model=FriendshipEnvelope)
async def respond_endpoint(
    friendship_id: UUID,
    payload: RespondRequest,
    db: Session = Depends(get_session),
) -> FriendshipEnvelope:
    friendship = respond_to_friend_request(db, friendship_id=friendship_id, status=payload.status)
    return FriendshipEnvelope(
        message=f"Friend request {payload.status.value.lower()}",
        friendship=FriendshipResponse.model_validate(friendship),
    )


@router.delete("", response_model=MessageResponse)
async def remove_friend_endpoint(
    payload: RemoveFriendRequest,
    db: Session = Depends(get_session),
) -> MessageResponse:
    remove_friend(db, username=payload.username, friend_username=payload.friend_username)
    return MessageResponse(message="Friend removed")


@router.patch("/block/{friend_username}", response_model=FriendshipEnvelope)
async def block_endpoint(
    friend_username: str,
    payload: BlockRequest,
    db: Session = Depends(get_session),
) -> FriendshipEnvelope:
    friendship = block_user(db, blocker=payload.blocked_by, blocked=friend_username)
    return FriendshipEnvelope(message="User blocked", friendship=FriendshipResponse.model_validate(friendship))


@router.patch("/unblock/{friend_username}", response_model=FriendshipEnvelope)
async def unblock_endpoint(
    friend_username: str,
    payload: UnblockRequest,
    db: Session = Depends(get_session),
) -> FriendshipEnvelope:
    friendship = unblock_user(db, unblocker=payload.unblocked_by, blocked=friend_username)
    return FriendshipEnvelope(
        message="User unblocked",
        friendship=FriendshipResponse.model_validate(friendship) if friendship is not None else None,
    )


@router.get("/status/{requester}/{addressee}", response_model=FriendshipStatusResponse)
async def friendship_status_endpoint(
    requester: str,
    addressee: str,
    db: Session = Depends(get_session),
) -> FriendshipStatusResponse:
    state = get_friendship_status(db, requester=requester, addressee=addressee)
    return FriendshipStatusResponse(status=state.status, blocked_by=state.blocked_by)


@router.get("/blockedUsersList/{username}", response_model=BlockedUsersResponse)
async def blocked_users_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> BlockedUsersResponse:
    return BlockedUsersResponse(
        message="Blocked users retrieved",
        blocked_users=get_blocked_users_list(db, username=username),
    )


__all__ = ["router"]
