"""Business logic for friend requests, friendships and blocking."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..models import Friendship, FriendshipStatus, Profile, User, UserStatus
from .errors import ErrorKind, FriendshipServiceError

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = (FriendshipStatus.PENDING, FriendshipStatus.ACCEPTED)


@dataclass(frozen=True, slots=True)
class FriendSummary:
    id: UUID
    username: str
    status: UserStatus | None


@dataclass(frozen=True, slots=True)
class FriendshipState:
    status: FriendshipStatus
    blocked_by: str | None


def _pair_clause(a: str, b: str):
    """Match either orientation of the unordered pair ``{a, b}``."""

    return or_(
        and_(Friendship.requester_username == a, Friendship.addressee_username == b),
        and_(Friendship.requester_username == b, Friendship.addressee_username == a),
    )


def _find_between(db: Session, a: str, b: str, *statuses: FriendshipStatus) -> Friendship | None:
    stmt = select(Friendship).where(_pair_clause(a, b))
    if statuses:
        stmt = stmt.where(Friendship.status.in_(statuses))
    return db.scalars(stmt.order_by(Friendship.created_at.desc())).first()


def _pair_rows(db: Session, a: str, b: str) -> list[Friendship]:
    stmt = select(Friendship).where(_pair_clause(a, b)).order_by(Friendship.created_at.desc())
    return list(db.scalars(stmt))


def _current_row(rows: list[Friendship]) -> Friendship | None:
    """Pick the row that describes the pair: a block first, then an active relationship, then the newest."""

    for wanted in (FriendshipStatus.BLOCKED, FriendshipStatus.ACCEPTED, FriendshipStatus.PENDING):
        for row in rows:
            if row.status == wanted:
                return row
    return rows[0] if rows else None


def _require_users(db: Session, *usernames: str) -> None:
    found = set(db.scalars(select(User.username).where(User.username.in_(usernames))))
    missing = [name for name in usernames if name not in found]
    if missing:
        raise FriendshipServiceError(ErrorKind.NOT_FOUND, "User not found", error={"usernames": missing})


def _commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s", failure_message)
        raise FriendshipServiceError(ErrorKind.INTERNAL, failure_message) from exc


def send_friend_request(db: Session, *, from_username: str, to_username: str) -> Friendship:
    """Create a PENDING request from ``from_username`` to ``to_username``.

    Raises
    ------
    FriendshipServiceError
        ``INVALID_INPUT`` for a self request, ``CONFLICT`` when the pair already
        has a pending or accepted relationship in either direction or is blocked.
        ``NOT_FOUND`` when either user does not exist.
    """

    if from_username == to_username:
        raise FriendshipServiceError(ErrorKind.INVALID_INPUT, "You cannot send a friend request to yourself.")
    _require_users(db, from_username, to_username)

    if _find_between(db, from_username, to_username, FriendshipStatus.BLOCKED) is not None:
        raise FriendshipServiceError(ErrorKind.CONFLICT, "Friend requests between these users are blocked")
    if _find_between(db, from_username, to_username, *_ACTIVE_STATUSES) is not None:
        raise FriendshipServiceError(ErrorKind.CONFLICT, "Friendship already exists or pending")

    friendship = Friendship(
        requester_username=from_username,
        addressee_username=to_username,
        status=FriendshipStatus.PENDING,
    )
    db.add(friendship)
    _commit(db, "Failed to send friend request")
    db.refresh(friendship)
    logger.info("Friend request %s -> %s", from_username, to_username)
    return friendship


def get_friend_requests(db: Session, *, username: str) -> list[Friendship]:
    """Return PENDING requests addressed to ``username`` with the requester loaded."""

    stmt = (
        select(Friendship)
        .where(Friendship.addressee_username == username, Friendship.status == FriendshipStatus.PENDING)
        .options(selectinload(Friendship.requester))
        .order_by(Friendship.created_at.asc())
    )
    return list(db.scalars(stmt))


def respond_to_friend_request(db: Session, *, friendship_id: UUID, status: FriendshipStatus) -> Friendship:
    friendship = db.get(Friendship, friendship_id)
    if friendship is None:
        raise FriendshipServiceError(ErrorKind.NOT_FOUND, "Friend request not found")

    friendship.status = status
    _commit(db, "Failed to update friend request")
    db.refresh(friendship)
    logger.info("Friend request %s marked %s", friendship_id, status)
    return friendship


def list_friends(db: Session, *, username: str) -> list[FriendSummary]:
    """Return the other party of every ACCEPTED relationship touching ``username``."""

    stmt = (
        select(Friendship)
        .where(
            Friendship.status == FriendshipStatus.ACCEPTED,
            or_(Friendship.requester_username == username, Friendship.addressee_username == username),
        )
        .order_by(Friendship.created_at.asc())
    )
    friendships = list(db.scalars(stmt))
    counterparts = [friendship.counterpart(username) for friendship in friendships]
    if not counterparts:
        return []

    users = {user.username: user for user in db.scalars(select(User).where(User.username.in_(counterparts)))}
    presence = dict(db.execute(select(Profile.username, Profile.status).where(Profile.username.in_(counterparts))).all())

    friends: list[FriendSummary] = []
    for name in counterparts:
        user = users.get(name)
        if user is None:
            continue
        friends.append(FriendSummary(id=user.id, username=user.username, status=presence.get(name)))
    return friends


def remove_friend(db: Session, *, username: str, friend_username: str) -> int:
    """Delete ACCEPTED rows for the pair; returns how many were removed (zero is fine)."""

    result = db.execute(
        delete(Friendship).where(
            _pair_clause(username, friend_username),
            Friendship.status == FriendshipStatus.ACCEPTED,
        )
    )
    _commit(db, "Failed to remove friend")
    if result.rowcount:
        logger.info("Removed friendship between %s and %s", username, friend_username)
    return result.rowcount or 0


def block_user(db: Session, *, blocker: str, blocked: str) -> Friendship:
    """Mark the pair BLOCKED by ``blocker``, creating the row if the pair has none.

    Every other row of the pair is folded into the blocked one so no pending or
    accepted record survives the block.
    """

    if blocker == blocked:
        raise FriendshipServiceError(ErrorKind.INVALID_INPUT, "You cannot block yourself.")
    _require_users(db, blocker, blocked)

    rows = _pair_rows(db, blocker, blocked)
    friendship = _current_row(rows)
    if friendship is None:
        friendship = Friendship(
            requester_username=blocker,
            addressee_username=blocked,
            status=FriendshipStatus.BLOCKED,
            blocked_by_username=blocker,
            previous_status=None,
        )
        db.add(friendship)
    else:
        for row in rows:
            if row is not friendship:
                db.delete(row)
        if friendship.status != FriendshipStatus.BLOCKED:
            friendship.previous_status = friendship.status
        friendship.status = FriendshipStatus.BLOCKED
        friendship.blocked_by_username = blocker

    _commit(db, "Failed to block user")
    db.refresh(friendship)
    logger.info("%s blocked %s", blocker, blocked)
    return friendship


def unblock_user(db: Session, *, unblocker: str, blocked: str) -> Friendship | None:
    """Lift a block placed by ``unblocker``.

    A row the block itself created is deleted and ``None`` is returned; a row that
    held an earlier relationship rests at DECLINED.
    """

    stmt = select(Friendship).where(
        _pair_clause(unblocker, blocked),
        Friendship.status == FriendshipStatus.BLOCKED,
        Friendship.blocked_by_username == unblocker,
    )
    friendship = db.scalars(stmt).first()
    if friendship is None:
        raise FriendshipServiceError(ErrorKind.NOT_FOUND, "No blocked relationship found")

    if friendship.previous_status is None:
        db.delete(friendship)
        _commit(db, "Failed to unblock user")
        logger.info("%s unblocked %s; block record removed", unblocker, blocked)
        return None

    friendship.status = FriendshipStatus.DECLINED
    friendship.blocked_by_username = None
    friendship.previous_status = None
    _commit(db, "Failed to unblock user")
    db.refresh(friendship)
    logger.info("%s unblocked %s", unblocker, blocked)
    return friendship


def get_friendship_status(db: Session, *, requester: str, addressee: str) -> FriendshipState:
    friendship = _current_row(_pair_rows(db, requester, addressee))
    if friendship is None:
        return FriendshipState(status=FriendshipStatus.DECLINED, blocked_by=None)
    return FriendshipState(status=friendship.status, blocked_by=friendship.blocked_by_username)


def get_blocked_users_list(db: Session, *, username: str) -> list[str]:
    """Usernames on the other side of every BLOCKED row touching ``username``."""

    stmt = (
        select(Friendship)
        .where(
            Friendship.status == FriendshipStatus.BLOCKED,
            or_(Friendship.requester_username == username, Friendship.addressee_username == username),
        )
        .order_by(Friendship.created_at.asc())
    )
    return [friendship.counterpart(username) for friendship in db.scalars(stmt)]


__all__ = [
    "FriendSummary",
    "FriendshipState",
    "block_user",
    "get_blocked_users_list",
    "get_friend_requests",
    "get_friendship_status",
    "list_friends",
    "remove_friend",
    "respond_to_friend_request",
    "send_friend_request",
    "unblock_user",
]
