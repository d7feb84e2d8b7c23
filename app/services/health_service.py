"""Database and process checks backing the health endpoints."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Profile, User

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


@dataclass(frozen=True, slots=True)
class DatabaseHealth:
    healthy: bool
    response_time_ms: float
    users: int | None = None
    profiles: int | None = None
    error: str | None = None

    @property
    def status(self) -> str:
        return "healthy" if self.healthy else "unhealthy"


def uptime_seconds() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def ping_database(db: Session) -> bool:
    """Return whether a trivial round trip to the database succeeds."""

    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database ping failed")
        return False
    return True


def check_database(db: Session) -> DatabaseHealth:
    """Ping the database and collect basic row counts."""

    started = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
        users = db.scalar(select(func.count()).select_from(User)) or 0
        profiles = db.scalar(select(func.count()).select_from(Profile)) or 0
    except SQLAlchemyError as exc:
        elapsed = (time.perf_counter() - started) * 1000
        logger.exception("Database health check failed")
        return DatabaseHealth(healthy=False, response_time_ms=round(elapsed, 2), error=type(exc).__name__)

    elapsed = (time.perf_counter() - started) * 1000
    return DatabaseHealth(healthy=True, response_time_ms=round(elapsed, 2), users=users, profiles=profiles)


__all__ = ["DatabaseHealth", "check_database", "ping_database", "uptime_seconds", "utc_timestamp"]
