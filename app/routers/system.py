"""System-level routes for liveness, readiness and health checks."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse

from ..config import get_settings
from ..database import get_session
from ..services import check_database, ping_database
from ..services.health_service import uptime_seconds, utc_timestamp

router = APIRouter(tags=["system"])


class DatabaseHealthSchema(BaseModel):
    status: str
    response_time_ms: float
    users: int | None = None
    profiles: int | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    message: str
    status: str
    version: str
    uptime_seconds: float
    database: DatabaseHealthSchema


class ReadinessResponse(BaseModel):
    status: str
    ready: bool


class LivenessResponse(BaseModel):
    status: str
    alive: bool
    uptime_seconds: float
    timestamp: str


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_session)) -> HealthResponse:
    database = check_database(db)
    return HealthResponse(
        message="ok",
        status="healthy" if database.healthy else "degraded",
        version=get_settings().api_version,
        uptime_seconds=uptime_seconds(),
        database=DatabaseHealthSchema(
            status=database.status,
            response_time_ms=database.response_time_ms,
            users=database.users,
            profiles=database.profiles,
            error=database.error,
        ),
    )


@router.get("/ready", response_model=ReadinessResponse)
def ready(db: Session = Depends(get_session)) -> JSONResponse:
    if ping_database(db):
        return JSONResponse(status_code=status.HTTP_200_OK, content=ReadinessResponse(status="ready", ready=True).model_dump())
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ReadinessResponse(status="not ready", ready=False).model_dump(),
    )


@router.get("/live", response_model=LivenessResponse)
def live() -> LivenessResponse:
    return LivenessResponse(status="alive", alive=True, uptime_seconds=uptime_seconds(), timestamp=utc_timestamp())


__all__ = ["router"]
