"""Registration, login and two-factor enrollment routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TwoFactorSetupResponse,
    TwoFactorTokenRequest,
    UserResponse,
)
from ..services import authenticate_user, create_user, disable_2fa, enable_2fa, generate_2fa_secret
from ..services.totp_service import qr_data_url

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    payload: RegisterRequest,
    db: Session = Depends(get_session),
) -> AuthResponse:
    user = create_user(db, username=payload.username, password=payload.password, email=payload.email)
    return AuthResponse(message="User created!", user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login_endpoint(
    payload: LoginRequest,
    db: Session = Depends(get_session),
) -> AuthResponse:
    user = authenticate_user(db, username=payload.username, password=payload.password, token=payload.token)
    return AuthResponse(message="User successfully logged in.", user=UserResponse.model_validate(user))


@router.post("/{username}/2fa/generate", response_model=TwoFactorSetupResponse)
async def generate_2fa_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> TwoFactorSetupResponse:
    provisioning = generate_2fa_secret(db, username=username)
    return TwoFactorSetupResponse(
        message="2FA secret generated",
        otpauth_url=provisioning.otpauth_url,
        qr=qr_data_url(provisioning.otpauth_url),
    )


@router.post("/{username}/2fa/enable", response_model=MessageResponse)
async def enable_2fa_endpoint(
    username: str,
    payload: TwoFactorTokenRequest,
    db: Session = Depends(get_session),
) -> MessageResponse:
    enable_2fa(db, username=username, token=payload.token)
    return MessageResponse(message="2FA enabled")


@router.post("/{username}/2fa/disable", response_model=MessageResponse)
async def disable_2fa_endpoint(
    username: str,
    db: Session = Depends(get_session),
) -> MessageResponse:
    disable_2fa(db, username=username)
    return MessageResponse(message="2FA disabled")


__all__ = ["router"]
