"""Pydantic schemas for authentication and two-factor endpoints."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from .users import UserResponse


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    # Complexity rules are enforced by the password policy, not here.
    password: str = Field(..., min_length=1, max_length=128)
    email: EmailStr | None = None


class LoginRequest(BaseModel):
    username: str
    password: str
    token: str | None = Field(default=None, description="Current TOTP code when 2FA is enabled")


class AuthResponse(BaseModel):
    message: str
    user: UserResponse


class TwoFactorTokenRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=16)


class TwoFactorSetupResponse(BaseModel):
    message: str
    otpauth_url: str
    qr: str = Field(..., description="PNG QR code of otpauth_url as a data URL")


__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TwoFactorSetupResponse",
    "TwoFactorTokenRequest",
]
