"""TOTP secret provisioning and verification."""
from __future__ import annotations

import base64
import io

import pyotp
import qrcode

from ..config import get_settings


def generate_secret() -> str:
    return pyotp.random_base32()


def provisioning_uri(secret: str, username: str) -> str:
    """Build the ``otpauth://`` URI an authenticator app scans for ``username``."""

    issuer = get_settings().two_factor_issuer
    return pyotp.totp.TOTP(secret).provisioning_uri(name=f"{issuer} ({username})", issuer_name=issuer)


def qr_data_url(uri: str) -> str:
    """Render ``uri`` as a PNG QR code encoded into a ``data:`` URL."""

    image = qrcode.make(uri)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def verify_code(secret: str, token: str) -> bool:
    """Return whether ``token`` is valid for ``secret`` within the configured step window."""

    candidate = (token or "").strip()
    if not candidate:
        return False
    return pyotp.TOTP(secret).verify(candidate, valid_window=get_settings().totp_valid_window)


__all__ = ["generate_secret", "provisioning_uri", "qr_data_url", "verify_code"]
