"""Unit tests for the password complexity policy."""
from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_social_backend.db")

from app.services.password_policy import validate_password  # noqa: E402


def test_strong_password_passes() -> None:
    check = validate_password("Str0ng!Pass")
    assert check.valid
    assert check.errors == []


def test_short_password_reports_every_failed_rule() -> None:
    check = validate_password("short")
    assert not check.valid
    assert len(check.errors) == 4
    assert any("at least 8" in reason for reason in check.errors)
    assert any("uppercase" in reason for reason in check.errors)
    assert any("number" in reason for reason in check.errors)
    assert any("special" in reason for reason in check.errors)


def test_overlong_password_is_rejected() -> None:
    check = validate_password("Aa1!" * 6)
    assert not check.valid
    assert check.errors == ["Password must be at most 20 characters long."]


def test_bounds_can_be_overridden() -> None:
    assert validate_password("Aa1!", min_length=4).valid
    assert not validate_password("Aa1!xyz", max_length=6).valid
