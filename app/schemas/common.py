"""Shared response envelopes."""
from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


__all__ = ["MessageResponse"]
