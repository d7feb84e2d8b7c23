"""Entry point for running the FastAPI application with Uvicorn."""
from __future__ import annotations

import logging
import os

import uvicorn

from app.config import get_settings


def main() -> None:
  settings = get_settings()
  logging.basicConfig(
      level=getattr(logging, settings.log_level.upper(), logging.INFO),
      format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
  )
  port = int(os.getenv("SOCIAL_SERVER_PORT", "8000"))
  reload = os.getenv("UVICORN_RELOAD", "false").lower() == "true"
  uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=reload, log_level=settings.log_level.lower())


if __name__ == "__main__":
  main()
