"""
Itinera server configuration: all environment variables in one place.

Read from environment at import time.
"""

from __future__ import annotations

import logging
import os

from itinera.kernel.types import BLOCK_ERROR_POLICIES, EMIT_MARKER, PER_CHUNK, RESET_POLICIES, SessionOptions


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Rendering
    ON_BLOCK_ERROR: str = os.environ.get("ITINERA_ON_BLOCK_ERROR", EMIT_MARKER)
    RESET_POLICY: str = os.environ.get("ITINERA_RESET_POLICY", PER_CHUNK)

    # Stream simulation
    STREAM_CHUNK_SIZE: int = int(os.environ.get("ITINERA_STREAM_CHUNK_SIZE", "5"))
    STREAM_PROFILE: str = os.environ.get("ITINERA_STREAM_PROFILE", "instant")

    def session_options(self) -> SessionOptions:
        return SessionOptions(on_block_error=self.ON_BLOCK_ERROR, reset_policy=self.RESET_POLICY)


# Singleton instance
settings = Settings()

if settings.ON_BLOCK_ERROR not in BLOCK_ERROR_POLICIES:
    raise RuntimeError(f"ITINERA_ON_BLOCK_ERROR must be one of {sorted(BLOCK_ERROR_POLICIES)}")
if settings.RESET_POLICY not in RESET_POLICIES:
    raise RuntimeError(f"ITINERA_RESET_POLICY must be one of {sorted(RESET_POLICIES)}")
if settings.STREAM_CHUNK_SIZE < 1:
    raise RuntimeError("ITINERA_STREAM_CHUNK_SIZE must be positive")


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
