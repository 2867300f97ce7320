from __future__ import annotations

import base64
import binascii
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .errors import InvalidKeyError
from .logging import get_logger
from .security import KEY_SIZE

logger = get_logger(__name__)


class ShroudSettings(BaseModel):
    """Configuration for applications that build a SecretClient from the environment."""

    SHROUD_KEY: Optional[str] = Field(
        default=None,
        description=f"Base64 (standard alphabet) encoding of a {KEY_SIZE}-byte encryption key",
    )
    LOG_LEVEL: str = Field(default="INFO", description="Root log level used by configure_logging")
    LOG_FORMAT: str = Field(default="plain", description="'json' or 'plain'")

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "ShroudSettings":
        """Create settings from environment variables (and a .env file if present)."""
        load_dotenv()
        settings = cls(
            SHROUD_KEY=os.getenv("SHROUD_KEY") or None,
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
            LOG_FORMAT=os.getenv("LOG_FORMAT", "plain"),
        )
        # Never log the key itself, only whether one was supplied.
        logger.debug("settings_loaded", extra={"key_configured": settings.SHROUD_KEY is not None})
        return settings

    # PUBLIC_INTERFACE
    def key_bytes(self) -> bytes:
        """Decode SHROUD_KEY, raising InvalidKeyError if it is missing, malformed or the wrong size."""
        raw = (self.SHROUD_KEY or "").strip()
        if not raw:
            raise InvalidKeyError("SHROUD_KEY is not set")
        try:
            key = base64.b64decode(raw, validate=True)
        except binascii.Error as err:
            raise InvalidKeyError("SHROUD_KEY must be valid base64") from err
        if len(key) != KEY_SIZE:
            raise InvalidKeyError(f"SHROUD_KEY must decode to {KEY_SIZE} bytes")
        return key


@lru_cache(maxsize=1)
def get_settings() -> ShroudSettings:
    """Singleton access to settings loaded from environment."""
    return ShroudSettings.from_env()
