"""
Demo runner: shroud a string and a structured record, then restore them.

Usage:
    SHROUD_KEY=$(head -c 32 /dev/urandom | base64) python -m shroud.run

Without SHROUD_KEY an ephemeral key is generated, so tokens printed by one run
cannot be opened by the next.
"""
import base64

from pydantic import BaseModel

from .client import SecretClient
from .core.errors import InvalidKeyError, ShroudError
from .core.logging import configure_logging, get_logger, mask_secret_value
from .core.security import generate_key
from .core.settings import get_settings

logger = get_logger(__name__)


class User(BaseModel):
    username: str
    api_key: str


def _build_client() -> SecretClient:
    settings = get_settings()
    try:
        return SecretClient.from_settings(settings)
    except InvalidKeyError as err:
        if settings.SHROUD_KEY:
            raise
        logger.warning("SHROUD_KEY not set (%s); using an ephemeral key for this run", err)
        key = generate_key()
        logger.info("ephemeral_key", extra={"key": mask_secret_value(base64.b64encode(key).decode("ascii"))})
        return SecretClient(key)


# PUBLIC_INTERFACE
def main() -> int:
    """Entry point for the shroud demo; returns a process exit code."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    try:
        client = _build_client()

        string_secret = client.shroud("my-sensitive-data")
        print(f"String value: {string_secret.expose(str)}")

        user = User(username="john_doe", api_key="secret-api-key")
        struct_secret = client.shroud(user)

        encrypted_value = struct_secret.encrypted_value
        print(f"Encrypted value: {encrypted_value}")

        retrieved_secret = client.create_from_encrypted(encrypted_value)
        retrieved_user = retrieved_secret.expose(User)
        print(f"Retrieved user: {retrieved_user!r}")
    except ShroudError as err:
        logger.error("demo_failed", extra={"code": err.code, "error": str(err)})
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
