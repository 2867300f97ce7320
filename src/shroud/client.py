# PUBLIC_INTERFACE
"""
SecretClient and Secret: encrypt-then-serialize wrappers for sensitive values.

    client = SecretClient(key)
    secret = client.shroud({"username": "john_doe", "api_key": "..."})
    token = secret.encrypted_value           # store this
    restored = client.create_from_encrypted(token)
    value = restored.expose(dict[str, str])
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Optional

from .core.codec import decode, encode
from .core.errors import EmptyValueError, InvalidArgumentError, InvalidSecretError
from .core.logging import mask_secret_value
from .core.security import KeyedCipher
from .core.settings import ShroudSettings, get_settings


def _b64decode(token: str) -> bytes:
    # Line breaks from wrapped storage (PEM-style config files) are ignored.
    token = token.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidSecretError() from None


# PUBLIC_INTERFACE
@dataclass(frozen=True, eq=False, repr=False)
class Secret:
    """An encrypted value bound to the client able to decrypt it.

    Immutable; exposing it any number of times has no side effects.
    """

    _encrypted: str
    _client: "SecretClient"

    def __repr__(self) -> str:
        return f"Secret({mask_secret_value(self._encrypted)!r})"

    def __str__(self) -> str:
        return mask_secret_value(self._encrypted) or ""

    # PUBLIC_INTERFACE
    @property
    def encrypted_value(self) -> str:
        """Return the printable token for storage or transmission.

        This is the only accessor that yields the unmasked token.
        """
        return self._encrypted

    # PUBLIC_INTERFACE
    def expose(self, into: Any) -> Any:
        """Decrypt the secret and rebuild it as an instance of `into`.

        `into` is a type such as str, int, list[int], a pydantic model or a
        dataclass; pass typing.Any for the plain decoded tree.
        """
        return self._client._expose(self._encrypted, into)


# PUBLIC_INTERFACE
class SecretClient:
    """Encrypts values into Secrets and restores Secrets from stored tokens.

    Holds only its immutable key, so one client can serve many threads.
    """

    __slots__ = ("_cipher",)

    def __init__(self, key: bytes):
        self._cipher = KeyedCipher(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # PUBLIC_INTERFACE
    @classmethod
    def from_settings(cls, settings: Optional[ShroudSettings] = None) -> "SecretClient":
        """Build a client from SHROUD_KEY in settings (defaults to environment settings)."""
        settings = settings or get_settings()
        return cls(settings.key_bytes())

    # PUBLIC_INTERFACE
    def shroud(self, value: Any) -> Secret:
        """Serialize and encrypt value, returning a new Secret with a fresh nonce."""
        data = encode(value)
        blob = self._cipher.encrypt(data)
        return Secret(base64.b64encode(blob).decode("ascii"), self)

    # PUBLIC_INTERFACE
    def create_from_encrypted(self, encrypted: str) -> Secret:
        """Wrap a previously stored token.

        Only the base64 framing is checked here; decryption and structure are
        verified lazily by Secret.expose.
        """
        if not isinstance(encrypted, str):
            raise InvalidSecretError()
        if encrypted == "":
            raise EmptyValueError()
        _b64decode(encrypted)
        return Secret(encrypted, self)

    def _expose(self, encrypted: str, into: Any) -> Any:
        if into is None:
            raise InvalidArgumentError("destination cannot be None")
        blob = _b64decode(encrypted)
        plaintext = self._cipher.decrypt(blob)
        return decode(plaintext, into)
