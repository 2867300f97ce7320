# PUBLIC_INTERFACE
"""
Security helpers: AES-256-GCM encryption/decryption of opaque byte blobs.

Blob layout is nonce|ciphertext|tag. The nonce is freshly drawn from the OS
CSPRNG on every call, so a KeyedCipher holds nothing but its key and can be
shared freely between threads.
"""
from __future__ import annotations

import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import CipherInitError, InvalidKeyError, InvalidSecretError, RandomnessError

KEY_SIZE = 32  # 256 bits for AES-256
NONCE_SIZE = 12  # 96 bits, standard for AES-GCM
TAG_SIZE = 16  # 128-bit GCM tag


# PUBLIC_INTERFACE
def generate_key() -> bytes:
    """Generate a random 256-bit AES key."""
    return secrets.token_bytes(KEY_SIZE)


def _normalize_key(key: object) -> bytes:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise InvalidKeyError("encryption key must be bytes")
    data = bytes(key)
    if len(data) != KEY_SIZE:
        raise InvalidKeyError(f"encryption key must be exactly {KEY_SIZE} bytes")
    return data


# PUBLIC_INTERFACE
class KeyedCipher:
    """Authenticated encryption of byte payloads under one fixed key."""

    __slots__ = ("_key",)

    def __init__(self, key: bytes):
        self._key = _normalize_key(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key=<{KEY_SIZE} bytes>)"

    def _get_aesgcm(self) -> AESGCM:
        try:
            return AESGCM(self._key)
        except (ValueError, TypeError) as err:
            raise CipherInitError() from err

    # PUBLIC_INTERFACE
    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt bytes using AES-GCM with random nonce. Returns nonce|ciphertext|tag."""
        aead = self._get_aesgcm()
        try:
            nonce = secrets.token_bytes(NONCE_SIZE)
        except (OSError, NotImplementedError) as err:
            raise RandomnessError() from err
        ct = aead.encrypt(nonce, bytes(plaintext), associated_data=None)
        return nonce + ct

    # PUBLIC_INTERFACE
    def decrypt(self, blob: bytes) -> bytes:
        """Decrypt bytes using AES-GCM. Input must be nonce|ciphertext|tag.

        Any failure (truncated blob, wrong key, tampered bytes) raises the same
        InvalidSecretError with no further detail.
        """
        aead = self._get_aesgcm()
        blob = bytes(blob)
        if len(blob) < NONCE_SIZE + TAG_SIZE:
            raise InvalidSecretError()
        nonce, ct = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        try:
            return aead.decrypt(nonce, ct, associated_data=None)
        except InvalidTag:
            raise InvalidSecretError() from None
