# PUBLIC_INTERFACE
"""
Error types raised by shroud.

Every failure surfaces as a ShroudError subclass carrying a stable code.
"""
from __future__ import annotations


class ErrorCode:
    INVALID_KEY = "INVALID_KEY"
    EMPTY_VALUE = "EMPTY_VALUE"
    INVALID_SECRET = "INVALID_SECRET"
    SERIALIZATION = "SERIALIZATION"
    DESERIALIZATION = "DESERIALIZATION"
    CIPHER_INIT = "CIPHER_INIT"
    RANDOMNESS = "RANDOMNESS"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


# PUBLIC_INTERFACE
class ShroudError(Exception):
    """Base class for all shroud errors."""

    code: str = "INTERNAL"
    message: str = "shroud error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidKeyError(ShroudError):
    code = ErrorCode.INVALID_KEY
    message = "invalid encryption key"


class EmptyValueError(ShroudError):
    code = ErrorCode.EMPTY_VALUE
    message = "value cannot be empty"


class InvalidSecretError(ShroudError):
    """Malformed token, truncated payload or failed authentication.

    These cases are deliberately indistinguishable to callers.
    """

    code = ErrorCode.INVALID_SECRET
    message = "invalid secret format"


class SerializationError(ShroudError):
    code = ErrorCode.SERIALIZATION
    message = "failed to serialize value"


class DeserializationError(ShroudError):
    code = ErrorCode.DESERIALIZATION
    message = "failed to deserialize value"


class CipherInitError(ShroudError):
    code = ErrorCode.CIPHER_INIT
    message = "failed to create cipher"


class RandomnessError(ShroudError):
    code = ErrorCode.RANDOMNESS
    message = "failed to generate nonce"


class InvalidArgumentError(ShroudError):
    code = ErrorCode.INVALID_ARGUMENT
    message = "invalid argument"
