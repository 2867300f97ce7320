# PUBLIC_INTERFACE
"""
shroud: keep sensitive values encrypted at rest while working with native data in code.

Values are serialized to canonical JSON, sealed with AES-256-GCM and carried as
base64 tokens.
"""

from .client import Secret, SecretClient
from .core.errors import (
    CipherInitError,
    DeserializationError,
    EmptyValueError,
    ErrorCode,
    InvalidArgumentError,
    InvalidKeyError,
    InvalidSecretError,
    RandomnessError,
    SerializationError,
    ShroudError,
)
from .core.security import KEY_SIZE, KeyedCipher, generate_key

__version__ = "0.1.0"

__all__ = [
    "KEY_SIZE",
    "CipherInitError",
    "DeserializationError",
    "EmptyValueError",
    "ErrorCode",
    "InvalidArgumentError",
    "InvalidKeyError",
    "InvalidSecretError",
    "KeyedCipher",
    "RandomnessError",
    "Secret",
    "SecretClient",
    "SerializationError",
    "ShroudError",
    "generate_key",
]
