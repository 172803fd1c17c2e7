"""
Symmetric secret handling for the authenticated encryption service.

A secret is opaque AES key material. It can be supplied either as raw bytes
or as a base64 string; SecretKey makes that choice explicit at construction
time instead of at every encryption call.
"""

import os
from typing import Union

from .codec import base64_to_bytes, bytes_to_base64


# AES-128, AES-192 and AES-256
VALID_KEY_SIZES = (16, 24, 32)


class SecretKeyError(ValueError):
    """Raised when secret key material has an unusable size or type."""
    pass


def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite mutable key material with zeros.

    Args:
        data: Buffer to zero (must be mutable)
    """
    if not isinstance(data, (bytearray, memoryview)):
        raise TypeError("Data must be bytearray or memoryview")

    for i in range(len(data)):
        data[i] = 0


class SecretKey:
    """
    A container for AES key material that zeros itself when cleared.

    Only the internal buffer is wiped. Immutable copies made by bytes(key),
    including the one handed to AESGCM for each operation, and any buffer
    the caller built the key from, cannot be zeroed from Python. Callers
    wanting to wipe their own copy should pass a bytearray and clear it.

    Use as a context manager to wipe the key once the caller is done with it:

        >>> with SecretKey.from_base64(shared_secret) as key:
        ...     envelope = encrypt_data("payload", key)
    """

    def __init__(self, data: bytes):
        """
        Initialize with raw key bytes.

        Args:
            data: 16, 24 or 32 bytes of key material

        Raises:
            SecretKeyError: If the key size does not select an AES variant
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise SecretKeyError(f"Secret must be bytes, got {type(data).__name__}")
        if len(data) not in VALID_KEY_SIZES:
            raise SecretKeyError(
                f"Secret must be 16, 24 or 32 bytes, got {len(data)}"
            )

        self._data = bytearray(data)
        self._is_valid = True

    @classmethod
    def from_base64(cls, text: str) -> 'SecretKey':
        """
        Build a key from its standard base64 representation.

        Raises:
            DecodeError: If text is not valid base64
            SecretKeyError: If the decoded key has an invalid size
        """
        return cls(base64_to_bytes(text))

    @classmethod
    def generate(cls, length: int = 32) -> 'SecretKey':
        """Generate a random key of the given size."""
        if length not in VALID_KEY_SIZES:
            raise SecretKeyError(f"Secret must be 16, 24 or 32 bytes, got {length}")
        return cls(os.urandom(length))

    def __len__(self) -> int:
        if not self._is_valid:
            raise SecretKeyError("SecretKey has been cleared")
        return len(self._data)

    def __bytes__(self) -> bytes:
        if not self._is_valid:
            raise SecretKeyError("SecretKey has been cleared")
        return bytes(self._data)

    def __repr__(self) -> str:
        # Never show key material
        state = f"{len(self._data) * 8}-bit" if self._is_valid else "cleared"
        return f"SecretKey({state})"

    def __enter__(self) -> 'SecretKey':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()

    def __del__(self):
        if hasattr(self, '_data'):
            self.clear()

    @property
    def bit_length(self) -> int:
        """AES variant selected by this key (128, 192 or 256)."""
        return len(self) * 8

    def to_base64(self) -> str:
        """Standard base64 representation of the key."""
        return bytes_to_base64(bytes(self))

    def clear(self) -> None:
        """Zero the key material. The key is unusable afterwards."""
        secure_zero(self._data)
        self._is_valid = False

    def is_cleared(self) -> bool:
        return not self._is_valid


def as_secret_key(secret: Union['SecretKey', bytes, bytearray, str]) -> SecretKey:
    """
    Normalise the accepted secret representations to a SecretKey.

    Raw bytes are used as-is; a string is treated as base64 key material.
    No key derivation or padding is applied in either case.

    Raises:
        DecodeError: If a string secret is not valid base64
        SecretKeyError: If the key size is invalid or the type is unsupported
    """
    if isinstance(secret, SecretKey):
        return secret
    if isinstance(secret, str):
        return SecretKey.from_base64(secret)
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return SecretKey(secret)
    raise SecretKeyError(f"Unsupported secret type: {type(secret).__name__}")
