"""
Binary-to-text encoding helpers for mnemokey.

Standard base64 is used for the encrypted envelope fields, unpadded URL-safe
base64 for signatures sent to a challenge verifier.
"""

import base64
import binascii
from typing import Union


class DecodeError(ValueError):
    """Raised when a base64 string cannot be decoded."""
    pass


_URL_SAFE = str.maketrans("+/", "-_")
_STANDARD = str.maketrans("-_", "+/")


def bytes_to_base64(data: Union[bytes, bytearray, memoryview]) -> str:
    """
    Encode bytes as standard base64 (RFC 4648 section 4).

    Args:
        data: Bytes to encode

    Returns:
        Padded base64 string without line breaks
    """
    return base64.b64encode(bytes(data)).decode("ascii")


def bytes_to_base64_url(data: Union[bytes, bytearray, memoryview]) -> str:
    """
    Encode bytes as URL-safe base64 without padding (RFC 4648 section 5).

    The result never contains '+', '/' or '='.
    """
    return bytes_to_base64(data).translate(_URL_SAFE).rstrip("=")


def base64_to_bytes(text: str) -> bytes:
    """
    Decode a standard base64 string.

    Args:
        text: Padded base64 string

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the input has characters outside the alphabet,
            bad padding, or is not a string
    """
    if not isinstance(text, str):
        raise DecodeError(f"Expected base64 string, got {type(text).__name__}")
    if len(text) % 4:
        raise DecodeError(f"Invalid base64 length: {len(text)}")

    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 input: {e}") from e


def base64_url_to_bytes(text: str) -> bytes:
    """Decode URL-safe base64, with or without trailing padding."""
    if not isinstance(text, str):
        raise DecodeError(f"Expected base64 string, got {type(text).__name__}")
    if "+" in text or "/" in text:
        raise DecodeError("Standard base64 characters in URL-safe input")

    stripped = text.rstrip("=")
    padded = stripped + "=" * (-len(stripped) % 4)
    return base64_to_bytes(padded.translate(_STANDARD))
