"""
AES-GCM authenticated encryption of string payloads.

Encrypted payloads travel as a JSON envelope with three standard base64
string fields:

    {"data": <ciphertext>, "iv": <12-byte nonce>, "tag": <16-byte GCM tag>}

The AES variant (128/192/256) follows the length of the secret. A fresh
random nonce is drawn for every encryption.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .codec import DecodeError, base64_to_bytes, bytes_to_base64
from .secret import SecretKey, as_secret_key

logger = logging.getLogger(__name__)

NONCE_SIZE = 12
TAG_SIZE = 16
ENVELOPE_FIELDS = ("data", "iv", "tag")

Secret = Union[SecretKey, bytes, bytearray, str]


class MalformedEnvelopeError(ValueError):
    """Raised when an envelope is not a JSON object with data, iv and tag strings."""
    pass


class PlaintextEncodingError(ValueError):
    """Raised when a plaintext string cannot be encoded as UTF-8."""
    pass


class AuthenticationError(Exception):
    """Raised when a ciphertext cannot be decrypted and authenticated."""

    def __init__(self, message: str = "failed to decrypt"):
        super().__init__(message)


@dataclass(frozen=True)
class EncryptedEnvelope:
    """
    Raw contents of an encrypted payload.

    Fields:
        data: Ciphertext (same length as the UTF-8 plaintext)
        iv: 12-byte GCM nonce
        tag: 16-byte GCM authentication tag
    """
    data: bytes
    iv: bytes
    tag: bytes

    def to_dict(self) -> Dict[str, str]:
        """Envelope with every field base64-encoded."""
        return {
            "data": bytes_to_base64(self.data),
            "iv": bytes_to_base64(self.iv),
            "tag": bytes_to_base64(self.tag),
        }

    def to_json(self) -> str:
        """Serialize to the JSON wire format."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, fields: Any) -> 'EncryptedEnvelope':
        """
        Build an envelope from its base64 field mapping.

        Only the structure is checked here. Field values that are not valid
        base64, or a nonce or tag of the wrong size, surface as
        AuthenticationError so that a corrupted envelope cannot be told apart
        from a forged one.

        Raises:
            MalformedEnvelopeError: If fields is not a mapping with string
                values for data, iv and tag
            AuthenticationError: If a field cannot be decoded
        """
        if not isinstance(fields, dict):
            raise MalformedEnvelopeError("Envelope must be a JSON object")

        missing = [name for name in ENVELOPE_FIELDS if name not in fields]
        if missing:
            raise MalformedEnvelopeError(f"Envelope missing fields: {', '.join(missing)}")

        for name in ENVELOPE_FIELDS:
            if not isinstance(fields[name], str):
                raise MalformedEnvelopeError(f"Envelope field '{name}' must be a string")

        try:
            data = base64_to_bytes(fields["data"])
            iv = base64_to_bytes(fields["iv"])
            tag = base64_to_bytes(fields["tag"])
        except DecodeError as e:
            raise AuthenticationError() from e

        return cls(data=data, iv=iv, tag=tag)

    @classmethod
    def from_json(cls, text: str) -> 'EncryptedEnvelope':
        """
        Parse the JSON wire format.

        Raises:
            MalformedEnvelopeError: If text is not JSON or lacks required fields
            AuthenticationError: If a field cannot be decoded
        """
        try:
            fields = json.loads(text)
        except (TypeError, ValueError, RecursionError) as e:
            raise MalformedEnvelopeError(f"Envelope is not valid JSON: {e}") from e

        return cls.from_dict(fields)


def encrypt_envelope(plaintext: str, secret: Secret) -> EncryptedEnvelope:
    """
    Encrypt a string and return the raw envelope.

    Args:
        plaintext: Text to protect (any Unicode, including NUL)
        secret: SecretKey, raw key bytes, or base64 key string

    Returns:
        EncryptedEnvelope with a fresh random nonce

    Raises:
        DecodeError: If a string secret is not valid base64
        SecretKeyError: If the secret is not 16, 24 or 32 bytes
        PlaintextEncodingError: If plaintext holds lone surrogates
    """
    key = as_secret_key(secret)

    try:
        encoded = plaintext.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PlaintextEncodingError(f"Plaintext is not encodable as UTF-8: {e.reason}") from e

    nonce = os.urandom(NONCE_SIZE)
    aesgcm = AESGCM(bytes(key))

    # AES-GCM returns ciphertext with the 16-byte tag appended
    ciphertext_with_tag = aesgcm.encrypt(nonce, encoded, None)

    logger.debug("Encrypted %d-byte payload with AES-%d-GCM",
                 len(ciphertext_with_tag) - TAG_SIZE, key.bit_length)

    return EncryptedEnvelope(
        data=ciphertext_with_tag[:-TAG_SIZE],
        iv=nonce,
        tag=ciphertext_with_tag[-TAG_SIZE:],
    )


def decrypt_envelope(envelope: EncryptedEnvelope, secret: Secret) -> str:
    """
    Authenticate and decrypt a raw envelope.

    Raises:
        AuthenticationError: If the tag does not verify or the envelope is
            otherwise unusable. No plaintext is returned in that case.
        SecretKeyError: If the secret is not 16, 24 or 32 bytes
    """
    key = as_secret_key(secret)

    if len(envelope.iv) != NONCE_SIZE or len(envelope.tag) != TAG_SIZE:
        logger.warning("Rejected envelope with invalid nonce or tag size")
        raise AuthenticationError()

    aesgcm = AESGCM(bytes(key))

    try:
        plaintext = aesgcm.decrypt(envelope.iv, envelope.data + envelope.tag, None)
        return plaintext.decode("utf-8")
    except (InvalidTag, UnicodeDecodeError) as e:
        logger.warning("Envelope failed authentication")
        raise AuthenticationError() from e


def encrypt_data(plaintext: str, secret: Secret) -> str:
    """
    Encrypt a string into the JSON envelope format.

    Args:
        plaintext: Text to protect
        secret: SecretKey, raw key bytes, or base64 key string

    Returns:
        JSON object string with base64 "data", "iv" and "tag" fields
    """
    return encrypt_envelope(plaintext, secret).to_json()


def decrypt_data(envelope: Union[EncryptedEnvelope, Dict[str, Any], str],
                 secret: Secret) -> str:
    """
    Decrypt an envelope produced by encrypt_data.

    Args:
        envelope: JSON string, field mapping, or EncryptedEnvelope
        secret: SecretKey, raw key bytes, or base64 key string

    Returns:
        Decrypted plaintext

    Raises:
        MalformedEnvelopeError: If the envelope structure is invalid
        AuthenticationError: If decryption or tag verification fails
    """
    if isinstance(envelope, str):
        envelope = EncryptedEnvelope.from_json(envelope)
    elif not isinstance(envelope, EncryptedEnvelope):
        envelope = EncryptedEnvelope.from_dict(envelope)

    return decrypt_envelope(envelope, secret)
