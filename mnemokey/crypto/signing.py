"""
Ed25519 challenge signing.

Signatures are deterministic per (message, key) pair. For transport they are
encoded as unpadded URL-safe base64, which verifiers compare byte for byte.
"""

import logging
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .codec import DecodeError, base64_url_to_bytes, bytes_to_base64_url
from .kdf import (
    Keypair,
    PRIVATE_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
    SEED_LENGTH,
    keypair_from_seed,
)

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64


class SigningError(Exception):
    """Raised when a message cannot be signed with the given key."""
    pass


def _load_private_key(private_key: bytes) -> Ed25519PrivateKey:
    if len(private_key) == SEED_LENGTH:
        return Ed25519PrivateKey.from_private_bytes(bytes(private_key))

    if len(private_key) != PRIVATE_KEY_LENGTH:
        raise SigningError(
            f"Private key must be {SEED_LENGTH} or {PRIVATE_KEY_LENGTH} bytes, "
            f"got {len(private_key)}"
        )

    seed = bytes(private_key[:SEED_LENGTH])
    if keypair_from_seed(seed).private_key != bytes(private_key):
        raise SigningError("Private key does not match its embedded public key")
    return Ed25519PrivateKey.from_private_bytes(seed)


def sign_message(message: str, private_key: bytes) -> bytes:
    """
    Sign the UTF-8 bytes of message with Ed25519.

    Args:
        message: Text to sign
        private_key: 32-byte seed or 64-byte expanded private key

    Returns:
        64-byte signature

    Raises:
        SigningError: If the key has the wrong size or is inconsistent
    """
    signing_key = _load_private_key(private_key)
    return signing_key.sign(message.encode("utf-8"))


def sign_challenge(keypair: Keypair, challenge: str) -> str:
    """
    Answer an authentication challenge.

    Args:
        keypair: Account keypair
        challenge: Challenge string issued by the verifier

    Returns:
        Signature as unpadded URL-safe base64
    """
    signature = sign_message(challenge, keypair.private_key)
    logger.debug("Signed challenge for public key %s", keypair.public_key.hex())
    return bytes_to_base64_url(signature)


def verify_signature(message: str, signature: bytes, public_key: bytes) -> bool:
    """Check an Ed25519 signature over the UTF-8 bytes of message."""
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False

    try:
        verify_key = Ed25519PublicKey.from_public_bytes(bytes(public_key))
        verify_key.verify(bytes(signature), message.encode("utf-8"))
        return True
    except (InvalidSignature, ValueError):
        return False


def verify_challenge(public_key: Union[bytes, Keypair], challenge: str,
                     encoded_signature: str) -> bool:
    """
    Verifier-side counterpart of sign_challenge.

    Returns False for malformed signature encodings as well as for
    signatures that do not verify.
    """
    if isinstance(public_key, Keypair):
        public_key = public_key.public_key

    try:
        signature = base64_url_to_bytes(encoded_signature)
    except DecodeError:
        return False

    return verify_signature(challenge, signature, public_key)
