"""
Cryptographic primitives for mnemokey.

This package provides:
- BIP-39 mnemonic generation and validation
- Seed and Ed25519 keypair derivation (PBKDF2-HMAC-SHA256)
- Challenge signing
- Authenticated string encryption (AES-GCM)
- Base64 codecs
"""

from .codec import (
    DecodeError,
    base64_to_bytes,
    base64_url_to_bytes,
    bytes_to_base64,
    bytes_to_base64_url,
)
from .mnemonic import (
    WORDLIST,
    InvalidMnemonicError,
    ensure_valid_mnemonic,
    generate_mnemonic,
    validate_mnemonic,
)
from .kdf import (
    Keypair,
    KeyDerivationError,
    derive_keypair,
    derive_keypair_async,
    derive_seed,
)
from .signing import (
    SigningError,
    sign_challenge,
    sign_message,
    verify_challenge,
    verify_signature,
)
from .secret import SecretKey, SecretKeyError
from .aead import (
    AuthenticationError,
    EncryptedEnvelope,
    MalformedEnvelopeError,
    PlaintextEncodingError,
    decrypt_data,
    encrypt_data,
)

__all__ = [
    'DecodeError',
    'base64_to_bytes',
    'base64_url_to_bytes',
    'bytes_to_base64',
    'bytes_to_base64_url',
    'WORDLIST',
    'InvalidMnemonicError',
    'ensure_valid_mnemonic',
    'generate_mnemonic',
    'validate_mnemonic',
    'Keypair',
    'KeyDerivationError',
    'derive_keypair',
    'derive_keypair_async',
    'derive_seed',
    'SigningError',
    'sign_challenge',
    'sign_message',
    'verify_challenge',
    'verify_signature',
    'SecretKey',
    'SecretKeyError',
    'AuthenticationError',
    'EncryptedEnvelope',
    'MalformedEnvelopeError',
    'PlaintextEncodingError',
    'decrypt_data',
    'encrypt_data',
]
