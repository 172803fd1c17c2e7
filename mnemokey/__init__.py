"""
mnemokey: account keys from a mnemonic phrase.

Derives a deterministic Ed25519 keypair from a BIP-39 mnemonic, signs
authentication challenges with it, and protects string payloads with AES-GCM
under a shared secret.

Basic Usage:
    >>> from mnemokey import create_account, open_account
    >>>
    >>> account = create_account()
    >>> phrase = account.mnemonic          # show to the user once
    >>>
    >>> restored = open_account(phrase)
    >>> signature = restored.sign_challenge("challenge-from-server")
    >>> restored.verify_challenge("challenge-from-server", signature)
    True
"""

__version__ = "1.0.0"

from typing import Optional

from .config import MnemokeyConfig, ConfigError
from .crypto.codec import (
    DecodeError,
    base64_to_bytes,
    base64_url_to_bytes,
    bytes_to_base64,
    bytes_to_base64_url,
)
from .crypto.mnemonic import (
    DEFAULT_STRENGTH,
    InvalidMnemonicError,
    ensure_valid_mnemonic,
    generate_mnemonic,
    validate_mnemonic,
)
from .crypto.kdf import (
    Keypair,
    KeyDerivationError,
    derive_keypair,
    derive_keypair_async,
    derive_seed,
)
from .crypto.signing import SigningError, sign_challenge, verify_challenge
from .crypto.secret import SecretKey, SecretKeyError
from .crypto.aead import (
    AuthenticationError,
    EncryptedEnvelope,
    MalformedEnvelopeError,
    PlaintextEncodingError,
    decrypt_data,
    encrypt_data,
)


class Account:
    """
    A mnemonic together with the keypair derived from it.

    Holds keys in memory only; nothing is persisted.
    """

    def __init__(self, mnemonic: str, keypair: Keypair):
        self.mnemonic = mnemonic
        self.keypair = keypair

    def __repr__(self) -> str:
        return f"Account(public_key={self.public_key_b64url})"

    @property
    def public_key(self) -> bytes:
        return self.keypair.public_key

    @property
    def public_key_b64url(self) -> str:
        """Public key in the same encoding as challenge signatures."""
        return bytes_to_base64_url(self.keypair.public_key)

    def sign_challenge(self, challenge: str) -> str:
        """
        Sign a challenge string.

        Returns:
            Signature as unpadded URL-safe base64
        """
        return sign_challenge(self.keypair, challenge)

    def verify_challenge(self, challenge: str, signature: str) -> bool:
        """Check a signature produced by sign_challenge for this account."""
        return verify_challenge(self.keypair.public_key, challenge, signature)


def create_account(strength: Optional[int] = None,
                   config: Optional[MnemokeyConfig] = None) -> Account:
    """
    Generate a fresh mnemonic and derive its account.

    Args:
        strength: Mnemonic entropy in bits; taken from config when None
        config: Settings to read the default strength from

    Returns:
        New Account
    """
    if strength is None:
        strength = config.mnemonic_strength if config is not None else DEFAULT_STRENGTH

    mnemonic = generate_mnemonic(strength)
    return Account(mnemonic, derive_keypair(mnemonic))


def open_account(mnemonic: str) -> Account:
    """
    Restore an account from its mnemonic.

    Raises:
        InvalidMnemonicError: If the phrase is not a valid mnemonic
    """
    ensure_valid_mnemonic(mnemonic)
    return Account(mnemonic, derive_keypair(mnemonic))


__all__ = [
    '__version__',

    # High-level interface
    'Account',
    'create_account',
    'open_account',

    # Configuration
    'MnemokeyConfig',
    'ConfigError',

    # Mnemonics
    'generate_mnemonic',
    'validate_mnemonic',
    'ensure_valid_mnemonic',
    'InvalidMnemonicError',

    # Key derivation and signing
    'Keypair',
    'KeyDerivationError',
    'derive_seed',
    'derive_keypair',
    'derive_keypair_async',
    'sign_challenge',
    'verify_challenge',
    'SigningError',

    # Authenticated encryption
    'SecretKey',
    'SecretKeyError',
    'EncryptedEnvelope',
    'encrypt_data',
    'decrypt_data',
    'AuthenticationError',
    'MalformedEnvelopeError',
    'PlaintextEncodingError',

    # Codecs
    'bytes_to_base64',
    'bytes_to_base64_url',
    'base64_to_bytes',
    'base64_url_to_bytes',
    'DecodeError',
]
