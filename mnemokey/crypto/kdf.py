"""
Key derivation for mnemokey accounts.

A mnemonic is stretched into a 32-byte seed with PBKDF2-HMAC-SHA256 and the
seed is used directly as an Ed25519 private seed. The derivation must stay
bit-for-bit stable: existing accounts are recovered from the phrase alone.
"""

import asyncio
import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

logger = logging.getLogger(__name__)


class KeyDerivationError(Exception):
    """Raised when key derivation fails."""
    pass


# Account derivation constants. Changing any of these changes every account.
SEED_SALT = b"mnemonic"
SEED_ITERATIONS = 2048
SEED_LENGTH = 32

PUBLIC_KEY_LENGTH = 32
PRIVATE_KEY_LENGTH = 64


@dataclass(frozen=True)
class Keypair:
    """
    Ed25519 keypair derived from a mnemonic.

    Fields:
        private_key: 64-byte expanded secret (seed || public_key)
        public_key: 32-byte raw Ed25519 public key
        seed: 32-byte PBKDF2 output the keys were derived from
    """
    private_key: bytes
    public_key: bytes
    seed: bytes

    def __post_init__(self):
        if len(self.seed) != SEED_LENGTH:
            raise KeyDerivationError(f"Seed must be {SEED_LENGTH} bytes")
        if len(self.public_key) != PUBLIC_KEY_LENGTH:
            raise KeyDerivationError(f"Public key must be {PUBLIC_KEY_LENGTH} bytes")
        if len(self.private_key) != PRIVATE_KEY_LENGTH:
            raise KeyDerivationError(f"Private key must be {PRIVATE_KEY_LENGTH} bytes")

    def __repr__(self) -> str:
        return f"Keypair(public_key={self.public_key.hex()})"


def derive_seed(mnemonic: str) -> bytes:
    """
    Derive the 32-byte account seed from a mnemonic.

    PBKDF2 with HMAC-SHA256, salt "mnemonic", 2048 iterations. The phrase is
    used as UTF-8 bytes without normalisation.

    Args:
        mnemonic: Mnemonic phrase (validate it first, no checks happen here)

    Returns:
        32-byte seed

    Raises:
        KeyDerivationError: If mnemonic is not a string
    """
    if not isinstance(mnemonic, str):
        raise KeyDerivationError(f"Mnemonic must be a string, got {type(mnemonic).__name__}")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=SEED_LENGTH,
        salt=SEED_SALT,
        iterations=SEED_ITERATIONS,
    )
    return kdf.derive(mnemonic.encode("utf-8"))


def keypair_from_seed(seed: bytes) -> Keypair:
    """
    Standard Ed25519 key generation from a 32-byte seed.

    Raises:
        KeyDerivationError: If the seed has the wrong size
    """
    if len(seed) != SEED_LENGTH:
        raise KeyDerivationError(f"Seed must be {SEED_LENGTH} bytes, got {len(seed)}")

    signing_key = Ed25519PrivateKey.from_private_bytes(bytes(seed))
    public_key = signing_key.public_key().public_bytes(
        encoding=Encoding.Raw,
        format=PublicFormat.Raw,
    )
    return Keypair(
        private_key=bytes(seed) + public_key,
        public_key=public_key,
        seed=bytes(seed),
    )


def derive_keypair(mnemonic: str) -> Keypair:
    """
    Derive the account keypair from a mnemonic.

    Args:
        mnemonic: Mnemonic phrase

    Returns:
        Keypair holding private key, public key and seed
    """
    keypair = keypair_from_seed(derive_seed(mnemonic))
    logger.debug("Derived keypair for public key %s", keypair.public_key.hex())
    return keypair


async def derive_keypair_async(mnemonic: str,
                               executor: Optional[Executor] = None) -> Keypair:
    """
    Run derive_keypair in an executor so the event loop is not blocked
    by the PBKDF2 iterations.

    Args:
        mnemonic: Mnemonic phrase
        executor: Executor to use, the loop's default when None
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, derive_keypair, mnemonic)
