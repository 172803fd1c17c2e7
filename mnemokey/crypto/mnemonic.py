"""
BIP-39 mnemonic phrases for mnemokey accounts.

Phrases are space-separated lowercase words from the fixed English wordlist
shipped with the ``mnemonic`` package. The phrase is the only thing a user
needs to recover their account keys.
"""

import logging
from typing import Tuple

from mnemonic import Mnemonic

logger = logging.getLogger(__name__)

LANGUAGE = "english"
DEFAULT_STRENGTH = 128
VALID_STRENGTHS = (128, 160, 192, 224, 256)

_MNEMO = Mnemonic(LANGUAGE)

# Process-wide immutable wordlist
WORDLIST: Tuple[str, ...] = tuple(_MNEMO.wordlist)


class InvalidMnemonicError(ValueError):
    """Raised when a phrase is required to be a valid mnemonic but is not."""
    pass


def generate_mnemonic(strength: int = DEFAULT_STRENGTH) -> str:
    """
    Generate a new random mnemonic phrase.

    Entropy comes from the operating system CSPRNG. The default strength of
    128 bits yields the conventional 12-word phrase.

    Args:
        strength: Entropy in bits, one of 128, 160, 192, 224 or 256

    Returns:
        Space-separated mnemonic with a valid checksum word

    Raises:
        ValueError: If strength is not a BIP-39 entropy size
    """
    if strength not in VALID_STRENGTHS:
        raise ValueError(
            f"Strength must be one of {VALID_STRENGTHS}, got {strength}"
        )

    phrase = _MNEMO.generate(strength=strength)
    logger.debug("Generated %d-word mnemonic", len(phrase.split(" ")))
    return phrase


def validate_mnemonic(candidate) -> bool:
    """
    Check that candidate is a well-formed, checksum-valid mnemonic.

    Never raises. Wrong word counts, words outside the wordlist, a bad
    checksum word or a non-string argument all return False.
    """
    if not isinstance(candidate, str):
        return False

    try:
        return _MNEMO.check(candidate)
    except (ValueError, LookupError):
        return False


def ensure_valid_mnemonic(candidate: str) -> str:
    """
    Return candidate unchanged if it is a valid mnemonic.

    Raises:
        InvalidMnemonicError: If validate_mnemonic rejects the phrase
    """
    if not validate_mnemonic(candidate):
        raise InvalidMnemonicError("Mnemonic phrase is invalid")
    return candidate


def word_count(strength: int) -> int:
    """Number of words in a phrase of the given entropy strength."""
    if strength not in VALID_STRENGTHS:
        raise ValueError(f"Strength must be one of {VALID_STRENGTHS}, got {strength}")
    # 11 bits per word, one checksum bit per 32 bits of entropy
    return (strength + strength // 32) // 11
