"""
Tests for mnemonic generation and validation.
"""

import pytest

from mnemokey.crypto.mnemonic import (
    WORDLIST,
    InvalidMnemonicError,
    ensure_valid_mnemonic,
    generate_mnemonic,
    validate_mnemonic,
    word_count,
)

ZERO_ENTROPY_MNEMONIC = " ".join(["abandon"] * 11 + ["about"])


class TestWordlist:
    """Test the fixed wordlist."""

    def test_size(self):
        """Test that the wordlist has 2048 distinct words."""
        assert len(WORDLIST) == 2048
        assert len(set(WORDLIST)) == 2048

    def test_immutable(self):
        """Test that the wordlist cannot be modified."""
        assert isinstance(WORDLIST, tuple)

    def test_known_words(self):
        """Test positions of well-known English words."""
        assert WORDLIST[0] == "abandon"
        assert WORDLIST[3] == "about"
        assert WORDLIST[-1] == "zoo"


class TestGenerate:
    """Test mnemonic generation."""

    def test_default_is_twelve_words(self):
        """Test that the default phrase has 12 wordlist words."""
        phrase = generate_mnemonic()
        words = phrase.split(" ")
        assert len(words) == 12
        assert all(word in WORDLIST for word in words)

    @pytest.mark.parametrize("strength,words", [
        (128, 12), (160, 15), (192, 18), (224, 21), (256, 24)
    ])
    def test_strengths(self, strength, words):
        """Test word counts for every supported strength."""
        phrase = generate_mnemonic(strength)
        assert len(phrase.split(" ")) == words
        assert word_count(strength) == words
        assert validate_mnemonic(phrase)

    def test_generated_phrases_validate(self):
        """Test that generated phrases carry a valid checksum."""
        for _ in range(20):
            assert validate_mnemonic(generate_mnemonic())

    def test_generated_phrases_differ(self):
        """Test that generation uses fresh entropy."""
        phrases = {generate_mnemonic() for _ in range(50)}
        assert len(phrases) == 50

    def test_lowercase_single_spaced(self):
        """Test the canonical phrase representation."""
        phrase = generate_mnemonic()
        assert phrase == phrase.lower()
        assert "  " not in phrase
        assert phrase == phrase.strip()

    @pytest.mark.parametrize("strength", [0, 64, 127, 129, 512])
    def test_invalid_strength(self, strength):
        """Test rejection of non-BIP-39 entropy sizes."""
        with pytest.raises(ValueError):
            generate_mnemonic(strength)


class TestValidate:
    """Test mnemonic validation."""

    def test_zero_entropy_vector(self):
        """Test acceptance of the all-zero-entropy phrase."""
        assert validate_mnemonic(ZERO_ENTROPY_MNEMONIC)

    def test_rejects_thirteen_words(self):
        """Test rejection of a 13-word phrase."""
        assert not validate_mnemonic(ZERO_ENTROPY_MNEMONIC + " abandon")
        assert not validate_mnemonic(generate_mnemonic() + " zoo")

    def test_rejects_eleven_words(self):
        """Test rejection of a short phrase."""
        assert not validate_mnemonic(" ".join(["abandon"] * 10 + ["about"]))

    def test_rejects_unknown_word(self):
        """Test rejection of a word outside the wordlist."""
        words = generate_mnemonic().split(" ")
        words[4] = "notaword"
        assert not validate_mnemonic(" ".join(words))

    def test_rejects_bad_checksum(self):
        """Test rejection of a phrase with the wrong checksum word."""
        # All-zero entropy requires "about" as the checksum word
        assert not validate_mnemonic(" ".join(["abandon"] * 12))

    def test_rejects_corrupted_final_word(self):
        """Test that flipping a checksum bit of the last word is detected."""
        rejected = 0
        for _ in range(10):
            words = generate_mnemonic().split(" ")
            original = words[-1]
            index = WORDLIST.index(original)
            # Neighbouring word differs only in the checksum bits for 12 words
            words[-1] = WORDLIST[index ^ 1]
            if not validate_mnemonic(" ".join(words)):
                rejected += 1
        assert rejected == 10

    def test_rejects_uppercase(self):
        """Test that words must be lowercase."""
        assert not validate_mnemonic(ZERO_ENTROPY_MNEMONIC.upper())

    @pytest.mark.parametrize("candidate", [
        "", " ", "abandon", None, 12, b"abandon", ["abandon"] * 12,
    ])
    def test_never_raises(self, candidate):
        """Test that malformed input returns False instead of raising."""
        assert validate_mnemonic(candidate) is False

    def test_ensure_valid(self):
        """Test the raising variant of validation."""
        assert ensure_valid_mnemonic(ZERO_ENTROPY_MNEMONIC) == ZERO_ENTROPY_MNEMONIC
        with pytest.raises(InvalidMnemonicError):
            ensure_valid_mnemonic("abandon abandon")
