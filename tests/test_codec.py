"""
Tests for the base64 codec helpers.
"""

import base64
import os

import pytest

from mnemokey.crypto.codec import (
    DecodeError,
    base64_to_bytes,
    base64_url_to_bytes,
    bytes_to_base64,
    bytes_to_base64_url,
)


class TestStandardBase64:
    """Test standard base64 encoding and decoding."""

    def test_known_values(self):
        """Test encoding of fixed inputs."""
        assert bytes_to_base64(b"") == ""
        assert bytes_to_base64(b"\x00") == "AA=="
        assert bytes_to_base64(b"\xfb\xff") == "+/8="
        assert bytes_to_base64(b"hello") == "aGVsbG8="

    def test_no_line_wrapping(self):
        """Test that long inputs are encoded on a single line."""
        encoded = bytes_to_base64(os.urandom(1024))
        assert "\n" not in encoded
        assert encoded == base64.b64encode(base64.b64decode(encoded)).decode()

    def test_decode_inverse(self):
        """Test that decoding reverses encoding for every padding length."""
        for length in (0, 1, 2, 3, 31, 32, 33):
            data = os.urandom(length)
            assert base64_to_bytes(bytes_to_base64(data)) == data

    def test_accepts_bytearray(self):
        """Test encoding a mutable buffer."""
        assert bytes_to_base64(bytearray(b"hello")) == "aGVsbG8="

    @pytest.mark.parametrize("bad", [
        "abc",          # invalid length
        "ab$d",         # character outside the alphabet
        "aGVs bG8=",    # embedded whitespace
        "AA=A",         # padding in the middle
        "wrongtag==",   # bad padding
        "é===",         # non-ASCII
    ])
    def test_decode_rejects_malformed(self, bad):
        """Test that malformed input raises DecodeError."""
        with pytest.raises(DecodeError):
            base64_to_bytes(bad)

    def test_decode_rejects_non_string(self):
        """Test that bytes input is rejected."""
        with pytest.raises(DecodeError):
            base64_to_bytes(b"AA==")

    def test_decode_error_is_value_error(self):
        """Test that DecodeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            base64_to_bytes("!!!!")


class TestUrlSafeBase64:
    """Test unpadded URL-safe base64."""

    def test_known_values(self):
        """Test encoding of fixed inputs."""
        assert bytes_to_base64_url(b"") == ""
        assert bytes_to_base64_url(b"\x00") == "AA"
        assert bytes_to_base64_url(b"\xfb\xff") == "-_8"
        assert bytes_to_base64_url(b"\xff\xff\xff") == "____"

    def test_is_exact_transformation_of_standard(self):
        """Test the character substitution and padding removal."""
        for _ in range(200):
            data = os.urandom(os.urandom(1)[0] % 70)
            expected = (bytes_to_base64(data)
                        .replace("+", "-")
                        .replace("/", "_")
                        .rstrip("="))
            assert bytes_to_base64_url(data) == expected

    def test_alphabet_excludes_reserved_characters(self):
        """Test that output never contains '+', '/' or '='."""
        samples = [b"", b"\x00", b"\x00\x00", b"abc\x00\x00\x00", b"\xfb\xff\xbf"]
        samples += [os.urandom(n) for n in range(1, 66)]
        for data in samples:
            encoded = bytes_to_base64_url(data)
            assert "+" not in encoded
            assert "/" not in encoded
            assert "=" not in encoded

    def test_decode_inverse(self):
        """Test that decoding reverses encoding."""
        for length in range(0, 40):
            data = os.urandom(length)
            assert base64_url_to_bytes(bytes_to_base64_url(data)) == data

    def test_decode_accepts_padding(self):
        """Test decoding of padded URL-safe input."""
        assert base64_url_to_bytes("AA==") == b"\x00"
        assert base64_url_to_bytes("-_8=") == b"\xfb\xff"

    @pytest.mark.parametrize("bad", ["+/8", "A", "ab$d", "a b"])
    def test_decode_rejects_malformed(self, bad):
        """Test that malformed input raises DecodeError."""
        with pytest.raises(DecodeError):
            base64_url_to_bytes(bad)
