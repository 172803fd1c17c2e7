"""
Tests for the high-level account interface.
"""

import pytest

import mnemokey
from mnemokey import (
    Account,
    InvalidMnemonicError,
    MnemokeyConfig,
    create_account,
    open_account,
)

ZERO_ENTROPY_MNEMONIC = " ".join(["abandon"] * 11 + ["about"])
ZERO_ENTROPY_PUBLIC_KEY = bytes.fromhex(
    "5410bd594b8eb784c3bdeca5fda1d00583d6fb203e0e64aef76968ea6095b1b9"
)


class TestAccount:
    """Test account creation, restoration and challenge signing."""

    def test_create_and_restore(self):
        """Test restoring an account from its mnemonic."""
        account = create_account()
        restored = open_account(account.mnemonic)
        assert restored.keypair == account.keypair
        assert restored.public_key_b64url == account.public_key_b64url

    def test_create_strength(self):
        """Test creating an account with a 24-word mnemonic."""
        assert len(create_account(256).mnemonic.split()) == 24

    def test_create_from_config(self, tmp_path):
        """Test that the configured strength applies."""
        config = MnemokeyConfig(str(tmp_path))
        config.set("mnemonic_strength", 160)
        assert len(create_account(config=config).mnemonic.split()) == 15

    def test_open_rejects_invalid(self):
        """Test that invalid phrases raise InvalidMnemonicError."""
        with pytest.raises(InvalidMnemonicError):
            open_account("abandon " * 12)
        with pytest.raises(InvalidMnemonicError):
            open_account(" ".join(["abandon"] * 12))

    def test_sign_and_verify(self):
        """Test challenge signing and verification."""
        account = open_account(ZERO_ENTROPY_MNEMONIC)
        signature = account.sign_challenge("server-challenge")
        assert account.verify_challenge("server-challenge", signature)
        assert not account.verify_challenge("other-challenge", signature)
        assert not create_account().verify_challenge("server-challenge", signature)

    def test_regression_vector_public_key(self):
        """Test that the fixed phrase always opens the same account."""
        first = open_account(ZERO_ENTROPY_MNEMONIC).public_key
        second = Account(ZERO_ENTROPY_MNEMONIC, mnemokey.derive_keypair(ZERO_ENTROPY_MNEMONIC)).public_key
        assert first == second == ZERO_ENTROPY_PUBLIC_KEY

    def test_repr_hides_mnemonic(self):
        """Test that repr never shows the mnemonic."""
        account = open_account(ZERO_ENTROPY_MNEMONIC)
        assert "abandon" not in repr(account)

    def test_public_exports(self):
        """Test that every name in __all__ is importable."""
        for name in mnemokey.__all__:
            assert hasattr(mnemokey, name)
