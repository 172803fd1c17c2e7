#!/usr/bin/env python3
"""
Account Keys & Payload Encryption - Example

Walks through the full account lifecycle: mnemonic generation, key
derivation, challenge signing, and encrypting a payload under a shared secret.
"""

import sys
import os

# Add the repository root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mnemokey import (
    AuthenticationError,
    SecretKey,
    create_account,
    decrypt_data,
    encrypt_data,
    open_account,
    validate_mnemonic,
)


def main():
    print("🔑 mnemokey - Account Example")
    print("=" * 50)

    # 1. New account
    print("1. Creating a new account...")
    account = create_account()
    assert validate_mnemonic(account.mnemonic)
    print(f"   ✅ Mnemonic ({len(account.mnemonic.split())} words): {account.mnemonic}")
    print(f"   Public key: {account.public_key_b64url}")

    # 2. Recovery from the phrase alone
    print("\n2. Restoring from mnemonic...")
    restored = open_account(account.mnemonic)
    assert restored.public_key == account.public_key
    print("   ✅ Same public key recovered")

    # 3. Challenge response
    print("\n3. Answering a login challenge...")
    challenge = "login-challenge-7f3a"
    signature = restored.sign_challenge(challenge)
    assert account.verify_challenge(challenge, signature)
    print(f"   ✅ Signature: {signature}")

    # 4. Payload encryption
    print("\n4. Encrypting a payload...")
    with SecretKey.generate() as key:
        envelope = encrypt_data("account settings: {\"theme\": \"dark\"}", key)
        print(f"   Envelope: {envelope}")
        print(f"   ✅ Decrypted: {decrypt_data(envelope, key)}")

        try:
            decrypt_data(envelope, SecretKey.generate())
        except AuthenticationError as e:
            print(f"   ✅ Wrong secret rejected: {e}")

    print("\n🎉 Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
