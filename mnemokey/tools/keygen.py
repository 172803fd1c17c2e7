"""
mnemokey command line tool.

Usage examples:
    mnemokey generate --strength 256
    echo "$PHRASE" | mnemokey derive
    echo "$PHRASE" | mnemokey sign "challenge-code"
    mnemokey verify -- <public-key> "challenge-code" <signature>
    echo "secret text" | mnemokey encrypt --secret "$KEY_B64" > envelope.json
    mnemokey decrypt --secret "$KEY_B64" < envelope.json

Mnemonics, plaintexts and envelopes are read from stdin so they never appear
in the process list.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import ConfigError, MnemokeyConfig
from ..crypto.aead import (
    AuthenticationError,
    MalformedEnvelopeError,
    PlaintextEncodingError,
    decrypt_data,
    encrypt_data,
)
from ..crypto.codec import DecodeError, base64_url_to_bytes, bytes_to_base64_url
from ..crypto.kdf import derive_keypair
from ..crypto.mnemonic import VALID_STRENGTHS, generate_mnemonic, validate_mnemonic, word_count
from ..crypto.secret import SecretKeyError
from ..crypto.signing import sign_challenge, verify_challenge

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog='mnemokey',
                                     description='Mnemonic account keys and payload encryption')
    parser.add_argument('--config-dir', type=str,
                        help='Configuration directory (default: $MNEMOKEY_HOME or ~/.mnemokey)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Sub-commands')

    strengths = ', '.join(f"{s} ({word_count(s)} words)" for s in VALID_STRENGTHS)
    generate_parser = subparsers.add_parser('generate', help='Generate a new mnemonic')
    generate_parser.add_argument('--strength', type=int, choices=VALID_STRENGTHS,
                                 help=f'Entropy bits: {strengths}')

    subparsers.add_parser('validate', help='Validate a mnemonic read from stdin')
    subparsers.add_parser('derive', help='Print the public key for a mnemonic read from stdin')

    sign_parser = subparsers.add_parser('sign', help='Sign a challenge with the mnemonic from stdin')
    sign_parser.add_argument('challenge', help='Challenge string to sign')

    verify_parser = subparsers.add_parser('verify', help='Verify a challenge signature')
    verify_parser.add_argument('public_key', help='Public key (URL-safe base64)')
    verify_parser.add_argument('challenge', help='Challenge string that was signed')
    verify_parser.add_argument('signature', help='Signature (URL-safe base64)')

    encrypt_parser = subparsers.add_parser('encrypt', help='Encrypt stdin into a JSON envelope')
    encrypt_parser.add_argument('--secret', required=True, help='Base64 AES key (16, 24 or 32 bytes)')

    decrypt_parser = subparsers.add_parser('decrypt', help='Decrypt a JSON envelope from stdin')
    decrypt_parser.add_argument('--secret', required=True, help='Base64 AES key (16, 24 or 32 bytes)')

    return parser


def _read_stdin(strip: bool = True) -> str:
    data = sys.stdin.read()
    return data.strip() if strip else data


def _read_mnemonic() -> Optional[str]:
    phrase = _read_stdin()
    if not validate_mnemonic(phrase):
        print("Error: invalid mnemonic", file=sys.stderr)
        return None
    return phrase


def cmd_generate(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    strength = args.strength or config.mnemonic_strength
    print(generate_mnemonic(strength))
    return EXIT_OK


def cmd_validate(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    if validate_mnemonic(_read_stdin()):
        print("valid")
        return EXIT_OK
    print("invalid")
    return EXIT_FAILURE


def cmd_derive(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    phrase = _read_mnemonic()
    if phrase is None:
        return EXIT_FAILURE
    print(bytes_to_base64_url(derive_keypair(phrase).public_key))
    return EXIT_OK


def cmd_sign(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    phrase = _read_mnemonic()
    if phrase is None:
        return EXIT_FAILURE
    print(sign_challenge(derive_keypair(phrase), args.challenge))
    return EXIT_OK


def cmd_verify(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    try:
        public_key = base64_url_to_bytes(args.public_key)
    except DecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if verify_challenge(public_key, args.challenge, args.signature):
        print("valid")
        return EXIT_OK
    print("invalid")
    return EXIT_FAILURE


def cmd_encrypt(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    try:
        print(encrypt_data(_read_stdin(strip=False), args.secret))
    except (DecodeError, SecretKeyError) as e:
        print(f"Error: invalid secret: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except PlaintextEncodingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def cmd_decrypt(args: argparse.Namespace, config: MnemokeyConfig) -> int:
    try:
        plaintext = decrypt_data(_read_stdin(), args.secret)
    except (DecodeError, SecretKeyError) as e:
        print(f"Error: invalid secret: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except (MalformedEnvelopeError, AuthenticationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    sys.stdout.write(plaintext)
    return EXIT_OK


COMMANDS = {
    'generate': cmd_generate,
    'validate': cmd_validate,
    'derive': cmd_derive,
    'sign': cmd_sign,
    'verify': cmd_verify,
    'encrypt': cmd_encrypt,
    'decrypt': cmd_decrypt,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the mnemokey console script."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        config = MnemokeyConfig(args.config_dir).load()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
    logger.debug("Running command %s", args.command)

    return COMMANDS[args.command](args, config)


if __name__ == '__main__':
    sys.exit(main())
