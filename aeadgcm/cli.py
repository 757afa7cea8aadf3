#!/usr/bin/env python3
"""
Command-line front end for aeadgcm.

Usage:
    aeadgcm encrypt --iv HEX --plaintext HEX [--aad HEX] [--key HEX | --key-file PATH]
    aeadgcm decrypt --iv HEX --ciphertext HEX --tag HEX [--aad HEX] [--key HEX | --key-file PATH]
    aeadgcm bench [--sizes 64,1024] [--iterations N]

All binary values are hex encoded. Without --key or --key-file, the key
stored in the configuration directory ($AEADGCM_HOME or ~/.aeadgcm) is used.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .api import decrypt, encrypt
from .config import AeadConfig, ConfigError, configured_log_level, load_key_file
from .crypto.utils import format_hex, parse_hex
from .errors import AEADError
from .evaluation.benchmark import DEFAULT_ITERATIONS, DEFAULT_MESSAGE_SIZES, PerformanceBenchmark

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_AUTH_FAILED = 1
EXIT_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='aeadgcm',
        description='AES-GCM authenticated encryption of hex-encoded buffers',
    )
    subparsers = parser.add_subparsers(dest='command', help='Sub-commands')
    subparsers.required = True

    def add_key_options(sub: argparse.ArgumentParser) -> None:
        group = sub.add_mutually_exclusive_group()
        group.add_argument('--key', type=str, help='Hex-encoded 16, 24 or 32 byte key')
        group.add_argument('--key-file', type=str, help='File holding a raw or hex key')
        sub.add_argument('--iv', type=str, required=True, help='Hex-encoded IV/nonce')
        sub.add_argument('--aad', type=str, default=None,
                         help='Hex-encoded associated data (optional)')

    encrypt_parser = subparsers.add_parser('encrypt', help='Encrypt and authenticate')
    add_key_options(encrypt_parser)
    encrypt_parser.add_argument('--plaintext', type=str, required=True,
                                help='Hex-encoded plaintext')

    decrypt_parser = subparsers.add_parser('decrypt', help='Decrypt and verify')
    add_key_options(decrypt_parser)
    decrypt_parser.add_argument('--ciphertext', type=str, required=True,
                                help='Hex-encoded ciphertext')
    decrypt_parser.add_argument('--tag', type=str, required=True,
                                help='Hex-encoded 16-byte authentication tag')

    bench_parser = subparsers.add_parser('bench', help='Run seal/open throughput benchmark')
    bench_parser.add_argument('--sizes', type=str,
                              default=','.join(str(s) for s in DEFAULT_MESSAGE_SIZES),
                              help='Comma-separated message sizes in bytes')
    bench_parser.add_argument('--iterations', type=int, default=DEFAULT_ITERATIONS,
                              help=f'Iterations per size (default: {DEFAULT_ITERATIONS})')

    return parser


def _resolve_key(args: argparse.Namespace) -> bytes:
    if args.key is not None:
        return parse_hex(args.key)
    if args.key_file is not None:
        return load_key_file(args.key_file)
    # The config directory is only touched when falling back to the stored key
    try:
        config = AeadConfig()
    except OSError as e:
        raise ConfigError(f"Cannot create config directory: {e}") from e
    return config.get_key()


def _optional_hex(value: Optional[str]) -> Optional[bytes]:
    return None if value is None else parse_hex(value)


def run_encrypt(args: argparse.Namespace) -> int:
    result = encrypt(
        _resolve_key(args),
        parse_hex(args.iv),
        parse_hex(args.plaintext),
        _optional_hex(args.aad),
    )
    print(json.dumps({
        'ciphertext': format_hex(result.ciphertext),
        'auth_tag': format_hex(result.auth_tag),
    }))
    return EXIT_OK


def run_decrypt(args: argparse.Namespace) -> int:
    result = decrypt(
        _resolve_key(args),
        parse_hex(args.iv),
        parse_hex(args.ciphertext),
        _optional_hex(args.aad),
        parse_hex(args.tag),
    )
    print(json.dumps({
        'plaintext': format_hex(result.plaintext),
        'auth_ok': result.auth_ok,
    }))
    return EXIT_OK if result.auth_ok else EXIT_AUTH_FAILED


def run_bench(args: argparse.Namespace) -> int:
    sizes = [int(s) for s in args.sizes.split(',') if s.strip()]
    if not sizes or any(size < 0 for size in sizes):
        raise ValueError("Message sizes must be non-negative integers")
    if args.iterations < 1:
        raise ValueError("Iterations must be at least 1")

    benchmark = PerformanceBenchmark()
    benchmark.benchmark_seal_performance(sizes, args.iterations)
    benchmark.benchmark_open_performance(sizes, args.iterations)
    print(benchmark.format_table())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line tool."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=configured_log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.command == 'encrypt':
            return run_encrypt(args)
        if args.command == 'decrypt':
            return run_decrypt(args)
        return run_bench(args)
    except (AEADError, ConfigError, ValueError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
