"""
Byte helpers shared by the cipher context, config loader, CLI and benchmarks.
"""

import secrets
from typing import Union


def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite a mutable buffer with zeros.

    Args:
        data: Bytearray or writable memoryview to clear
    """
    if isinstance(data, (bytearray, memoryview)):
        data[:] = bytes(len(data))
    else:
        raise TypeError("Data must be bytearray or memoryview")


def generate_random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of random bytes to generate

    Returns:
        Cryptographically secure random bytes
    """
    return secrets.token_bytes(length)


def format_hex(data: bytes, separator: str = "") -> str:
    """
    Format bytes as hexadecimal string.

    Args:
        data: Bytes to format
        separator: Separator between hex bytes

    Returns:
        Formatted hex string
    """
    return separator.join(f"{b:02x}" for b in data)


def parse_hex(hex_string: str) -> bytes:
    """
    Parse hexadecimal string to bytes.

    Args:
        hex_string: Hex string (with or without separators)

    Returns:
        Parsed bytes
    """
    # Remove common separators
    cleaned = hex_string.strip().replace(" ", "").replace(":", "").replace("-", "")
    return bytes.fromhex(cleaned)
