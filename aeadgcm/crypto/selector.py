"""
Cipher selection by key length.

Maps a raw key length onto one of the three AES-GCM variants. The length
check gates both the seal and open pipelines.
"""

from enum import Enum
from typing import Dict

from cryptography.hazmat.primitives.ciphers import algorithms

from ..errors import InvalidKeyLength


class CipherVariant(Enum):
    """AES-GCM variants, keyed by key length in bytes."""

    AES_128_GCM = (16, 128, "AES-128-GCM")
    AES_192_GCM = (24, 192, "AES-192-GCM")
    AES_256_GCM = (32, 256, "AES-256-GCM")

    def __init__(self, key_length: int, key_bits: int, algorithm_name: str):
        self.key_length = key_length
        self.key_bits = key_bits
        self.algorithm_name = algorithm_name

    def algorithm(self, key: bytes) -> algorithms.AES:
        """Build the primitive's block cipher object for this variant."""
        return algorithms.AES(key)

    def __str__(self) -> str:
        return self.algorithm_name


_VARIANTS_BY_KEY_LENGTH: Dict[int, CipherVariant] = {
    variant.key_length: variant for variant in CipherVariant
}

SUPPORTED_KEY_LENGTHS = tuple(sorted(_VARIANTS_BY_KEY_LENGTH))


def select_cipher(key_length: int) -> CipherVariant:
    """
    Select the AES-GCM variant for a key length.

    Args:
        key_length: Key length in bytes

    Returns:
        Matching CipherVariant

    Raises:
        InvalidKeyLength: If the length is not 16, 24 or 32
    """
    try:
        return _VARIANTS_BY_KEY_LENGTH[key_length]
    except KeyError:
        raise InvalidKeyLength(key_length) from None
