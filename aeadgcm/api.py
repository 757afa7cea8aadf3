"""
Public seal/open boundary.

Converts caller buffers to ``bytes``, rejects anything that is not
bytes-like, and hands off to the seal and open pipelines.
"""

from typing import Optional, Union

from .errors import ArgumentError
from .pipeline.decryptor import OpenResult, unseal
from .pipeline.encryptor import SealResult, seal

BytesLike = Union[bytes, bytearray, memoryview]

_BUFFER_TYPES = (bytes, bytearray, memoryview)


def _as_bytes(name: str, value, optional: bool = False) -> Optional[bytes]:
    if value is None and optional:
        return None
    if not isinstance(value, _BUFFER_TYPES):
        expected = "bytes-like object or None" if optional else "bytes-like object"
        raise ArgumentError(
            f"Argument '{name}' must be a {expected}, got {type(value).__name__}"
        )
    return bytes(value)


def encrypt(key: BytesLike, iv: BytesLike, plaintext: BytesLike,
            associated_data: Optional[BytesLike] = None) -> SealResult:
    """
    Encrypt plaintext with AES-GCM.

    The key length selects AES-128, AES-192 or AES-256.

    Args:
        key: 16, 24 or 32 byte key
        iv: Nonce/IV
        plaintext: Data to encrypt
        associated_data: Additional authenticated data, or None

    Returns:
        SealResult(ciphertext, auth_tag)

    Raises:
        ArgumentError: If an argument is not bytes-like
        InvalidKeyLength: If the key length is not 16, 24 or 32
    """
    return seal(
        _as_bytes('key', key),
        _as_bytes('iv', iv),
        _as_bytes('plaintext', plaintext),
        _as_bytes('associated_data', associated_data, optional=True),
    )


def decrypt(key: BytesLike, iv: BytesLike, ciphertext: BytesLike,
            associated_data: Optional[BytesLike], auth_tag: BytesLike) -> OpenResult:
    """
    Decrypt ciphertext with AES-GCM and verify the authentication tag.

    An authentication failure is reported as ``auth_ok=False``; the
    plaintext is returned either way.

    Args:
        key: 16, 24 or 32 byte key
        iv: Nonce/IV used for encryption
        ciphertext: Data to decrypt
        associated_data: Additional authenticated data, or None
        auth_tag: 16-byte authentication tag

    Returns:
        OpenResult(plaintext, auth_ok)

    Raises:
        ArgumentError: If an argument is not bytes-like
        InvalidKeyLength: If the key length is not 16, 24 or 32
        InvalidArguments: If the tag is not 16 bytes
    """
    return unseal(
        _as_bytes('key', key),
        _as_bytes('iv', iv),
        _as_bytes('ciphertext', ciphertext),
        _as_bytes('auth_tag', auth_tag),
        _as_bytes('associated_data', associated_data, optional=True),
    )
