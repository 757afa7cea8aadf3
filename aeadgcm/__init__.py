"""
aeadgcm - AES-GCM authenticated encryption of in-memory buffers.

Provides two whole-buffer operations on top of the ``cryptography``
package's AES-GCM primitive, for 128, 192 and 256-bit keys.

Basic Usage:
    >>> from aeadgcm import encrypt, decrypt
    >>>
    >>> key = bytes(16)
    >>> iv = bytes(12)
    >>> sealed = encrypt(key, iv, b"hello", None)
    >>> len(sealed.ciphertext), len(sealed.auth_tag)
    (5, 16)
    >>>
    >>> opened = decrypt(key, iv, sealed.ciphertext, None, sealed.auth_tag)
    >>> opened.plaintext, opened.auth_ok
    (b'hello', True)
"""

__version__ = "1.0.0"

from .api import encrypt, decrypt
from .pipeline.encryptor import SealResult
from .pipeline.decryptor import OpenResult
from .crypto.selector import CipherVariant, select_cipher
from .errors import (
    AEADError,
    ArgumentError,
    InvalidKeyLength,
    InvalidArguments,
    CipherOperationError,
)

__all__ = [
    '__version__',
    'encrypt',
    'decrypt',
    'SealResult',
    'OpenResult',
    'CipherVariant',
    'select_cipher',
    'AEADError',
    'ArgumentError',
    'InvalidKeyLength',
    'InvalidArguments',
    'CipherOperationError',
]
