"""
Cryptographic building blocks for aeadgcm.

This module provides:
- Cipher variant selection by key length
- The per-call AES-GCM context state machine
"""

from .selector import CipherVariant, select_cipher, SUPPORTED_KEY_LENGTHS
from .context import (
    AEADContext,
    ContextState,
    ContextStateError,
    Direction,
    TAG_LENGTH,
    DEFAULT_IV_LENGTH,
)

__all__ = [
    'CipherVariant',
    'select_cipher',
    'SUPPORTED_KEY_LENGTHS',
    'AEADContext',
    'ContextState',
    'ContextStateError',
    'Direction',
    'TAG_LENGTH',
    'DEFAULT_IV_LENGTH',
]
