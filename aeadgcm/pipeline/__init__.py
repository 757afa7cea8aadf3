"""
Seal and open pipelines driving the AES-GCM context.
"""

from .encryptor import seal, SealResult
from .decryptor import unseal, OpenResult

__all__ = [
    'seal',
    'SealResult',
    'unseal',
    'OpenResult',
]
