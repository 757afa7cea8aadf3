"""
Seal pipeline: AES-GCM encryption of a complete in-memory buffer.

Steps:
1. Select the AES-GCM variant from the key length
2. Bind key and IV to a fresh context
3. Absorb associated data, if given
4. Encrypt the plaintext
5. Finalize and extract the 16-byte tag
6. Release the context
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..crypto.context import AEADContext, Direction
from ..crypto.selector import select_cipher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SealResult:
    """Ciphertext and authentication tag produced by seal()."""
    ciphertext: bytes
    auth_tag: bytes

    def to_dict(self) -> dict:
        return {'ciphertext': self.ciphertext, 'auth_tag': self.auth_tag}


def seal(key: bytes, iv: bytes, plaintext: bytes,
         associated_data: Optional[bytes] = None) -> SealResult:
    """
    Encrypt and authenticate a plaintext buffer.

    Args:
        key: 16, 24 or 32 byte AES key
        iv: Nonce, passed through to the primitive
        plaintext: Data to encrypt
        associated_data: Data to authenticate but not encrypt (optional)

    Returns:
        SealResult with ciphertext of len(plaintext) and a 16-byte tag

    Raises:
        InvalidKeyLength: If the key is not 16, 24 or 32 bytes
        CipherOperationError: If the primitive fails
    """
    variant = select_cipher(len(key))
    logger.debug(
        f"Sealing {len(plaintext)} bytes with {variant} "
        f"(aad: {'none' if associated_data is None else len(associated_data)})"
    )

    with AEADContext(variant, Direction.ENCRYPT) as ctx:
        ctx.bind(key, iv)
        if associated_data is not None:
            ctx.absorb_aad(associated_data)
        ciphertext = ctx.process(plaintext)
        trailing, tag = ctx.finalize_encrypt()

    return SealResult(ciphertext=ciphertext + trailing, auth_tag=tag)
