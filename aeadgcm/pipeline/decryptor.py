"""
Open pipeline: AES-GCM decryption and tag verification of a complete buffer.

Steps:
1. Check the tag length, select the AES-GCM variant from the key length
2. Bind key and IV to a fresh context
3. Absorb associated data, if given
4. Decrypt the ciphertext
5. Install the reference tag and finalize to get the authenticity verdict
6. Release the context

The plaintext is always returned, together with the verdict. Discarding
unauthenticated plaintext is left to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..crypto.context import AEADContext, Direction, TAG_LENGTH
from ..crypto.selector import select_cipher
from ..errors import InvalidArguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenResult:
    """Plaintext and authenticity verdict produced by unseal()."""
    plaintext: bytes
    auth_ok: bool

    def to_dict(self) -> dict:
        return {'plaintext': self.plaintext, 'auth_ok': self.auth_ok}


def unseal(key: bytes, iv: bytes, ciphertext: bytes, auth_tag: bytes,
           associated_data: Optional[bytes] = None) -> OpenResult:
    """
    Decrypt a ciphertext buffer and verify its authentication tag.

    Args:
        key: 16, 24 or 32 byte AES key
        iv: Nonce used for encryption
        ciphertext: Encrypted data
        auth_tag: 16-byte authentication tag
        associated_data: Additional authenticated data (optional)

    Returns:
        OpenResult with plaintext of len(ciphertext) and the verdict

    Raises:
        InvalidKeyLength: If the key is not 16, 24 or 32 bytes
        InvalidArguments: If the tag is not 16 bytes
        CipherOperationError: If the primitive fails
    """
    variant = select_cipher(len(key))
    if len(auth_tag) != TAG_LENGTH:
        raise InvalidArguments(
            f"Authentication tag must be {TAG_LENGTH} bytes, got {len(auth_tag)}"
        )
    logger.debug(
        f"Opening {len(ciphertext)} bytes with {variant} "
        f"(aad: {'none' if associated_data is None else len(associated_data)})"
    )

    with AEADContext(variant, Direction.DECRYPT) as ctx:
        ctx.bind(key, iv)
        if associated_data is not None:
            ctx.absorb_aad(associated_data)
        plaintext = ctx.process(ciphertext)
        ctx.install_tag(auth_tag)
        trailing, auth_ok = ctx.finalize_decrypt()

    if not auth_ok:
        logger.debug("Authentication tag mismatch, returning plaintext with auth_ok=False")

    return OpenResult(plaintext=plaintext + trailing, auth_ok=auth_ok)
