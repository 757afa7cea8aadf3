"""
Per-call AES-GCM cipher context.

Wraps the ``cryptography`` hazmat GCM encryptor/decryptor in a small state
machine that enforces the order of operations:

    UNINITIALIZED -> KEY_IV_BOUND -> [AAD_ABSORBED] -> DATA_PROCESSED -> FINALIZED

A context owns exactly one cryptographic session. It is created fresh for
every seal/open call and released when the ``with`` block exits, whether
the call succeeded or failed.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import CipherOperationError
from .selector import CipherVariant
from .utils import secure_zero

logger = logging.getLogger(__name__)

TAG_LENGTH = 16
DEFAULT_IV_LENGTH = 12

# update_into needs room for one block minus a byte beyond the input
OUTPUT_MARGIN = algorithms.AES.block_size // 8 - 1


class ContextStateError(RuntimeError):
    """Raised when a context is driven out of order or bound inconsistently."""
    pass


class Direction(Enum):
    """Operation a context was created for."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class ContextState(Enum):
    """Lifecycle states of an AEADContext."""
    UNINITIALIZED = 0
    KEY_IV_BOUND = 1
    AAD_ABSORBED = 2
    DATA_PROCESSED = 3
    FINALIZED = 4
    RELEASED = 5


class AEADContext:
    """
    Single-use AES-GCM session with enforced operation ordering.

    Usage:
        >>> with AEADContext(CipherVariant.AES_128_GCM, Direction.ENCRYPT) as ctx:
        ...     ctx.bind(key, iv)
        ...     ctx.absorb_aad(aad)
        ...     ciphertext = ctx.process(plaintext)
        ...     trailing, tag = ctx.finalize_encrypt()
    """

    def __init__(self, variant: CipherVariant, direction: Direction):
        """
        Create an unbound context.

        Args:
            variant: AES-GCM variant selected from the key length
            direction: Whether this context encrypts or decrypts
        """
        self.variant = variant
        self.direction = direction
        self.state = ContextState.UNINITIALIZED
        self.bytes_produced = 0
        self._cipher_ctx = None
        self._reference_tag: Optional[bytes] = None
        self._scratch: Optional[bytearray] = None

    def __enter__(self) -> "AEADContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    def _require(self, *allowed: ContextState) -> None:
        if self.state not in allowed:
            expected = " or ".join(state.name for state in allowed)
            raise ContextStateError(
                f"Operation not allowed in state {self.state.name}; expected {expected}"
            )

    def _require_direction(self, direction: Direction) -> None:
        if self.direction is not direction:
            raise ContextStateError(
                f"Operation requires a {direction.value} context, "
                f"this context is for {self.direction.value}"
            )

    def bind(self, key: bytes, iv: bytes) -> None:
        """
        Bind key and IV to the context.

        Args:
            key: Raw AES key matching the variant's key length
            iv: Initialization vector, passed through to the primitive

        Raises:
            CipherOperationError: If the primitive rejects the key or IV
        """
        self._require(ContextState.UNINITIALIZED)
        if len(key) != self.variant.key_length:
            raise ContextStateError(
                f"{self.variant} context bound with a {len(key)}-byte key"
            )

        if len(iv) != DEFAULT_IV_LENGTH:
            logger.debug(f"Binding non-default IV length of {len(iv)} bytes")

        algorithm = self.variant.algorithm(key)
        try:
            cipher = Cipher(algorithm, modes.GCM(iv))
            if self.direction is Direction.ENCRYPT:
                self._cipher_ctx = cipher.encryptor()
            else:
                self._cipher_ctx = cipher.decryptor()
        except (ValueError, TypeError) as e:
            raise CipherOperationError(f"{self.variant} key/IV setup failed: {e}") from e

        self.state = ContextState.KEY_IV_BOUND

    def absorb_aad(self, associated_data: bytes) -> None:
        """
        Feed associated data for authentication only.

        Args:
            associated_data: Bytes to authenticate; produces no output
        """
        self._require(ContextState.KEY_IV_BOUND)

        try:
            self._cipher_ctx.authenticate_additional_data(associated_data)
        except (ValueError, TypeError) as e:
            raise CipherOperationError(f"Associated data absorption failed: {e}") from e

        self.state = ContextState.AAD_ABSORBED

    def process(self, data: bytes) -> bytes:
        """
        Encrypt or decrypt the primary buffer.

        The output is truncated to the number of bytes the primitive reports
        as written, which for GCM equals ``len(data)``.

        Args:
            data: Plaintext (encrypt) or ciphertext (decrypt)

        Returns:
            Output bytes produced by the primitive
        """
        self._require(ContextState.KEY_IV_BOUND, ContextState.AAD_ABSORBED)

        self._scratch = bytearray(len(data) + OUTPUT_MARGIN)
        try:
            written = self._cipher_ctx.update_into(data, self._scratch)
        except (ValueError, TypeError) as e:
            raise CipherOperationError(f"{self.direction.value} update failed: {e}") from e

        output = bytes(self._scratch[:written])
        secure_zero(self._scratch)
        self.bytes_produced = written
        self.state = ContextState.DATA_PROCESSED
        return output

    def finalize_encrypt(self) -> Tuple[bytes, bytes]:
        """
        Complete encryption and extract the authentication tag.

        Returns:
            Tuple of (trailing_output, tag); trailing output is empty for GCM
        """
        self._require(ContextState.DATA_PROCESSED)
        self._require_direction(Direction.ENCRYPT)

        try:
            trailing = self._cipher_ctx.finalize()
            tag = self._cipher_ctx.tag
        except (ValueError, TypeError) as e:
            raise CipherOperationError(f"Encryption finalization failed: {e}") from e

        if len(tag) != TAG_LENGTH:
            raise CipherOperationError(f"Primitive returned a {len(tag)}-byte tag")

        self.bytes_produced += len(trailing)
        self.state = ContextState.FINALIZED
        return trailing, tag

    def install_tag(self, tag: bytes) -> None:
        """
        Install the reference tag used by finalize_decrypt.

        Args:
            tag: Caller-supplied 16-byte authentication tag
        """
        self._require(ContextState.DATA_PROCESSED)
        self._require_direction(Direction.DECRYPT)
        self._reference_tag = bytes(tag)

    def finalize_decrypt(self) -> Tuple[bytes, bool]:
        """
        Complete decryption and verify the installed reference tag.

        The tag comparison is done by the primitive.

        Returns:
            Tuple of (trailing_output, auth_ok)
        """
        self._require(ContextState.DATA_PROCESSED)
        self._require_direction(Direction.DECRYPT)
        if self._reference_tag is None:
            raise ContextStateError("Reference tag must be installed before finalizing")

        try:
            trailing = self._cipher_ctx.finalize_with_tag(self._reference_tag)
            auth_ok = True
        except InvalidTag:
            trailing = b""
            auth_ok = False
        except (ValueError, TypeError) as e:
            raise CipherOperationError(f"Decryption finalization failed: {e}") from e

        self.bytes_produced += len(trailing)
        self.state = ContextState.FINALIZED
        return trailing, auth_ok

    def release(self) -> None:
        """Drop the primitive session and clear scratch memory."""
        if self.state is ContextState.RELEASED:
            return
        if self._scratch is not None:
            secure_zero(self._scratch)
            self._scratch = None
        self._cipher_ctx = None
        self._reference_tag = None
        self.state = ContextState.RELEASED

    @property
    def is_released(self) -> bool:
        return self.state is ContextState.RELEASED
