"""
Error taxonomy for the AES-GCM seal/open operations.

Argument problems are reported before any cryptographic work starts.
A failed authentication check is not an error: it is returned as
``auth_ok=False`` by :func:`aeadgcm.api.decrypt`.
"""


class AEADError(Exception):
    """Base class for all errors raised by aeadgcm."""
    pass


class ArgumentError(AEADError, TypeError):
    """Raised when a required argument is missing or not bytes-like."""
    pass


class InvalidKeyLength(AEADError, ValueError):
    """Raised when the key is not 16, 24 or 32 bytes long."""

    def __init__(self, key_length: int):
        self.key_length = key_length
        super().__init__(
            f"Invalid key length {key_length} bytes. "
            "Allowed are 128, 192 and 256 bits (16, 24 or 32 bytes)."
        )


class InvalidArguments(AEADError, ValueError):
    """Raised when decrypt arguments are malformed (wrong tag length)."""
    pass


class CipherOperationError(AEADError):
    """Raised when the underlying AEAD primitive fails."""
    pass
