"""
Configuration management for aeadgcm.

Holds the location of a stored AES key for the command-line tool and the
log level it runs with. Keys are supplied by the user; nothing here
generates or derives key material.
"""

import logging
import os
from typing import Optional

from .crypto.selector import SUPPORTED_KEY_LENGTHS
from .crypto.utils import format_hex

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "AEADGCM_HOME"
LOG_LEVEL_ENV_VAR = "AEADGCM_LOG_LEVEL"
DEFAULT_CONFIG_DIR = "~/.aeadgcm"
DEFAULT_LOG_LEVEL = "WARNING"
KEY_FILE_NAME = "key.hex"


class ConfigError(Exception):
    """Raised when configuration operations fail."""
    pass


def _is_ascii_hex(data: bytes) -> bool:
    return all(c in b"0123456789abcdefABCDEF" for c in data)


def configured_log_level() -> int:
    """Log level from $AEADGCM_LOG_LEVEL, WARNING when unset or unknown."""
    name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def load_key_file(key_file_path: str) -> bytes:
    """
    Load an AES key from a file.

    Supported formats:
    - Raw binary (16, 24 or 32 bytes)
    - Hex encoded (32, 48 or 64 characters), optionally newline terminated

    Args:
        key_file_path: Path to the key file

    Returns:
        The raw key bytes

    Raises:
        FileNotFoundError: If the key file doesn't exist
        ValueError: If the key file format is invalid
    """
    with open(key_file_path, 'rb') as f:
        key_data = f.read()

    if len(key_data) in SUPPORTED_KEY_LENGTHS:
        if len(key_data) // 2 in SUPPORTED_KEY_LENGTHS and _is_ascii_hex(key_data):
            logger.debug(
                f"Key file {key_file_path} is {len(key_data)} hex characters; "
                f"loading it as a raw {len(key_data)}-byte key"
            )
        return key_data

    stripped = key_data.rstrip(b'\r\n')
    if len(stripped) % 2 == 0 and len(stripped) // 2 in SUPPORTED_KEY_LENGTHS:
        try:
            return bytes.fromhex(stripped.decode('ascii'))
        except (ValueError, UnicodeDecodeError):
            pass

    raise ValueError(
        "Invalid key file format. Expected 16/24/32 raw bytes or "
        f"32/48/64 hex characters, got {len(key_data)} bytes"
    )


def write_key_file(key_file_path: str, key: bytes) -> None:
    """
    Write a key to a file as hex with owner-only permissions.

    Args:
        key_file_path: Destination path
        key: Raw key bytes (16, 24 or 32)
    """
    if len(key) not in SUPPORTED_KEY_LENGTHS:
        raise ValueError(f"Key must be 16, 24 or 32 bytes, got {len(key)}")

    directory = os.path.dirname(key_file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(key_file_path, 'w', encoding='ascii') as f:
        f.write(format_hex(key) + '\n')
    os.chmod(key_file_path, 0o600)


class AeadConfig:
    """
    Simple configuration manager for the aeadgcm command-line tool.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_dir: Directory for configuration files. Defaults to
                $AEADGCM_HOME or ~/.aeadgcm/
        """
        if config_dir is None:
            config_dir = os.environ.get(HOME_ENV_VAR, DEFAULT_CONFIG_DIR)

        self.config_dir = os.path.expanduser(config_dir)
        self.key_file_path = os.path.join(self.config_dir, KEY_FILE_NAME)

        os.makedirs(self.config_dir, exist_ok=True)

    @property
    def log_level(self) -> int:
        """Log level from $AEADGCM_LOG_LEVEL, WARNING when unset or unknown."""
        return configured_log_level()

    def get_key(self) -> bytes:
        """
        Load the stored key.

        Returns:
            bytes: The 16, 24 or 32 byte key

        Raises:
            ConfigError: If the key cannot be loaded
        """
        try:
            return load_key_file(self.key_file_path)
        except FileNotFoundError:
            raise ConfigError(f"Key file not found: {self.key_file_path}")
        except ValueError as e:
            raise ConfigError(f"Invalid key format: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load key: {e}")

    def set_key(self, hex_key: str) -> None:
        """
        Store a key given as a hex string.

        Args:
            hex_key: 32, 48 or 64 character hex string

        Raises:
            ConfigError: If the key format is invalid
        """
        try:
            key = bytes.fromhex(hex_key.strip())
        except ValueError:
            raise ConfigError("Invalid hex characters in key")

        if len(key) not in SUPPORTED_KEY_LENGTHS:
            raise ConfigError("Key must be 32, 48 or 64 hex characters (16, 24 or 32 bytes)")

        try:
            write_key_file(self.key_file_path, key)
        except OSError as e:
            raise ConfigError(f"Failed to save key: {e}")
        logger.info(f"Key saved to: {self.key_file_path}")

    def set_key_from_file(self, source_file: str) -> None:
        """
        Copy a key from another file.

        Args:
            source_file: Path to an existing key file

        Raises:
            ConfigError: If the source file cannot be read or the key is invalid
        """
        try:
            key = load_key_file(source_file)
            write_key_file(self.key_file_path, key)
        except FileNotFoundError:
            raise ConfigError(f"Source key file not found: {source_file}")
        except ValueError as e:
            raise ConfigError(f"Invalid source key format: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to copy key: {e}")
        logger.info(f"Key copied to: {self.key_file_path}")

    def key_exists(self) -> bool:
        """Check if a key file exists."""
        return os.path.exists(self.key_file_path)
