"""
Configuration tests for aeadgcm.
"""

import logging
import os

import pytest

from aeadgcm.config import AeadConfig, ConfigError, load_key_file, write_key_file


class TestKeyFile:
    """Test key file loading formats."""

    @pytest.mark.parametrize("key_length", [16, 24, 32])
    def test_raw_binary_key(self, tmp_path, key_length):
        """Test raw binary key files."""
        key = bytes([0xF0 + (i % 16) for i in range(key_length)])
        path = tmp_path / "raw.bin"
        path.write_bytes(key)

        assert load_key_file(str(path)) == key

    @pytest.mark.parametrize("suffix", ["", "\n", "\r\n"])
    def test_hex_key(self, tmp_path, suffix):
        """Test hex key files, with and without a line ending."""
        key = bytes(range(24))
        path = tmp_path / "key.hex"
        path.write_text(key.hex() + suffix)

        assert load_key_file(str(path)) == key

    def test_raw_length_takes_precedence_over_hex(self, tmp_path, caplog):
        """Test a 32-byte file of hex digits loads as a raw AES-256 key."""
        key = b"0123456789abcdef" * 2
        path = tmp_path / "ambiguous.bin"
        path.write_bytes(key)

        with caplog.at_level(logging.DEBUG, logger="aeadgcm.config"):
            loaded = load_key_file(str(path))

        assert loaded == key
        assert "raw 32-byte key" in caplog.text

    def test_newline_terminated_hex_is_not_raw(self, tmp_path):
        """Test 32 hex characters plus newline load as a 16-byte key."""
        key = bytes(range(16))
        path = tmp_path / "key.hex"
        path.write_text(key.hex() + "\n")

        assert load_key_file(str(path)) == key

    def test_invalid_length(self, tmp_path):
        """Test files of unsupported size are rejected."""
        path = tmp_path / "bad.bin"
        path.write_bytes(bytes(20))

        with pytest.raises(ValueError):
            load_key_file(str(path))

    def test_missing_file(self, tmp_path):
        """Test missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_key_file(str(tmp_path / "missing"))

    def test_write_key_file(self, tmp_path):
        """Test written key files round-trip and are owner-only."""
        key = bytes(range(24))
        path = tmp_path / "sub" / "key.hex"
        write_key_file(str(path), key)

        assert load_key_file(str(path)) == key
        assert oct(os.stat(path).st_mode & 0o777) == oct(0o600)

    def test_write_rejects_bad_key(self, tmp_path):
        """Test unsupported key sizes are not written."""
        with pytest.raises(ValueError):
            write_key_file(str(tmp_path / "key.hex"), bytes(10))


class TestAeadConfig:
    """Test the configuration manager."""

    def test_initial_state(self, tmp_path):
        """Test a fresh config directory has no key."""
        config = AeadConfig(str(tmp_path / "cfg"))

        assert os.path.isdir(config.config_dir)
        assert not config.key_exists()
        with pytest.raises(ConfigError):
            config.get_key()

    def test_set_and_get_key(self, tmp_path):
        """Test storing and loading a hex key."""
        config = AeadConfig(str(tmp_path))
        hex_key = "a1b2c3d4e5f6789012345678901234567890abcdef1234567890abcdef123456"

        config.set_key(hex_key)

        assert config.key_exists()
        assert config.get_key() == bytes.fromhex(hex_key)

    @pytest.mark.parametrize("hex_key", ["zz" * 16, "00" * 10, ""])
    def test_set_invalid_key(self, tmp_path, hex_key):
        """Test invalid hex keys are rejected."""
        config = AeadConfig(str(tmp_path))

        with pytest.raises(ConfigError):
            config.set_key(hex_key)
        assert not config.key_exists()

    def test_set_key_from_file(self, tmp_path):
        """Test copying a key from a binary file."""
        source = tmp_path / "source.bin"
        source.write_bytes(bytes(range(32)))

        config = AeadConfig(str(tmp_path / "cfg"))
        config.set_key_from_file(str(source))

        assert config.get_key() == bytes(range(32))

    def test_set_key_from_missing_file(self, tmp_path):
        """Test copying from a missing file fails."""
        config = AeadConfig(str(tmp_path))

        with pytest.raises(ConfigError):
            config.set_key_from_file(str(tmp_path / "missing"))

    def test_home_environment_variable(self, tmp_path, monkeypatch):
        """Test $AEADGCM_HOME overrides the default directory."""
        monkeypatch.setenv("AEADGCM_HOME", str(tmp_path / "home"))

        config = AeadConfig()

        assert config.config_dir == str(tmp_path / "home")
        assert config.key_file_path == str(tmp_path / "home" / "key.hex")

    @pytest.mark.parametrize("value,expected", [
        (None, logging.WARNING),
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("nonsense", logging.WARNING),
    ])
    def test_log_level(self, tmp_path, monkeypatch, value, expected):
        """Test log level resolution from the environment."""
        if value is None:
            monkeypatch.delenv("AEADGCM_LOG_LEVEL", raising=False)
        else:
            monkeypatch.setenv("AEADGCM_LOG_LEVEL", value)

        assert AeadConfig(str(tmp_path)).log_level == expected
