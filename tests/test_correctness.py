"""
Correctness Tests for aeadgcm.

Tests round-trip encryption/decryption, length invariants and known-answer vectors.
"""

import pytest

from aeadgcm import encrypt, decrypt, CipherVariant, select_cipher
from aeadgcm.crypto.utils import generate_random_bytes


KEY_LENGTHS = [16, 24, 32]


class TestRoundTrip:
    """Test round-trip encryption and decryption."""

    @pytest.mark.parametrize("key_length", KEY_LENGTHS)
    def test_basic_roundtrip(self, key_length):
        """Test basic message round-trip for every key size."""
        key = generate_random_bytes(key_length)
        iv = generate_random_bytes(12)
        plaintext = b"Hello, AES-GCM!"

        sealed = encrypt(key, iv, plaintext, None)
        opened = decrypt(key, iv, sealed.ciphertext, None, sealed.auth_tag)

        assert opened.plaintext == plaintext
        assert opened.auth_ok is True

    @pytest.mark.parametrize("key_length", KEY_LENGTHS)
    def test_roundtrip_with_associated_data(self, key_length):
        """Test round-trip with associated data."""
        key = generate_random_bytes(key_length)
        iv = generate_random_bytes(12)
        aad = b"header: v1"

        sealed = encrypt(key, iv, b"payload", aad)
        opened = decrypt(key, iv, sealed.ciphertext, aad, sealed.auth_tag)

        assert opened.plaintext == b"payload"
        assert opened.auth_ok

    @pytest.mark.parametrize("key_length", KEY_LENGTHS)
    def test_empty_message(self, key_length):
        """Test encryption of empty message."""
        key = generate_random_bytes(key_length)
        iv = generate_random_bytes(12)

        sealed = encrypt(key, iv, b"", None)
        assert sealed.ciphertext == b""
        assert len(sealed.auth_tag) == 16

        opened = decrypt(key, iv, b"", None, sealed.auth_tag)
        assert opened.plaintext == b""
        assert opened.auth_ok

    def test_large_message(self):
        """Test encryption of large message."""
        key = generate_random_bytes(32)
        iv = generate_random_bytes(12)
        plaintext = generate_random_bytes(1024 * 1024 + 7)

        sealed = encrypt(key, iv, plaintext)
        opened = decrypt(key, iv, sealed.ciphertext, None, sealed.auth_tag)

        assert opened.plaintext == plaintext
        assert opened.auth_ok

    def test_non_default_iv_length(self):
        """Test that IVs other than 12 bytes are passed through."""
        key = generate_random_bytes(16)
        for iv_length in (8, 16, 60):
            iv = generate_random_bytes(iv_length)
            sealed = encrypt(key, iv, b"odd iv")
            opened = decrypt(key, iv, sealed.ciphertext, None, sealed.auth_tag)
            assert opened.plaintext == b"odd iv"
            assert opened.auth_ok

    def test_buffer_types(self):
        """Test that bytearray and memoryview inputs are accepted."""
        key = bytearray(16)
        iv = memoryview(bytes(12))
        sealed = encrypt(key, iv, bytearray(b"buffer"), memoryview(b"aad"))
        opened = decrypt(key, iv, bytearray(sealed.ciphertext), b"aad",
                         memoryview(sealed.auth_tag))

        assert isinstance(sealed.ciphertext, bytes)
        assert opened.plaintext == b"buffer"
        assert opened.auth_ok


class TestInvariants:
    """Test output length invariants."""

    @pytest.mark.parametrize("size", [0, 1, 5, 15, 16, 17, 31, 32, 33, 1000])
    @pytest.mark.parametrize("key_length", KEY_LENGTHS)
    def test_ciphertext_length_matches_plaintext(self, key_length, size):
        """Test len(ciphertext) == len(plaintext) with no block padding."""
        key = generate_random_bytes(key_length)
        sealed = encrypt(key, bytes(12), generate_random_bytes(size))

        assert len(sealed.ciphertext) == size
        assert len(sealed.auth_tag) == 16

    def test_deterministic_for_same_inputs(self):
        """Test that identical inputs produce identical output."""
        key = generate_random_bytes(24)
        iv = generate_random_bytes(12)

        first = encrypt(key, iv, b"same", b"aad")
        second = encrypt(key, iv, b"same", b"aad")

        assert first == second

    def test_result_to_dict(self):
        """Test result conversion to dictionaries."""
        sealed = encrypt(bytes(16), bytes(12), b"hello")
        opened = decrypt(bytes(16), bytes(12), sealed.ciphertext, None, sealed.auth_tag)

        assert sealed.to_dict() == {'ciphertext': sealed.ciphertext, 'auth_tag': sealed.auth_tag}
        assert opened.to_dict() == {'plaintext': b"hello", 'auth_ok': True}


class TestConcreteScenario:
    """Test the all-zero key/IV "hello" scenario."""

    def test_hello_scenario(self):
        """Test encrypt, decrypt and tag tampering on a fixed input."""
        key = bytes(16)
        iv = bytes(12)

        sealed = encrypt(key, iv, b"hello", None)
        assert len(sealed.ciphertext) == 5
        assert len(sealed.auth_tag) == 16

        opened = decrypt(key, iv, sealed.ciphertext, None, sealed.auth_tag)
        assert opened.plaintext == b"hello"
        assert opened.auth_ok is True

        bad_tag = bytes([sealed.auth_tag[0] ^ 0x01]) + sealed.auth_tag[1:]
        tampered = decrypt(key, iv, sealed.ciphertext, None, bad_tag)
        assert tampered.auth_ok is False
        assert len(tampered.plaintext) == 5


class TestKnownAnswers:
    """GCM test vectors (McGrew & Viega, test cases 1, 2, 7, 8, 13, 14)."""

    @pytest.mark.parametrize("key_length,plaintext,ciphertext,tag", [
        (16, "", "", "58e2fccefa7e3061367f1d57a4e7455a"),
        (16, "00" * 16, "0388dace60b6a392f328c2b971b2fe78", "ab6e47d42cec13bdf53a67b21257bddf"),
        (24, "", "", "cd33b28ac773f74ba00ed1f312572435"),
        (24, "00" * 16, "98e7247c07f0fe411c267e4384b0f600", "2ff58d80033927ab8ef4d4587514f0fb"),
        (32, "", "", "530f8afbc74536b9a963b4f1c4cb738b"),
        (32, "00" * 16, "cea7403d4d606b6e074ec5d3baf39d18", "d0d1c8a799996bf0265b98b5d48ab919"),
    ])
    def test_zero_key_vectors(self, key_length, plaintext, ciphertext, tag):
        """Test encryption and decryption against published vectors."""
        key = bytes(key_length)
        iv = bytes(12)

        sealed = encrypt(key, iv, bytes.fromhex(plaintext))
        assert sealed.ciphertext.hex() == ciphertext
        assert sealed.auth_tag.hex() == tag

        opened = decrypt(key, iv, bytes.fromhex(ciphertext), None, bytes.fromhex(tag))
        assert opened.plaintext.hex() == plaintext
        assert opened.auth_ok


class TestCipherSelection:
    """Test key length to cipher variant mapping."""

    def test_variant_mapping(self):
        """Test each supported key length selects the matching variant."""
        assert select_cipher(16) is CipherVariant.AES_128_GCM
        assert select_cipher(24) is CipherVariant.AES_192_GCM
        assert select_cipher(32) is CipherVariant.AES_256_GCM

    def test_variant_attributes(self):
        """Test variant metadata."""
        variant = CipherVariant.AES_192_GCM
        assert variant.key_length == 24
        assert variant.key_bits == 192
        assert str(variant) == "AES-192-GCM"
