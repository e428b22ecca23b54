"""
Tests for services/encryption.py (AES-256-GCM field encryption)
"""

import base64

import pytest
from cryptography.exceptions import InvalidTag

from services.encryption import EncryptionService

SECRET = "unit_test_wallet_secret_0123456789"


class TestAesGcm:

    def test_decrypts_with_same_salt(self):
        ciphertext, nonce, tag = EncryptionService.encrypt_aes_gcm("secret key", "user_1", SECRET)

        assert len(nonce) == 12
        assert len(tag) == 16
        assert EncryptionService.decrypt_aes_gcm(ciphertext, nonce, tag, "user_1", SECRET) == "secret key"

    def test_other_salt_fails(self):
        ciphertext, nonce, tag = EncryptionService.encrypt_aes_gcm("secret key", "user_1", SECRET)

        with pytest.raises(InvalidTag):
            EncryptionService.decrypt_aes_gcm(ciphertext, nonce, tag, "user_2", SECRET)

    def test_nonce_is_random(self):
        first = EncryptionService.encrypt_to_text("secret key", "user_1", SECRET)
        second = EncryptionService.encrypt_to_text("secret key", "user_1", SECRET)

        assert first != second

    def test_empty_plaintext_rejected(self):
        with pytest.raises(ValueError):
            EncryptionService.encrypt_aes_gcm("", "user_1", SECRET)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            EncryptionService.encrypt_aes_gcm("secret key", "user_1", "")


class TestTextPacking:

    def test_text_payload(self):
        payload = EncryptionService.encrypt_to_text("secret key", "user_1", SECRET)

        raw = base64.b64decode(payload)
        assert len(raw) == 12 + len("secret key") + 16
        assert EncryptionService.decrypt_from_text(payload, "user_1", SECRET) == "secret key"

    def test_tampered_payload(self):
        raw = bytearray(base64.b64decode(EncryptionService.encrypt_to_text("secret key", "user_1", SECRET)))
        raw[15] ^= 0x01

        with pytest.raises(InvalidTag):
            EncryptionService.decrypt_from_text(base64.b64encode(bytes(raw)).decode(), "user_1", SECRET)

    def test_short_payload(self):
        with pytest.raises(ValueError):
            EncryptionService.decrypt_from_text(base64.b64encode(b"short").decode(), "user_1", SECRET)
