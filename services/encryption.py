"""
Generic Encryption Service

Provides AES-256-GCM encryption for sensitive data fields such as the
private keys of user bitcoin addresses.

This is a pure crypto library with no database dependencies.
Business logic and storage are handled by domain services (e.g., BitcoinAddressService).

Usage:
    ciphertext, nonce, tag = EncryptionService.encrypt_aes_gcm(
        plaintext="L1aW4aubDFB7yfras2S1mN3bqg9nwySY8nkoLmJebSLD5BWv3ENZ",
        salt_component="user_3f2a...",
        secret=config.WALLET_KEY_SECRET
    )

    # Single text column storage
    stored = EncryptionService.encrypt_to_text(plaintext, salt_component)
    plaintext = EncryptionService.decrypt_from_text(stored, salt_component)
"""

import os
import base64
import logging
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes

import config

logger = logging.getLogger(__name__)

NONCE_LENGTH = 12
TAG_LENGTH = 16


class EncryptionService:
    """
    Generic encryption service for sensitive data fields.

    Design Principles:
    - Pure functions (no side effects, no DB access)
    - Configurable secrets (different secrets for different data types)
    - Generic salt components (user_id, address_id, etc.)
    - Testable in isolation
    """

    @staticmethod
    def _derive_aes_key(salt_component: str, secret: str) -> bytes:
        """
        Derive AES encryption key from master secret + salt using PBKDF2.

        Args:
            salt_component: Unique component for key derivation (e.g., "user_456")
            secret: Master secret from config

        Returns:
            32-byte encryption key

        Raises:
            ValueError: If secret is empty
        """
        if not secret:
            raise ValueError("Encryption secret cannot be empty")

        # Combine secret and salt component for unique key per entity
        salt = secret.encode() + salt_component.encode()

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,  # 256-bit key
            salt=salt,
            iterations=100000,  # OWASP recommendation (2023)
        )
        return kdf.derive(secret.encode())

    @staticmethod
    def encrypt_aes_gcm(
        plaintext: str,
        salt_component: str,
        secret: str | None = None
    ) -> tuple[bytes, bytes, bytes]:
        """
        Encrypt plaintext with AES-256-GCM.

        Args:
            plaintext: Plain text to encrypt
            salt_component: Unique component for key derivation (e.g., "user_123")
            secret: Master secret (defaults to WALLET_KEY_SECRET)

        Returns:
            Tuple of (ciphertext, nonce, tag)

        Raises:
            ValueError: If plaintext or secret is empty
        """
        if not plaintext:
            raise ValueError("Plaintext cannot be empty")

        # Use default if None, but reject explicit empty string
        if secret is None:
            secret = config.WALLET_KEY_SECRET

        key = EncryptionService._derive_aes_key(salt_component, secret)
        aesgcm = AESGCM(key)

        # Generate random 96-bit nonce (GCM standard)
        nonce = os.urandom(NONCE_LENGTH)
        plaintext_bytes = plaintext.encode('utf-8')

        # GCM mode returns ciphertext + tag concatenated
        ciphertext_with_tag = aesgcm.encrypt(nonce, plaintext_bytes, None)

        ciphertext = ciphertext_with_tag[:-TAG_LENGTH]
        tag = ciphertext_with_tag[-TAG_LENGTH:]

        return ciphertext, nonce, tag

    @staticmethod
    def decrypt_aes_gcm(
        ciphertext: bytes,
        nonce: bytes,
        tag: bytes,
        salt_component: str,
        secret: str | None = None
    ) -> str:
        """
        Decrypt AES-256-GCM encrypted data.

        Raises:
            ValueError: If secret is empty
            cryptography.exceptions.InvalidTag: If decryption fails (wrong key, tampered data)
        """
        if secret is None:
            secret = config.WALLET_KEY_SECRET

        key = EncryptionService._derive_aes_key(salt_component, secret)
        aesgcm = AESGCM(key)

        ciphertext_with_tag = ciphertext + tag
        plaintext_bytes = aesgcm.decrypt(nonce, ciphertext_with_tag, None)

        return plaintext_bytes.decode('utf-8')

    @staticmethod
    def encrypt_to_text(plaintext: str, salt_component: str, secret: str | None = None) -> str:
        """
        Encrypt and pack as base64(nonce + ciphertext + tag) for a text column.
        """
        ciphertext, nonce, tag = EncryptionService.encrypt_aes_gcm(plaintext, salt_component, secret)
        return base64.b64encode(nonce + ciphertext + tag).decode('ascii')

    @staticmethod
    def decrypt_from_text(payload: str, salt_component: str, secret: str | None = None) -> str:
        raw = base64.b64decode(payload)
        if len(raw) <= NONCE_LENGTH + TAG_LENGTH:
            raise ValueError("Encrypted payload is too short")
        nonce = raw[:NONCE_LENGTH]
        ciphertext = raw[NONCE_LENGTH:-TAG_LENGTH]
        tag = raw[-TAG_LENGTH:]
        return EncryptionService.decrypt_aes_gcm(ciphertext, nonce, tag, salt_component, secret)
