"""
Crypto service - encrypts OAuth tokens before they are stored in the database.

Tokens are encrypted with AES-256-GCM. The stored format is:

    base64( nonce (12 bytes) || ciphertext+tag )

A fresh random nonce is used for every call, so encrypting the same token
twice yields different ciphertexts. GCM authenticates the data: a wrong key
or tampered ciphertext fails loudly instead of returning garbage.
"""

import base64
import binascii
import os
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.core.config import settings

KEY_SIZE = 32
NONCE_SIZE = 12


class CryptoError(Exception):
    """Raised when the key is misconfigured or a ciphertext cannot be decrypted."""


class CryptoService:
    """
    Symmetric encrypt/decrypt for short secrets (OAuth tokens).

    Example:
        crypto = CryptoService(b"01234567890123456789012345678901")
        token = crypto.encrypt("ya29.xxx")
        crypto.decrypt(token)  # "ya29.xxx"
    """

    def __init__(self, key: bytes):
        if len(key) != KEY_SIZE:
            raise CryptoError(f"Encryption key must be {KEY_SIZE} bytes, got {len(key)}")
        self._aead = AESGCM(key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt text and return a base64 string safe to store in a Text column."""
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + ciphertext).decode("ascii")

    def decrypt(self, token: str) -> str:
        """
        Decrypt a value produced by encrypt().

        Raises:
            CryptoError: Malformed base64, truncated data, wrong key or tampered data
        """
        try:
            raw = base64.b64decode(token.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise CryptoError("Ciphertext is not valid base64") from e

        if len(raw) <= NONCE_SIZE:
            raise CryptoError("Ciphertext is too short")

        nonce, ciphertext = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
        try:
            plaintext = self._aead.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise CryptoError("Ciphertext failed authentication") from e

        return plaintext.decode("utf-8")


@lru_cache
def get_crypto_service() -> CryptoService:
    """Crypto service built from settings.CRYPTO_KEY."""
    return CryptoService(settings.CRYPTO_KEY.encode("utf-8"))
