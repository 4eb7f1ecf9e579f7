"""AES-GCM helpers for encrypting sensitive values at rest.

Values are encrypted with a key derived from a password by SHA-256 and
returned as base64 of ``iv || ciphertext``, where the IV is 12 random bytes.
"""

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

IV_LENGTH = 12


class EncryptionError(RuntimeError):
    """Raised when a value cannot be encrypted or decrypted."""


def _key_from_password(password: str) -> bytes:
    return hashlib.sha256(password.encode("utf-8")).digest()


def encrypt_value(value: str, password: str) -> str:
    """Encrypt a string and return base64(iv || ciphertext)."""
    iv = os.urandom(IV_LENGTH)
    ciphertext = AESGCM(_key_from_password(password)).encrypt(
        iv, value.encode("utf-8"), None
    )
    return base64.b64encode(iv + ciphertext).decode("ascii")


def decrypt_value(encrypted_value: str, password: str) -> str:
    """Decrypt a value produced by :func:`encrypt_value`."""
    try:
        payload = base64.b64decode(encrypted_value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncryptionError("Failed to decrypt value") from exc
    if len(payload) <= IV_LENGTH:
        raise EncryptionError("Failed to decrypt value")
    iv, ciphertext = payload[:IV_LENGTH], payload[IV_LENGTH:]
    try:
        plaintext = AESGCM(_key_from_password(password)).decrypt(iv, ciphertext, None)
    except InvalidTag as exc:
        raise EncryptionError("Failed to decrypt value") from exc
    return plaintext.decode("utf-8")


def mask_sensitive_data(value: str, reveal: int = 4) -> str:
    """Mask all but the last ``reveal`` characters, capping the mask at 8."""
    if not value or len(value) <= reveal:
        return value
    masked_length = len(value) - reveal
    return "*" * min(masked_length, 8) + value[masked_length:]
