"""
Security utilities for encrypting provider API keys at rest.
"""

import base64
import os
from functools import lru_cache
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

# Default salt for key derivation (in production, this should be stored securely)
DEFAULT_SALT = b"command_assistant_salt_2024"


@lru_cache(maxsize=8)
def _derive_key(password: str) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=DEFAULT_SALT,
        iterations=480000,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode()))


def get_encryption_key(password: Optional[str] = None) -> bytes:
    """
    Generate an encryption key from a password or environment variable.

    Args:
        password: Optional password to derive key from. If None, uses
            COMMAND_ASSISTANT_ENCRYPTION_KEY.

    Returns:
        Encryption key bytes.
    """
    if password is None:
        password = os.environ.get(
            "COMMAND_ASSISTANT_ENCRYPTION_KEY", "default_key_for_local_use"
        )
    return _derive_key(password)


def encrypt_api_key(api_key: str, password: Optional[str] = None) -> str:
    """
    Encrypt an API key for secure storage.

    Args:
        api_key: The API key to encrypt.
        password: Optional password for encryption.

    Returns:
        Encrypted API key as a base64-encoded string.
    """
    fernet = Fernet(get_encryption_key(password))
    encrypted = fernet.encrypt(api_key.encode())
    return base64.urlsafe_b64encode(encrypted).decode()


def decrypt_api_key(encrypted_key: str, password: Optional[str] = None) -> str:
    """
    Decrypt an encrypted API key.

    Args:
        encrypted_key: The encrypted API key (base64-encoded).
        password: Optional password for decryption.

    Returns:
        Decrypted API key.
    """
    fernet = Fernet(get_encryption_key(password))
    encrypted_bytes = base64.urlsafe_b64decode(encrypted_key.encode())
    return fernet.decrypt(encrypted_bytes).decode()


def decrypt_api_key_safe(encrypted_key: Optional[str]) -> str:
    """Decrypt a stored key; returns "" when unset or not decryptable with the current key."""
    if not encrypted_key:
        return ""
    try:
        return decrypt_api_key(encrypted_key)
    except (InvalidToken, ValueError):
        return ""
