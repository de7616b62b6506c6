"""Symmetric at-rest encryption for entry content."""

from __future__ import annotations

from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from flask import current_app

EXTENSION_KEY = "entry_cipher"


class CipherError(Exception):
    """Raised when stored ciphertext cannot be decrypted."""


class EntryCipher:
    """Fernet wrapper. Disabled when no key is configured."""

    def __init__(self, key: Optional[str]) -> None:
        self._fernet = Fernet(key.encode()) if key else None

    @property
    def enabled(self) -> bool:
        return self._fernet is not None

    def encrypt(self, plaintext: str) -> str:
        if not self._fernet:
            return plaintext
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        if not self._fernet:
            raise CipherError("encryption key not configured")
        try:
            return self._fernet.decrypt(ciphertext.encode("ascii")).decode("utf-8")
        except (InvalidToken, ValueError) as exc:
            raise CipherError("invalid ciphertext") from exc


def get_cipher() -> EntryCipher:
    return current_app.extensions[EXTENSION_KEY]
