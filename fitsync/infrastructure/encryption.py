# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64
import sys

from cryptography.fernet import Fernet, InvalidToken

from fitsync.shared.config import load_config
from fitsync.shared.logging import logger

_DEV_KEY_RAW = b"fitsync-dev-session-store-key-32"


class EncryptionService:
    """Fernet wrapper used to seal the client's persisted session."""

    def __init__(self, key: bytes | str | None = None) -> None:
        if key is None:
            key = self._load_key_from_config()
        if isinstance(key, str):
            key = key.encode("utf-8")
        self._fernet = Fernet(key)
        logger.debug("EncryptionService initialized")

    @staticmethod
    def _load_key_from_config() -> bytes:
        config = load_config()
        key_str = config.client.store_key or ""
        if not key_str:
            if config.is_production():
                print(
                    "\n❌ CRITICAL: CLIENT_STORE_KEY not set in production!\n"
                    "   The persisted session cannot be encrypted without a key.\n"
                    "   Generate one with: python -c \"from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())\"\n",
                    file=sys.stderr,
                )
                sys.exit(1)
            logger.warning(
                "CLIENT_STORE_KEY not set, using fixed development key. DO NOT use this in production!"
            )
            return base64.urlsafe_b64encode(_DEV_KEY_RAW)
        raw = base64.urlsafe_b64decode(key_str)
        if len(raw) != 32:
            raise ValueError("CLIENT_STORE_KEY must decode to 32 bytes")
        return key_str.encode("utf-8")

    def encrypt(self, plaintext: bytes) -> bytes:
        return self._fernet.encrypt(plaintext)

    def decrypt(self, ciphertext: bytes) -> bytes:
        try:
            return self._fernet.decrypt(ciphertext)
        except InvalidToken as exc:
            raise ValueError("Failed to decrypt: invalid key or corrupted data") from exc


__all__ = ["EncryptionService"]
