# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Durable key/value mirrors for the client session."""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from fitsync.infrastructure.encryption import EncryptionService
from fitsync.shared.config import ClientConfig, load_config
from fitsync.shared.logging import logger

TOKEN_KEY = "auth_token"
USER_KEY = "user_info"


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...
    async def set_many(self, items: Mapping[str, str]) -> None: ...
    async def remove(self, *keys: str) -> None: ...


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    async def remove(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class EncryptedFileKeyValueStore(KeyValueStore):
    """All entries live in one Fernet-sealed JSON document readable only by the owner."""

    def __init__(self, path: str | Path, *, encryption: EncryptionService | None = None) -> None:
        self._path = Path(path)
        self._encryption = encryption or EncryptionService()
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> EncryptedFileKeyValueStore:
        """Store at ``CLIENT_STORE_PATH`` sealed with ``CLIENT_STORE_KEY``."""

        cfg = config or load_config().client
        return cls(cfg.store_path, encryption=EncryptionService(cfg.store_key))

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set_many(self, items: Mapping[str, str]) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data.update(items)
            await asyncio.to_thread(self._write, data)

    async def remove(self, *keys: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            for key in keys:
                data.pop(key, None)
            await asyncio.to_thread(self._write, data)

    def _read(self) -> dict[str, str]:
        try:
            sealed = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(self._encryption.decrypt(sealed))
        except ValueError:
            logger.warning(f"session.store: unreadable store at {self._path}, starting empty")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        sealed = self._encryption.encrypt(json.dumps(data).encode("utf-8"))
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(sealed)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, self._path)


__all__ = [
    "EncryptedFileKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "TOKEN_KEY",
    "USER_KEY",
]
