# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .api import FitSyncApi
from .errors import (
    ApiError,
    AuthError,
    ConflictError,
    NetworkError,
    NetworkTimeoutError,
    NotFoundError,
    ServerError,
    SessionClientError,
    ValidationFailedError,
)
from .session_client import SessionClient
from .state import SessionState, SessionStatus
from .storage import EncryptedFileKeyValueStore, InMemoryKeyValueStore, KeyValueStore

__all__ = [
    "ApiError",
    "AuthError",
    "ConflictError",
    "EncryptedFileKeyValueStore",
    "FitSyncApi",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "NetworkError",
    "NetworkTimeoutError",
    "NotFoundError",
    "ServerError",
    "SessionClient",
    "SessionClientError",
    "SessionState",
    "SessionStatus",
    "ValidationFailedError",
]
