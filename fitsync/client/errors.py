# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Errors raised by the session client.

Every failure leaving the client is one of these; raw httpx exceptions are
always translated first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx


class SessionClientError(Exception):
    def __init__(
        self,
        message: str,
        *,
        code: str = "client_error",
        status: int | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.payload = dict(payload or {})


class NetworkError(SessionClientError):
    def __init__(self, message: str = "Network error, check your connection") -> None:
        super().__init__(message, code="network_error")


class NetworkTimeoutError(NetworkError):
    def __init__(self, message: str = "Request timed out") -> None:
        super().__init__(message)
        self.code = "network_timeout"


class ApiError(SessionClientError):
    """The server answered with an error status."""


class AuthError(ApiError):
    pass


class ValidationFailedError(ApiError):
    pass


class ConflictError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ServerError(ApiError):
    pass


_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationFailedError,
    401: AuthError,
    404: NotFoundError,
    409: ConflictError,
    429: AuthError,
}


def error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = None
    payload: dict[str, Any] = body if isinstance(body, dict) else {}

    status = response.status_code
    error_type = _BY_STATUS.get(status)
    if error_type is None:
        error_type = ServerError if status >= 500 else ApiError

    code = str(payload.get("error") or f"http_{status}")
    message = str(payload.get("message") or response.reason_phrase or code)
    return error_type(message, code=code, status=status, payload=payload)


__all__ = [
    "ApiError",
    "AuthError",
    "ConflictError",
    "NetworkError",
    "NetworkTimeoutError",
    "NotFoundError",
    "ServerError",
    "SessionClientError",
    "ValidationFailedError",
    "error_from_response",
]
