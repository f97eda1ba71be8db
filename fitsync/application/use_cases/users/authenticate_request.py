# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac

from fitsync.domain.users.entities import User
from fitsync.domain.users.exceptions import (
    MissingTokenError,
    SessionSupersededError,
    UserNotFoundError,
)
from fitsync.domain.users.repositories import TokenService, UserRepository

_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from a ``Bearer <token>`` header or raise MissingTokenError."""

    if not authorization:
        raise MissingTokenError()
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != _SCHEME or not parts[1]:
        raise MissingTokenError()
    return parts[1]


class AuthenticateRequestUseCase:
    """Resolve an Authorization header to the user it authenticates."""

    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, authorization: str | None) -> User:
        token = extract_bearer_token(authorization)
        claims = self._tokens.verify(token)

        user = self._users.find_by_id(claims.subject)
        if user is None:
            raise UserNotFoundError()

        if not hmac.compare_digest(claims.version, self._tokens.fingerprint(user)):
            raise SessionSupersededError()

        return user
