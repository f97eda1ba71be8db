# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens (HS256 JWT).

A token carries the user id and a fingerprint taken from the tail of the
user's current password hash. Changing the password changes the fingerprint,
which invalidates every token issued before it without a revocation list.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from fitsync.domain.users.entities import IssuedToken, TokenClaims, User
from fitsync.domain.users.exceptions import ExpiredTokenError, InvalidTokenError
from fitsync.domain.users.repositories import TokenService

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["sub", "ver", "iat", "exp"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta = timedelta(days=7),
        fingerprint_length: int = 10,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._fingerprint_length = fingerprint_length
        self._clock = clock

    def fingerprint(self, user: User) -> str:
        return user.password_hash[-self._fingerprint_length:]

    def issue(self, user: User) -> IssuedToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        payload = {
            "sub": str(user.id),
            "ver": self.fingerprint(user),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=_ALGORITHM)
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                # expiry is checked against the injected clock below
                options={"require": _REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        try:
            subject = int(payload["sub"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (TypeError, ValueError, OverflowError, OSError) as exc:
            raise InvalidTokenError() from exc

        version = payload["ver"]
        if not isinstance(version, str) or not version:
            raise InvalidTokenError()

        if expires_at <= self._clock():
            raise ExpiredTokenError()

        return TokenClaims(
            subject=subject,
            version=version,
            issued_at=issued_at,
            expires_at=expires_at,
        )
