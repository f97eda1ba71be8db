# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from fitsync.domain.users.entities import IssuedToken, User, normalize_email
from fitsync.domain.users.exceptions import InvalidCredentialsError, TooManyAttemptsError
from fitsync.domain.users.repositories import (
    LoginThrottle,
    PasswordHasher,
    TokenService,
    UserRepository,
)


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
        attempts: LoginThrottle,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._attempts = attempts
        # verified against when the email is unknown so both paths pay for one hash check
        self._dummy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(
        self, email: str, password: str, source: str | None = None
    ) -> tuple[User, IssuedToken]:
        key = source or "unknown"
        if self._attempts.is_limited(key):
            raise TooManyAttemptsError(retry_after=self._attempts.retry_after(key))

        user = self._users.find_by_email(normalize_email(email))
        # Unknown email and wrong password must be indistinguishable.
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            self._attempts.record_failure(key)
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(password, user.password_hash):
            self._attempts.record_failure(key)
            raise InvalidCredentialsError()

        self._attempts.reset(key)
        return user, self._tokens.issue(user)
