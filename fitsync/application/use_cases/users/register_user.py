# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from fitsync.domain.users.entities import IssuedToken, User, normalize_email
from fitsync.domain.users.exceptions import UserAlreadyExistsError
from fitsync.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> tuple[User, IssuedToken]:
        email = normalize_email(email)
        # Best-effort pre-check; the repository's unique index has the final say.
        if self._users.find_by_email(email):
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name.strip(),
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        return persisted, self._tokens.issue(persisted)
