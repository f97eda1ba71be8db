# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fitsync.domain.users.entities import IssuedToken, User
from fitsync.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from fitsync.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class UpdateProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int, name: str) -> User:
        updated = self._users.update_name(user_id, name.strip())
        if updated is None:
            raise UserNotFoundError()
        return updated


class ChangePasswordUseCase:
    """Replace the password hash and hand back a token for the new fingerprint.

    Every token issued before the change stops verifying.
    """

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

    def execute(
        self, user: User, current_password: str, new_password: str
    ) -> tuple[User, IssuedToken]:
        if not self._password_hasher.verify(current_password, user.password_hash):
            raise InvalidCredentialsError(message="Current password is incorrect")

        updated = self._users.update_password_hash(
            user.id, self._password_hasher.hash(new_password)
        )
        if updated is None:
            raise UserNotFoundError()
        return updated, self._tokens.issue(updated)
