# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import IssuedToken, TokenClaims, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update_name(self, user_id: int, name: str) -> User | None: ...
    def update_password_hash(self, user_id: int, password_hash: str) -> User | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user: User) -> IssuedToken: ...
    def verify(self, token: str) -> TokenClaims: ...
    def fingerprint(self, user: User) -> str: ...


class LoginThrottle(Protocol):
    def is_limited(self, key: str) -> bool: ...
    def retry_after(self, key: str) -> float: ...
    def record_failure(self, key: str) -> None: ...
    def reset(self, key: str) -> None: ...
