# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from fitsync.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    error_code = "user_already_exists"
    error_status = HTTPStatus.CONFLICT
    error_message = "User already exists"


class AuthError(DomainError):
    """Any failure that forces the caller to (re-)authenticate."""

    error_code = "unauthorized"
    error_status = HTTPStatus.UNAUTHORIZED
    error_message = "Not authorized"


class InvalidCredentialsError(AuthError):
    error_code = "invalid_credentials"
    error_message = "Invalid email or password"


class TooManyAttemptsError(AuthError):
    error_code = "too_many_attempts"
    error_status = HTTPStatus.TOO_MANY_REQUESTS
    error_message = "Too many failed login attempts, try again later"

    def __init__(self, retry_after: float = 0) -> None:
        super().__init__(context={"retry_after_seconds": round(retry_after, 1)})
        self.retry_after = retry_after


class MissingTokenError(AuthError):
    error_code = "missing_token"
    error_message = "Authorization header must be 'Bearer <token>'"


class InvalidTokenError(AuthError):
    error_code = "invalid_token"
    error_message = "Session token is invalid"


class ExpiredTokenError(AuthError):
    error_code = "token_expired"
    error_message = "Session token has expired"


class UserNotFoundError(AuthError):
    error_code = "user_not_found"
    error_message = "Account no longer exists"


class SessionSupersededError(AuthError):
    error_code = "session_superseded"
    error_message = "Session was invalidated by a password change"
