# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import Request, g, request

from fitsync.application.use_cases.users.authenticate_request import AuthenticateRequestUseCase
from fitsync.domain.users.entities import User
from fitsync.domain.users.exceptions import AuthError
from fitsync.infrastructure.observability import record_auth_event
from fitsync.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


class AuthedRequest(Request):
    user_id: int


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def current_user() -> User:
    return cast(User, g.current_user)


class RequireAuth:
    """Decorator gating a view on a valid ``Authorization: Bearer`` header.

    On success the user is attached to ``flask.g`` and ``request.user_id``;
    on failure the AuthError propagates to the error handler as a 401.
    """

    def __init__(self, authenticate: AuthenticateRequestUseCase) -> None:
        self._authenticate = authenticate

    def __call__(self, view: F) -> F:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            try:
                user = self._authenticate.execute(request.headers.get("Authorization"))
            except AuthError as exc:
                logger.warning(
                    f"auth.guard: rejected {request.method} {request.path} reason={exc.code}"
                )
                record_auth_event("guard", exc.code)
                raise
            g.current_user = user
            g.user_id = user.id
            authed_request().user_id = user.id
            return view(*args, **kwargs)

        return cast(F, inner)


__all__ = ["AuthedRequest", "RequireAuth", "authed_request", "current_user"]
