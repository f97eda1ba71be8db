# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Async client that owns the signed-in session.

The client keeps an in-memory ``SessionState`` and mirrors it to a
``KeyValueStore`` so a session survives restarts. Every outbound request
carries the current token, and a 401 on a protected call (outside a short
grace window after signing in) drops the session.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from fitsync.shared.config import ClientConfig, load_config
from fitsync.shared.logging import logger

from .errors import (
    ApiError,
    AuthError,
    NetworkError,
    NetworkTimeoutError,
    SessionClientError,
    error_from_response,
)
from .state import SessionState, SessionStatus
from .storage import TOKEN_KEY, USER_KEY, KeyValueStore

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"
LOGOUT_PATH = "/api/auth/logout"
VERIFY_PATH = "/api/auth/verify"
PROFILE_PATH = "/api/users/profile"

# 401s from these paths never drop the session
_INTERCEPT_EXEMPT_PATHS = frozenset({LOGIN_PATH, REGISTER_PATH, PROFILE_PATH})


class SessionClient:
    def __init__(
        self,
        *,
        store: KeyValueStore,
        state: SessionState | None = None,
        config: ClientConfig | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        cfg = config or load_config().client
        self._store = store
        self._state = state if state is not None else SessionState()
        self._clock = clock
        self._max_attempts = cfg.max_attempts
        self._backoff_base = cfg.backoff_base
        self._auth_grace = cfg.auth_grace_seconds
        self._lock = asyncio.Lock()
        self._verify_task: asyncio.Task[SessionStatus] | None = None
        self._http = httpx.AsyncClient(
            base_url=base_url or cfg.base_url,
            timeout=httpx.Timeout(cfg.timeout),
            headers={"Accept": "application/json"},
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._intercept_unauthorized],
            },
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def verify_task(self) -> asyncio.Task[SessionStatus] | None:
        return self._verify_task

    async def __aenter__(self) -> SessionClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._verify_task is not None and not self._verify_task.done():
            self._verify_task.cancel()
        await self._http.aclose()

    # Session lifecycle

    async def login(self, email: str, password: str) -> dict[str, Any]:
        async with self._lock:
            response = await self._send(
                "POST",
                LOGIN_PATH,
                json={"email": email.strip().lower(), "password": password},
                retry=False,
            )
            await self._establish(response)
            logger.info("session.login: signed in")
            return dict(self._state.user or {})

    async def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        async with self._lock:
            response = await self._send(
                "POST",
                REGISTER_PATH,
                json={"name": name.strip(), "email": email.strip().lower(), "password": password},
                retry=False,
            )
            await self._establish(response)
            logger.info("session.register: account created and signed in")
            return dict(self._state.user or {})

    async def logout(self) -> None:
        async with self._lock:
            if self._state.token:
                try:
                    await self._send("POST", LOGOUT_PATH, retry=False)
                except SessionClientError as exc:
                    logger.info(f"session.logout: server acknowledgement skipped ({exc.code})")
            await self._clear()
            logger.info("session.logout: signed out")

    async def restore_session(self, *, verify: bool = True) -> bool:
        """Load a persisted session; optionally verify it in the background."""

        token = await self._store.get(TOKEN_KEY)
        raw_user = await self._store.get(USER_KEY)
        if not token or not raw_user:
            if token or raw_user:
                logger.warning("session.restore: partial session in storage, discarding")
                await self._clear()
            return False

        try:
            user = json.loads(raw_user)
            if not isinstance(user, dict):
                raise ValueError("user_info is not an object")
        except ValueError as exc:
            logger.warning(f"session.restore: corrupt user_info ({exc}), discarding")
            await self._clear()
            return False

        self._state.establish(token, user, status=SessionStatus.UNVERIFIED, auth_time=None)
        logger.info("session.restore: session loaded, not yet verified")
        if verify:
            self._verify_task = asyncio.create_task(self._background_verify())
        return True

    async def verify_session(self) -> SessionStatus:
        if not self._state.token:
            return self._state.status

        generation = self._state.generation
        try:
            response = await self._send("GET", VERIFY_PATH)
        except AuthError as exc:
            logger.info(f"session.verify: rejected ({exc.code})")
            return self._state.status
        except SessionClientError as exc:
            logger.warning(f"session.verify: server unreachable ({exc.code}), keeping session")
            return self._state.status

        body = self._json(response)
        if generation != self._state.generation:
            # signed in or out while the check was in flight
            return self._state.status
        if body.get("valid") is True:
            user = body.get("user")
            if isinstance(user, dict) and user != self._state.user:
                self._state.user = dict(user)
                await self._store.set_many({USER_KEY: json.dumps(user)})
            self._state.status = SessionStatus.VERIFIED
        return self._state.status

    async def adopt_token(self, token: str, user: Mapping[str, Any]) -> None:
        """Replace the session with a freshly issued token (e.g. after a password change)."""

        async with self._lock:
            await self._store.set_many({TOKEN_KEY: token, USER_KEY: json.dumps(dict(user))})
            self._state.establish(
                token, dict(user), status=SessionStatus.VERIFIED, auth_time=self._clock()
            )

    async def refresh_user(self, changes: Mapping[str, Any]) -> None:
        if self._state.user is None:
            return
        user = {**self._state.user, **changes}
        self._state.user = user
        await self._store.set_many({USER_KEY: json.dumps(user)})

    # Generic calls

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        retry: bool = True,
    ) -> Any:
        response = await self._send(method, path, json=json, retry=retry)
        if not response.content:
            return None
        return response.json()

    # Internals

    async def _background_verify(self) -> SessionStatus:
        try:
            return await self.verify_session()
        except Exception:
            logger.exception("session.verify: background verification crashed")
            return self._state.status

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        retry: bool = True,
    ) -> httpx.Response:
        attempts = self._max_attempts if retry else 1
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=self._backoff_base),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=lambda state: logger.warning(
                f"session.http: {method} {path} attempt={state.attempt_number} failed, retrying"
            ),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            raise NetworkTimeoutError() from exc
        except httpx.TransportError as exc:
            raise NetworkError() from exc

        if response.is_error:
            raise error_from_response(response)
        return response

    async def _establish(self, response: httpx.Response) -> None:
        body = self._json(response)
        token = body.get("token")
        user = body.get("user")
        if not isinstance(token, str) or not token or not isinstance(user, dict):
            raise ApiError(
                "Malformed authentication response",
                code="malformed_response",
                status=response.status_code,
                payload=body,
            )
        await self._store.set_many({TOKEN_KEY: token, USER_KEY: json.dumps(user)})
        self._state.establish(
            token, user, status=SessionStatus.VERIFIED, auth_time=self._clock()
        )

    async def _clear(self) -> None:
        self._state.clear()
        await self._store.remove(TOKEN_KEY, USER_KEY)

    @staticmethod
    def _json(response: httpx.Response) -> Mapping[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self._state.token
        if token and "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _intercept_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code != 401:
            return
        if response.request.url.path in _INTERCEPT_EXEMPT_PATHS:
            return
        last_auth = self._state.last_auth_time
        if last_auth is not None and self._clock() - last_auth <= self._auth_grace:
            logger.info("session.http: 401 inside post-auth grace window, keeping session")
            return
        if self._state.token is None:
            return
        logger.warning(f"session.http: 401 on {response.request.url.path}, clearing session")
        await self._clear()


__all__ = ["SessionClient"]
