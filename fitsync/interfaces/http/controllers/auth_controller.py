# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fitsync.application.use_cases.users.login_user import LoginUserUseCase
from fitsync.application.use_cases.users.logout_user import LogoutUserUseCase
from fitsync.application.use_cases.users.register_user import RegisterUserUseCase
from fitsync.domain.users.exceptions import AuthError
from fitsync.infrastructure.observability import record_auth_event
from fitsync.interfaces.http.auth_guard import RequireAuth, current_user
from fitsync.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    LoginRequestDTO,
    OkDTO,
    RegisterRequestDTO,
    UserSummaryDTO,
    VerifyResponseDTO,
)
from fitsync.shared.errors.validation import raise_validation_error
from fitsync.shared.logging import logger


def _get_client_ip() -> str | None:
    # ProxyFix rewrites remote_addr when TRUSTED_PROXY_HOPS is set
    return request.remote_addr


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        require_auth: RequireAuth,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._require_auth = require_auth

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user, issued = self._register_use_case.execute(dto.name, dto.email, dto.password)
        except Exception:
            record_auth_event("register", "failure")
            raise

        record_auth_event("register", "success")
        logger.info(f"auth.register: ok user_id={user.id}")
        payload = AuthSuccessDTO(
            token=issued.token, user=UserSummaryDTO.model_validate(user)
        ).model_dump()
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            user, issued = self._login_use_case.execute(dto.email, dto.password, ip_address)
        except AuthError as exc:
            record_auth_event("login", exc.code)
            logger.warning(f"auth.login: rejected ip={ip_address} reason={exc.code}")
            raise

        record_auth_event("login", "success")
        logger.info(f"auth.login: ok user_id={user.id}")
        payload = AuthSuccessDTO(
            token=issued.token, user=UserSummaryDTO.model_validate(user)
        ).model_dump()
        return jsonify(payload), 200

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute()
        record_auth_event("logout", "success")
        return jsonify(OkDTO().model_dump()), 200

    def verify(self) -> tuple[Response, int]:
        user = current_user()
        payload = VerifyResponseDTO(user=UserSummaryDTO.model_validate(user)).model_dump()
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule(
            "/verify", view_func=self._require_auth(self.verify), methods=["GET"], endpoint="verify"
        )
        return bp
