# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for the signed-in user's own profile."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fitsync.application.use_cases.users.manage_profile import (
    ChangePasswordUseCase,
    UpdateProfileUseCase,
)
from fitsync.infrastructure.observability import record_auth_event
from fitsync.interfaces.http.auth_guard import RequireAuth, current_user
from fitsync.interfaces.http.dto.auth import AuthSuccessDTO, UserSummaryDTO
from fitsync.interfaces.http.dto.users import (
    ChangePasswordRequestDTO,
    ProfileDTO,
    UpdateProfileRequestDTO,
)
from fitsync.shared.errors.validation import raise_validation_error
from fitsync.shared.logging import logger


class UsersController:
    def __init__(
        self,
        *,
        update_profile: UpdateProfileUseCase,
        change_password: ChangePasswordUseCase,
        require_auth: RequireAuth,
    ) -> None:
        self._update_profile = update_profile
        self._change_password = change_password
        self._require_auth = require_auth

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        guard = self._require_auth
        bp.add_url_rule(
            "/profile", view_func=guard(self.get_profile), methods=["GET"], endpoint="profile_get"
        )
        bp.add_url_rule(
            "/profile",
            view_func=guard(self.update_profile),
            methods=["PUT"],
            endpoint="profile_update",
        )
        bp.add_url_rule(
            "/password",
            view_func=guard(self.change_password),
            methods=["POST"],
            endpoint="password_change",
        )
        return bp

    def get_profile(self) -> Response:
        profile = ProfileDTO.model_validate(current_user())
        return jsonify(profile.model_dump(mode="json", by_alias=True))

    def update_profile(self) -> Response:
        try:
            dto = UpdateProfileRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._update_profile.execute(current_user().id, dto.name)
        logger.info(f"users.profile: renamed user_id={user.id}")
        return jsonify(ProfileDTO.model_validate(user).model_dump(mode="json", by_alias=True))

    def change_password(self) -> Response:
        try:
            dto = ChangePasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, issued = self._change_password.execute(
            current_user(), dto.current_password, dto.new_password
        )
        record_auth_event("password_change", "success")
        logger.info(f"users.password: changed user_id={user.id}, older sessions superseded")
        payload = AuthSuccessDTO(token=issued.token, user=UserSummaryDTO.model_validate(user))
        return jsonify(payload.model_dump())
