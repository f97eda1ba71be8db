# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""CRUD endpoints for one kind of user-owned record."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from fitsync.application.use_cases.records.manage_records import ManageRecordsUseCase
from fitsync.interfaces.http.auth_guard import RequireAuth, current_user
from fitsync.interfaces.http.dto.auth import OkDTO
from fitsync.shared.errors.validation import raise_validation_error
from fitsync.shared.logging import logger


class RecordsController:
    def __init__(
        self,
        *,
        collection: str,
        use_case: ManageRecordsUseCase[Any],
        create_dto: type[BaseModel],
        update_dto: type[BaseModel],
        output_dto: type[BaseModel],
        require_auth: RequireAuth,
    ) -> None:
        self._collection = collection
        self._use_case = use_case
        self._create_dto = create_dto
        self._update_dto = update_dto
        self._output_dto = output_dto
        self._require_auth = require_auth

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint(self._collection, __name__, url_prefix=f"/api/{self._collection}")
        guard = self._require_auth
        bp.add_url_rule("", view_func=guard(self.list_records), methods=["GET"], endpoint="list")
        bp.add_url_rule(
            "", view_func=guard(self.create_record), methods=["POST"], endpoint="create"
        )
        bp.add_url_rule(
            "/<int:record_id>",
            view_func=guard(self.update_record),
            methods=["PUT"],
            endpoint="update",
        )
        bp.add_url_rule(
            "/<int:record_id>",
            view_func=guard(self.delete_record),
            methods=["DELETE"],
            endpoint="delete",
        )
        return bp

    def _render(self, record: Any) -> dict[str, Any]:
        return self._output_dto.model_validate(record).model_dump(mode="json", by_alias=True)

    def _parse(self, dto_type: type[BaseModel]) -> Any:
        try:
            return dto_type.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

    def list_records(self) -> Response:
        records = self._use_case.list(current_user().id)
        return jsonify([self._render(record) for record in records])

    def create_record(self) -> tuple[Response, int]:
        dto = self._parse(self._create_dto)
        record = self._use_case.create(current_user().id, dto.to_values())
        logger.info(f"{self._collection}.create: id={record.id} user_id={record.user_id}")
        return jsonify(self._render(record)), 201

    def update_record(self, record_id: int) -> Response:
        dto = self._parse(self._update_dto)
        record = self._use_case.update(current_user().id, record_id, dto.to_values())
        logger.info(f"{self._collection}.update: id={record.id} user_id={record.user_id}")
        return jsonify(self._render(record))

    def delete_record(self, record_id: int) -> Response:
        self._use_case.delete(current_user().id, record_id)
        logger.info(f"{self._collection}.delete: id={record_id} user_id={current_user().id}")
        return jsonify(OkDTO().model_dump())
