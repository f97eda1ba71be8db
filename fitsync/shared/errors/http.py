# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flask error handlers turning exceptions into the JSON error envelope."""

from __future__ import annotations

import math
from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from fitsync.shared.config import load_config
from fitsync.shared.logging import get_correlation_id, logger

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    if error.status == HTTPStatus.UNAUTHORIZED:
        response.headers["WWW-Authenticate"] = f'Bearer error="{error.code}"'
    elif error.status == HTTPStatus.TOO_MANY_REQUESTS:
        retry_after = (error.context or {}).get("retry_after_seconds", 0)
        response.headers["Retry-After"] = str(max(1, math.ceil(float(retry_after))))
    return response, error.status


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    debug_mode = load_config().debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        log = logger.warning if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR else logger.info
        log(f"{request.method} {request.path} -> {int(exc.status)} {exc.code}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        request_id = get_correlation_id()
        if debug_mode:
            logger.exception(
                f"Unhandled {type(exc).__name__} on {request.method} {request.path} "
                f"user={getattr(g, 'user_id', None)} body_size={len(request.data)}"
            )
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {request.method} {request.path}")

        payload = {
            "error": "internal_error",
            "message": "Server error",
            "context": {"request_id": request_id},
        }
        return jsonify(payload), default_status
