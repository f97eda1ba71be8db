# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from fitsync.infrastructure.health import check_database
from fitsync.infrastructure.observability import render_metrics


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/api/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"status": "ok"}
        try:
            latency_ms = check_database()
            status["database"] = "ok"
            status["databaseLatencyMs"] = round(latency_ms, 2)
        except Exception as exc:  # pragma: no cover
            status["status"] = "degraded"
            status["database"] = f"error: {type(exc).__name__}"
        return jsonify(status)

    def metrics(self) -> Response:
        body, content_type = render_metrics()
        return Response(body, mimetype=None, content_type=content_type)
