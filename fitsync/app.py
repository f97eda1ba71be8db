# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import importlib
from typing import Any, Protocol, cast

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from fitsync.infrastructure.container import Container, container
from fitsync.infrastructure.db import init_db
from fitsync.interfaces.http.controllers.misc_controller import MiscController
from fitsync.shared.config import load_config
from fitsync.shared.logging import logger, setup_logging
from fitsync.shared.middleware.error_handler import configure_error_handling
from fitsync.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


_config = load_config()


def create_app(app_container: Container | None = None) -> Flask:
    init_db()
    setup_logging(debug_mode=_config.debug_logging)

    deps = app_container or container

    app = Flask(__name__)
    hops = _config.security.trusted_proxy_hops
    if hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)  # type: ignore[method-assign]
        logger.info(f"Trusting X-Forwarded-For from {hops} proxy hop(s)")

    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(SECRET_KEY=_config.secret_key)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": _config.security.allowed_origins}},
        "allow_headers": ["Authorization", "Content-Type", "X-Request-ID"],
        "expose_headers": ["X-Request-ID"],
    }
    CORS(app, **cors_kwargs)
    app.register_blueprint(MiscController().as_blueprint())
    app.register_blueprint(deps.auth_controller.as_blueprint())
    app.register_blueprint(deps.users_controller.as_blueprint())
    for controller in deps.record_controllers:
        app.register_blueprint(controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5001, debug=True)
