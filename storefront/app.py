# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import importlib
from datetime import timedelta
from typing import Any, Protocol, cast

from flask import Flask, Response

from storefront.infrastructure.admin_setup import setup_admin_user
from storefront.infrastructure.container import Container
from storefront.infrastructure.db import init_db
from storefront.shared.config import AppConfig, load_config
from storefront.shared.logging import logger, setup_logging
from storefront.shared.middleware.error_handler import configure_error_handling
from storefront.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


def _configure_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    if container is None:
        container = Container(config or load_config())
    config = container.config

    setup_logging(debug_mode=config.debug_logging)

    init_db(container.engine)
    setup_admin_user(config, container.bootstrap_admin_use_case)

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_NAME=config.session_cookie_name,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=config.session_cookie_secure,
        SESSION_COOKIE_SAMESITE=config.session_cookie_samesite,
        PERMANENT_SESSION_LIFETIME=timedelta(seconds=config.session_lifetime),
    )
    app.session_interface = container.session_interface

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.allowed_origins}},
        "allow_headers": ["Authorization", "Content-Type", "X-Request-ID"],
    }
    CORS(app, **cors_kwargs)

    container.dispatcher.mount_all(app, container.route_groups())
    _configure_security_headers(app, config)

    app.extensions["storefront.container"] = container
    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    _config = load_config()
    create_app(_config).run(host="0.0.0.0", port=8000, debug=_config.debug_logging)
