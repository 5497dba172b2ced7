# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import time
from datetime import timedelta

from flask import Flask

from portal.container import Container
from portal.infrastructure.db import init_db
from portal.infrastructure.sessions import ServerSideSessionInterface
from portal.shared.config import AppConfig, load_config
from portal.shared.logging import logger, setup_logging
from portal.shared.middleware.error_handler import configure_error_handling
from portal.shared.middleware.request_logger import configure_request_logging


def _purge_expired_sessions(container: Container) -> None:
    container.session_store.purge_expired(container.config.session.lifetime, int(time.time()))


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    setup_logging(debug_mode=config.debug_logging)
    init_db(config.database)
    _purge_expired_sessions(container)

    app = Flask(__name__, static_folder=None)
    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_NAME=config.session.cookie_name,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SECURE=config.security.cookie_secure,
        SESSION_COOKIE_SAMESITE=config.security.cookie_samesite,
        PERMANENT_SESSION_LIFETIME=timedelta(seconds=config.session.lifetime),
        CSRF_ENABLED=config.security.enable_csrf,
    )
    app.session_interface = ServerSideSessionInterface(
        container.session_store, lifetime=config.session.lifetime
    )

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.register_blueprint(container.router.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "same-origin")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        resp.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; frame-ancestors 'none'; form-action 'self'",
        )

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"Flask app initialized: routes={len(container.router.routes())} "
        f"sessions={config.session.backend}"
    )
    return app
