# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import current_app, request

from portal.shared.errors import CsrfTokenError
from portal.shared.logging import logger

SAFE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")


def _is_enabled() -> bool:
    return bool(current_app.config.get("CSRF_ENABLED", True))


def csrf_protect(action: Callable):
    """Reject unsafe requests whose CSRF token does not match the session.

    Decorates controller actions; the controller's own ``verify_csrf_token``
    does the comparison.
    """

    @wraps(action)
    def wrapper(controller, *args, **kwargs):
        if request.method in SAFE_METHODS or not _is_enabled():
            return action(controller, *args, **kwargs)
        if not controller.verify_csrf_token():
            logger.warning(f"csrf: rejected {request.method} {request.path}")
            raise CsrfTokenError()
        return action(controller, *args, **kwargs)

    return wrapper


__all__ = ["SAFE_METHODS", "csrf_protect"]
