# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable, Mapping
from http import HTTPStatus
from typing import Any, NoReturn

from flask import Response, abort, current_app, render_template, request, session
from flask import redirect as flask_redirect
from jinja2 import TemplateNotFound
from markupsafe import Markup, escape

from portal.interfaces.http.helpers.csrf import FORM_FIELD, CsrfHelper
from portal.interfaces.http.helpers.escaping import escape_data
from portal.interfaces.http.helpers.validator import Validator
from portal.interfaces.http.router import Route
from portal.interfaces.http.views import LAYOUT_TEMPLATE, View, resolve_template, view_name
from portal.shared.logging import logger

LOGIN_URL = "/login"
CSRF_HEADER = "X-CSRF-Token"


class BaseController:
    """Request and response plumbing shared by every controller.

    ``redirect`` and ``json_response`` end the request by raising, so nothing
    after them runs. ``render`` returns the response and the action returns it
    in turn.
    """

    name: str = ""

    def routes(self) -> Iterable[Route]:
        return ()

    @property
    def session(self):
        return session

    @property
    def csrf(self) -> CsrfHelper:
        return CsrfHelper(session)

    def render(
        self,
        view: View | str,
        data: Mapping[str, Any] | None = None,
        *,
        status: int = HTTPStatus.OK,
    ) -> Response:
        context: dict[str, Any] = escape_data(dict(data or {}))
        context["csrf_token"] = self.csrf.get_token()
        context["csrf_input"] = self.csrf.hidden_input()

        template = resolve_template(view)
        if template is None:
            return self._view_not_found(view, status)
        try:
            content = render_template(template, **context)
        except TemplateNotFound:
            return self._view_not_found(view, status)

        page = render_template(LAYOUT_TEMPLATE, **{**context, "content": Markup(content)})
        return Response(page, status=status, mimetype="text/html")

    def _view_not_found(self, view: View | str, status: int) -> Response:
        name = view_name(view)
        logger.warning(f"render: view not found name={name}")
        return Response(f"View file not found: {escape(name)}", status=status, mimetype="text/html")

    def redirect(self, url: str) -> NoReturn:
        abort(flask_redirect(url))

    def is_logged_in(self) -> bool:
        return "user_id" in session

    def require_auth(self) -> None:
        if not self.is_logged_in():
            logger.info(f"auth: anonymous request to {request.path}, redirecting to login")
            self.redirect(LOGIN_URL)

    def verify_csrf_token(self, token: str | None = None) -> bool:
        if token is None:
            token = request.form.get(FORM_FIELD) or request.headers.get(CSRF_HEADER, "")
        return self.csrf.verify_token(token)

    def validator(self, data: Mapping[str, Any] | None = None) -> Validator:
        return Validator(request.form if data is None else data)

    def json_response(self, data: Any, status: int = HTTPStatus.OK) -> NoReturn:
        body = current_app.json.dumps(data, ensure_ascii=False)
        abort(
            Response(
                body,
                status=status,
                content_type="application/json; charset=utf-8",
            )
        )


__all__ = ["BaseController", "LOGIN_URL"]
