# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Response, request

from portal.application.use_cases.users.login_user import LoginUserUseCase
from portal.domain.users.exceptions import InvalidCredentialsError
from portal.infrastructure.audit import AuditAction, audit_log
from portal.interfaces.http.controllers.base_controller import LOGIN_URL, BaseController
from portal.interfaces.http.router import Route
from portal.interfaces.http.views import View
from portal.shared.logging import logger
from portal.shared.middleware.csrf import csrf_protect

USERNAME_MAX_LENGTH = 50
INVALID_CREDENTIALS_MESSAGE = "Incorrect username or password."


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class LoginController(BaseController):
    name = "LoginController"

    def __init__(self, *, login_use_case: LoginUserUseCase) -> None:
        self._login_use_case = login_use_case

    def routes(self) -> list[Route]:
        return [
            Route(self.name, "index", self.index, ("GET", "POST")),
            Route(self.name, "authenticate", self.authenticate, ("POST",)),
            Route(self.name, "logout", self.logout, ("POST",)),
        ]

    def _render_form(
        self, *, error: str = "", username: str = "", status: int = HTTPStatus.OK
    ) -> Response:
        return self.render(
            View.LOGIN_INDEX,
            {
                "title": "Log in",
                "error": error,
                "old_input": {"username": username},
            },
            status=status,
        )

    def index(self) -> Response:
        if self.is_logged_in():
            self.redirect("/mypage")
        return self._render_form()

    @csrf_protect
    def authenticate(self) -> Response:
        username = request.form.get("username", "").strip()

        validator = (
            self.validator()
            .required("username", "Please enter your username.")
            .max_length(
                "username",
                USERNAME_MAX_LENGTH,
                f"Username must be at most {USERNAME_MAX_LENGTH} characters.",
            )
            .required("password", "Please enter your password.")
        )
        if not validator.is_valid():
            return self._render_form(
                error=validator.get_first_error(),
                username=username,
                status=HTTPStatus.UNPROCESSABLE_ENTITY,
            )

        ip_address = _get_client_ip()
        try:
            user = self._login_use_case.execute(username, request.form.get("password", ""))
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": username},
                success=False,
            )
            return self._render_form(
                error=INVALID_CREDENTIALS_MESSAGE,
                username=username,
                status=HTTPStatus.UNAUTHORIZED,
            )

        self.session.rotate()
        self.session["user_id"] = user.id
        self.csrf.generate_token()

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user.id, ip_address=ip_address)
        logger.info(f"auth.login: ok user_id={user.id}")
        self.redirect("/mypage")

    @csrf_protect
    def logout(self) -> Response:
        user_id = self.session.pop("user_id", None)
        self.csrf.remove_token()
        self.session.rotate()

        audit_log(AuditAction.LOGOUT, user_id=user_id, ip_address=_get_client_ip())
        logger.info(f"auth.logout: ok user_id={user_id}")
        self.redirect(LOGIN_URL)
