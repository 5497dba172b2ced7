# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response

from portal.domain.users.entities import User
from portal.domain.users.repositories import UserRepository
from portal.infrastructure.audit import AuditAction, audit_log
from portal.interfaces.http.controllers.base_controller import LOGIN_URL, BaseController
from portal.interfaces.http.router import Route
from portal.interfaces.http.views import View


class MypageController(BaseController):
    name = "MypageController"

    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def routes(self) -> list[Route]:
        return [
            Route(self.name, "index", self.index, ("GET",)),
            Route(self.name, "profile", self.profile, ("GET",)),
        ]

    def _current_user(self) -> User:
        self.require_auth()
        user_id = self.session["user_id"]
        user = self._users.find_by_id(user_id)
        if user is None:
            # the account is gone: forget it and start over at the login page
            self.session.pop("user_id", None)
            audit_log(AuditAction.STALE_SESSION, user_id=user_id, success=False)
            self.redirect(LOGIN_URL)
        return user

    def index(self) -> Response:
        user = self._current_user()
        return self.render(
            View.MYPAGE_INDEX,
            {"title": "My page", "username": user.username},
        )

    def profile(self) -> Response:
        user = self._current_user()
        self.json_response({"id": user.id, "username": user.username, "email": user.email})
