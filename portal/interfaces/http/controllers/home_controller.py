# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response

from portal.interfaces.http.controllers.base_controller import BaseController
from portal.interfaces.http.router import Route
from portal.interfaces.http.views import View


class HomeController(BaseController):
    name = "HomeController"

    def routes(self) -> list[Route]:
        return [Route(self.name, "index", self.index, ("GET",))]

    def index(self) -> Response:
        if self.is_logged_in():
            self.redirect("/mypage")

        return self.render(
            View.HOME_INDEX,
            {
                "title": "Login system demo",
                "message": "A small MVC site built with Flask",
            },
        )
