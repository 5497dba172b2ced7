# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Front controller.

Every request path is read as ``/<controller>/<action>/<param>/...``. The
first segment picks the controller (``mypage`` -> ``MypageController``, empty
-> ``HomeController``), the second the action (default ``index``) and the
rest are passed to the action positionally. Lookups go through an explicit
table of ``Route`` bindings that controllers register; nothing is resolved by
reflection.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from flask import Blueprint, request

from portal.shared.errors import (MethodNotAllowedError, MissingResponseError,
                                  RouteNotFoundError)
from portal.shared.logging import logger

DEFAULT_CONTROLLER = "HomeController"
DEFAULT_ACTION = "index"
DISPATCH_METHODS: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@dataclass(slots=True, frozen=True)
class Route:
    controller: str
    action: str
    handler: Callable[..., Any]
    methods: tuple[str, ...] = ("GET",)

    @property
    def endpoint(self) -> str:
        return f"{self.controller}.{self.action}"

    def allows(self, method: str) -> bool:
        method = method.upper()
        if method == "HEAD":
            method = "GET"
        return method in self.methods


@dataclass(slots=True, frozen=True)
class RouteMatch:
    controller: str
    action: str
    params: tuple[str, ...] = ()


class RouteProvider(Protocol):
    def routes(self) -> Iterable[Route]: ...


def controller_name(segment: str) -> str:
    if not segment:
        return DEFAULT_CONTROLLER
    return f"{segment[:1].upper()}{segment[1:]}Controller"


def parse_path(path: str) -> RouteMatch:
    segments = path.strip("/").split("/")
    action = segments[1] if len(segments) > 1 and segments[1] else DEFAULT_ACTION
    return RouteMatch(
        controller=controller_name(segments[0]),
        action=action,
        params=tuple(segments[2:]),
    )


class Router:
    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] = {}

    def add(self, route: Route) -> None:
        actions = self._table.setdefault(route.controller, {})
        if route.action in actions:
            raise ValueError(f"Route {route.endpoint} is already registered")
        actions[route.action] = route

    def register(self, *providers: RouteProvider) -> Router:
        for provider in providers:
            for route in provider.routes():
                self.add(route)
        return self

    def routes(self) -> list[Route]:
        return [route for actions in self._table.values() for route in actions.values()]

    def resolve(self, path: str, method: str = "GET") -> tuple[Route, tuple[str, ...]]:
        match = parse_path(path)

        actions = self._table.get(match.controller)
        if actions is None:
            raise RouteNotFoundError(
                f"Controller '{match.controller}' not found",
                controller=match.controller,
            )

        route = actions.get(match.action)
        if route is None:
            raise RouteNotFoundError(
                f"Action '{match.action}' not found in {match.controller}",
                controller=match.controller,
                action=match.action,
            )

        if not route.allows(method):
            raise MethodNotAllowedError(method.upper(), route.methods)

        try:
            inspect.signature(route.handler).bind(*match.params)
        except TypeError:
            raise RouteNotFoundError(
                f"Action '{match.action}' in {match.controller} does not accept "
                f"{len(match.params)} parameter(s)",
                controller=match.controller,
                action=match.action,
            ) from None

        return route, match.params

    def dispatch(self, path: str = ""):
        route, params = self.resolve(path, request.method)
        logger.debug(f"router: {request.method} /{path} -> {route.endpoint}{list(params)}")

        response = route.handler(*params)
        if response is None:
            raise MissingResponseError(route.endpoint)
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("router", __name__)
        bp.add_url_rule(
            "/",
            endpoint="dispatch",
            view_func=self.dispatch,
            defaults={"path": ""},
            methods=DISPATCH_METHODS,
        )
        bp.add_url_rule(
            "/<path:path>",
            endpoint="dispatch",
            view_func=self.dispatch,
            methods=DISPATCH_METHODS,
        )
        return bp


__all__ = ["Route", "RouteMatch", "Router", "controller_name", "parse_path"]
