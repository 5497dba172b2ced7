from __future__ import annotations

import pytest
from flask import Flask

from portal.interfaces.http.router import Route, Router, parse_path
from portal.shared.errors import MethodNotAllowedError, RouteNotFoundError
from portal.shared.middleware.error_handler import configure_error_handling


@pytest.mark.parametrize(
    ("path", "controller", "action", "params"),
    [
        ("", "HomeController", "index", ()),
        ("/", "HomeController", "index", ()),
        ("/mypage", "MypageController", "index", ()),
        ("/mypage/", "MypageController", "index", ()),
        ("/login/authenticate", "LoginController", "authenticate", ()),
        ("/posts/show/12/comments", "PostsController", "show", ("12", "comments")),
        ("/myPage/index", "MyPageController", "index", ()),
    ],
)
def test_parse_path(path: str, controller: str, action: str, params: tuple) -> None:
    match = parse_path(path)

    assert (match.controller, match.action, match.params) == (controller, action, params)


class StubController:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def index(self):
        self.calls.append(("index",))
        return "home"

    def show(self, item_id, section="main"):
        self.calls.append(("show", item_id, section))
        return f"{item_id}:{section}"

    def silent(self):
        self.calls.append(("silent",))

    def routes(self):
        return [
            Route("HomeController", "index", self.index),
            Route("PostsController", "show", self.show, ("GET", "POST")),
            Route("PostsController", "silent", self.silent),
        ]


@pytest.fixture()
def stub() -> StubController:
    return StubController()


@pytest.fixture()
def router(stub: StubController) -> Router:
    return Router().register(stub)


def test_resolve_known_routes(router: Router) -> None:
    route, params = router.resolve("/", "GET")
    assert route.endpoint == "HomeController.index"
    assert params == ()

    route, params = router.resolve("/posts/show/7/intro", "POST")
    assert route.endpoint == "PostsController.show"
    assert params == ("7", "intro")


def test_head_is_served_by_get_routes(router: Router) -> None:
    route, _ = router.resolve("/", "HEAD")
    assert route.action == "index"


def test_missing_controller_is_404(router: Router) -> None:
    with pytest.raises(RouteNotFoundError) as exc_info:
        router.resolve("/nosuchthing", "GET")

    assert "NosuchthingController" in exc_info.value.to_text()
    assert exc_info.value.status == 404


def test_missing_action_is_404(router: Router) -> None:
    with pytest.raises(RouteNotFoundError) as exc_info:
        router.resolve("/posts/delete", "GET")

    assert exc_info.value.detail == "Action 'delete' not found in PostsController"


def test_unbindable_params_are_404(router: Router) -> None:
    with pytest.raises(RouteNotFoundError) as exc_info:
        router.resolve("/home/index/extra", "GET")

    assert "does not accept 1 parameter(s)" in exc_info.value.detail


def test_wrong_method_is_405(router: Router) -> None:
    with pytest.raises(MethodNotAllowedError) as exc_info:
        router.resolve("/", "POST")

    assert exc_info.value.allowed == ["GET"]


def test_duplicate_route_is_rejected(router: Router, stub: StubController) -> None:
    with pytest.raises(ValueError):
        router.add(Route("HomeController", "index", stub.index))


@pytest.fixture()
def flask_app(router: Router) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    app.register_blueprint(router.as_blueprint())
    return app


def test_dispatch_through_flask(flask_app: Flask, stub: StubController) -> None:
    with flask_app.test_client() as client:
        assert client.get("/").get_data(as_text=True) == "home"
        assert client.get("/posts/show/3").get_data(as_text=True) == "3:main"

    assert stub.calls == [("index",), ("show", "3", "main")]


def test_dispatch_404_has_plain_text_diagnostic(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/nosuchthing")

    assert response.status_code == 404
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True) == (
        "404 Not Found - Controller 'NosuchthingController' not found"
    )


def test_dispatch_405_sets_allow_header(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.delete("/posts/show/1")

    assert response.status_code == 405
    assert response.headers["Allow"] == "GET, POST"


def test_action_without_response_is_500(flask_app: Flask, stub: StubController) -> None:
    with flask_app.test_client() as client:
        response = client.get("/posts/silent")

    assert response.status_code == 500
    assert stub.calls == [("silent",)]
