from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Iterator
from datetime import UTC, datetime

_TMP_DIR = tempfile.mkdtemp(prefix="portal-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'portal.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP_DIR, "app.log"))
os.environ.setdefault("SESSION_BACKEND", "memory")

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from portal.app import create_app  # noqa: E402
from portal.container import Container  # noqa: E402
from portal.domain.users.entities import User  # noqa: E402
from portal.domain.users.exceptions import UserAlreadyExistsError  # noqa: E402
from portal.domain.users.repositories import PasswordHasher, UserRepository  # noqa: E402
from portal.infrastructure.sessions import InMemorySessionStore  # noqa: E402
from portal.shared.config import AppConfig  # noqa: E402

CSRF_INPUT_RE = re.compile(r'name="csrf_token" value="([0-9a-f]{64})"')


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        if self.find_by_username(user.username) is not None:
            raise UserAlreadyExistsError()
        new_user = User(
            id=self._seq,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def remove(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def make_user(username: str, email: str, password: str) -> User:
    return User(
        id=0,
        username=username,
        email=email,
        password_hash=f"hashed:{password}",
        created_at=datetime.now(UTC),
    )


@pytest.fixture()
def users() -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    repo.add(make_user("alice", "alice@portal.io", "secret123"))
    repo.add(make_user("太郎", "taro@portal.io", "password123"))
    return repo


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(APP_ENV="test", SECRET_KEY="test-secret")


@pytest.fixture()
def container(config: AppConfig, users: InMemoryUserRepository) -> Container:
    container = Container(config)
    container.user_repository = users
    container.password_hasher = DeterministicHasher()
    container.session_store = InMemorySessionStore()
    return container


@pytest.fixture()
def app(container: Container) -> Flask:
    app = create_app(container.config, container)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client


def fetch_csrf_token(client: FlaskClient, path: str = "/login") -> str:
    response = client.get(path)
    match = CSRF_INPUT_RE.search(response.get_data(as_text=True))
    assert match, f"no csrf input rendered on {path}"
    return match.group(1)


def login(client: FlaskClient, username: str = "alice", password: str = "secret123"):
    token = fetch_csrf_token(client)
    return client.post(
        "/login/authenticate",
        data={"username": username, "password": password, "csrf_token": token},
    )
