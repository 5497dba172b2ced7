from __future__ import annotations

import pytest

from conftest import DeterministicHasher, InMemoryUserRepository
from portal.application.services.password_hashing import WerkzeugPasswordHasher
from portal.application.use_cases.users.login_user import LoginUserUseCase
from portal.domain.users.exceptions import InvalidCredentialsError


def make_use_case(users: InMemoryUserRepository) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, password_hasher=DeterministicHasher())


def test_login_returns_user(users: InMemoryUserRepository) -> None:
    user = make_use_case(users).execute("alice", "secret123")

    assert user.id == 1
    assert user.email == "alice@portal.io"


@pytest.mark.parametrize(
    ("username", "password"),
    [("alice", "wrong"), ("nobody", "secret123"), ("ALICE", "secret123")],
)
def test_login_rejects_bad_credentials(
    users: InMemoryUserRepository, username: str, password: str
) -> None:
    with pytest.raises(InvalidCredentialsError) as exc_info:
        make_use_case(users).execute(username, password)

    assert exc_info.value.status == 401


def test_werkzeug_hasher_verifies_its_own_hashes() -> None:
    hasher = WerkzeugPasswordHasher()
    hashed = hasher.hash("パスワード")

    assert hashed != "パスワード"
    assert hasher.verify("パスワード", hashed)
    assert not hasher.verify("password", hashed)


class RecordingHasher(DeterministicHasher):
    def __init__(self) -> None:
        self.verified: list[str] = []

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return super().verify(password, hashed)


def test_unknown_username_still_checks_a_hash(users: InMemoryUserRepository) -> None:
    hasher = RecordingHasher()
    use_case = LoginUserUseCase(users=users, password_hasher=hasher)

    for _ in range(2):
        with pytest.raises(InvalidCredentialsError):
            use_case.execute("nobody", "secret123")

    assert len(hasher.verified) == 2
    assert hasher.verified[0] == hasher.verified[1]
    assert hasher.verified[0].startswith("hashed:")
