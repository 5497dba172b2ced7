# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from portal.domain.users.entities import User
from portal.domain.users.exceptions import InvalidCredentialsError
from portal.domain.users.repositories import PasswordHasher, UserRepository
from portal.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._dummy_hash: str | None = None

    def _unknown_user_hash(self) -> str:
        # an unknown username still pays for one hash check
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(secrets.token_hex(16))
        return self._dummy_hash

    def execute(self, username: str, password: str) -> User:
        user = self._users.find_by_username(username)
        stored_hash = user.password_hash if user is not None else self._unknown_user_hash()
        password_valid = self._password_hasher.verify(password, stored_hash)

        if user is None or not password_valid:
            logger.info(f"auth.login: rejected username={username}")
            raise InvalidCredentialsError()

        return user
