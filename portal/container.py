# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from portal.application.services.password_hashing import WerkzeugPasswordHasher
from portal.application.use_cases.users.login_user import LoginUserUseCase
from portal.domain.users.repositories import PasswordHasher, UserRepository
from portal.infrastructure.sessions import InMemorySessionStore, SessionStore
from portal.interfaces.http.controllers import (HomeController,
                                               LoginController,
                                               MypageController)
from portal.interfaces.http.router import Router
from portal.shared.config import AppConfig, load_config


class Container:
    """Lazily built object graph; tests swap parts by assigning attributes."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> UserRepository:
        from portal.infrastructure.repositories.users.sqlalchemy_user_repository import \
            SqlAlchemyUserRepository

        return SqlAlchemyUserRepository()

    @cached_property
    def session_store(self) -> SessionStore:
        if self.config.session.backend == "memory":
            return InMemorySessionStore()

        from portal.infrastructure.sessions.sqlalchemy_store import SqlAlchemySessionStore

        return SqlAlchemySessionStore()

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def home_controller(self) -> HomeController:
        return HomeController()

    @cached_property
    def login_controller(self) -> LoginController:
        return LoginController(login_use_case=self.login_user_use_case)

    @cached_property
    def mypage_controller(self) -> MypageController:
        return MypageController(users=self.user_repository)

    @cached_property
    def router(self) -> Router:
        return Router().register(
            self.home_controller,
            self.login_controller,
            self.mypage_controller,
        )
