# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from users_api.application.services.authenticator import TokenAuthenticator
from users_api.application.services.password_hashing import \
    WerkzeugPasswordHasher
from users_api.application.use_cases.users.login_user import LoginUserUseCase
from users_api.application.use_cases.users.logout_user import LogoutUserUseCase
from users_api.application.use_cases.users.register_user import \
    RegisterUserUseCase
from users_api.application.use_cases.users.show_user import ShowUserUseCase
from users_api.application.use_cases.users.update_user import \
    UpdateUserUseCase
from users_api.domain.users.repositories import PasswordHasher
from users_api.infrastructure.db import Database
from users_api.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyAccessTokenRepository, SqlAlchemyUserRepository)
from users_api.interfaces.http.controllers.misc_controller import \
    MiscController
from users_api.interfaces.http.controllers.users_controller import \
    UsersController
from users_api.shared.config import AppConfig


class Container:
    """Builds every collaborator from one config; nothing is module-global."""

    def __init__(
        self,
        config: AppConfig,
        *,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self._password_hasher_override = password_hasher

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher_override or WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def access_token_repository(self) -> SqlAlchemyAccessTokenRepository:
        return SqlAlchemyAccessTokenRepository(self.database.session_factory)

    @cached_property
    def authenticator(self) -> TokenAuthenticator:
        return TokenAuthenticator(
            users=self.user_repository,
            tokens=self.access_token_repository,
            password_hasher=self.password_hasher,
            ttl=timedelta(seconds=self.config.security.token_ttl_seconds),
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(authenticator=self.authenticator)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(authenticator=self.authenticator)

    @cached_property
    def show_user_use_case(self) -> ShowUserUseCase:
        return ShowUserUseCase(users=self.user_repository)

    @cached_property
    def update_user_use_case(self) -> UpdateUserUseCase:
        return UpdateUserUseCase(users=self.user_repository)

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            show_use_case=self.show_user_use_case,
            update_use_case=self.update_user_use_case,
            authenticator=self.authenticator,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.database.engine)
