# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from users_api.domain.users.entities import AccessToken, User
from users_api.domain.users.repositories import Authenticator


class LoginUserUseCase:
    def __init__(self, *, authenticator: Authenticator) -> None:
        self._authenticator = authenticator

    def execute(self, email: str, password: str) -> tuple[User, AccessToken]:
        user = self._authenticator.verify_credentials(email, password)
        token = self._authenticator.issue_token(user)
        return user, token
