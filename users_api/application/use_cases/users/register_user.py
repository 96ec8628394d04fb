# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from users_api.domain.users.entities import User
from users_api.domain.users.exceptions import DuplicateEmailError
from users_api.domain.users.repositories import PasswordHasher, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, lastname: str, email: str, password: str) -> User:
        # The UNIQUE constraint on users.email closes the race this check leaves open.
        if self._users.find_by_email(email):
            raise DuplicateEmailError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name,
            lastname=lastname,
            email=email,
            password_hash=hashed,
        )
        return self._users.add(user)
