# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from users_api.domain.users.entities import User
from users_api.domain.users.exceptions import NotFoundError
from users_api.domain.users.repositories import UserRepository


class ShowUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(context={"user_id": user_id})
        return user
