# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Sparse profile update for the authenticated user."""

from __future__ import annotations

from collections.abc import Mapping

from users_api.domain.users.entities import User
from users_api.domain.users.exceptions import DuplicateEmailError, NotFoundError
from users_api.domain.users.repositories import UserRepository

UPDATABLE_FIELDS = ("name", "lastname", "email")


class UpdateUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int, changes: Mapping[str, str]) -> User:
        """Apply only the supplied fields; absent fields keep their value.

        Concurrent updates are last-write-wins per submitted field set.
        """
        user = self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(context={"user_id": user_id})

        updates = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}

        email = updates.get("email")
        if email is not None and email != user.email:
            owner = self._users.find_by_email(email)
            if owner is not None and owner.id != user.id:
                raise DuplicateEmailError(
                    "Email address is already associated with another user"
                )

        if not updates:
            return user

        updated = self._users.update_fields(user.id, updates)
        if updated is None:
            raise NotFoundError(context={"user_id": user_id})
        return updated
