from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime

import pytest

from users_api.domain.users.entities import User
from users_api.domain.users.exceptions import DuplicateEmailError
from users_api.domain.users.repositories import (AccessTokenRepository,
                                                 PasswordHasher, UserRepository)
from users_api.shared.config import AppConfig, DatabaseConfig, SecurityConfig


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        if self.find_by_email(user.email):
            raise DuplicateEmailError()
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def update_fields(self, user_id: int, changes: Mapping[str, str]) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = replace(user, **dict(changes))
        self._users[user_id] = updated
        return updated

    def count(self) -> int:
        return len(self._users)


class InMemoryTokenRepository(AccessTokenRepository):
    def __init__(self) -> None:
        self.rows: dict[str, tuple[int, datetime]] = {}

    def add(self, user_id: int, token_hash: str, expires_at: datetime) -> None:
        self.rows[token_hash] = (user_id, expires_at)

    def find_user_id(self, token_hash: str, now: datetime) -> int | None:
        row = self.rows.get(token_hash)
        if row is None or row[1] <= now:
            return None
        return row[0]

    def revoke(self, token_hash: str) -> None:
        self.rows.pop(token_hash, None)

    def purge_expired(self, user_id: int, now: datetime) -> int:
        stale = [h for h, (uid, exp) in self.rows.items() if uid == user_id and exp <= now]
        for token_hash in stale:
            del self.rows[token_hash]
        return len(stale)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test-secret",
        database=DatabaseConfig(url="sqlite://"),
        security=SecurityConfig(token_ttl_seconds=3 * 24 * 60 * 60),
    )
