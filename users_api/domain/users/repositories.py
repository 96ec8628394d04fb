# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Protocol

from .entities import AccessToken, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update_fields(self, user_id: int, changes: Mapping[str, str]) -> User | None: ...


class AccessTokenRepository(Protocol):
    def add(self, user_id: int, token_hash: str, expires_at: datetime) -> None: ...
    def find_user_id(self, token_hash: str, now: datetime) -> int | None: ...
    def revoke(self, token_hash: str) -> None: ...
    def purge_expired(self, user_id: int, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class Authenticator(Protocol):
    def verify_credentials(self, email: str, password: str) -> User: ...
    def issue_token(self, user: User, ttl: timedelta | None = None) -> AccessToken: ...
    def end_session(self, token: str) -> None: ...
    def resolve(self, token: str) -> int | None: ...
