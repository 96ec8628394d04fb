# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential verification and bearer token lifecycle."""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from users_api.domain.users.entities import AccessToken, User
from users_api.domain.users.exceptions import InvalidPasswordError, UserNotFoundError
from users_api.domain.users.repositories import (AccessTokenRepository,
                                                 Authenticator, PasswordHasher,
                                                 UserRepository)
from users_api.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


def digest_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class TokenAuthenticator(Authenticator):
    """Opaque bearer tokens backed by a digest table.

    The plaintext token leaves the process once, in the login response. Only
    its SHA-256 digest is persisted, so a leaked table cannot be replayed.
    Revocation deletes the digest row.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: AccessTokenRepository,
        password_hasher: PasswordHasher,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def verify_credentials(self, email: str, password: str) -> User:
        user = self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()
        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidPasswordError()
        return user

    def issue_token(self, user: User, ttl: timedelta | None = None) -> AccessToken:
        now = self._clock()
        expires_at = now + (ttl or self._ttl)
        purged = self._tokens.purge_expired(user.id, now)
        if purged:
            logger.debug(f"auth.tokens: purged {purged} expired tokens for user={user.id}")

        token = secrets.token_urlsafe(48)
        self._tokens.add(user.id, digest_token(token), expires_at)
        logger.info(
            f"Issued token for user={user.id} exp={expires_at.isoformat()} tok={token[:8]}…"
        )
        return AccessToken(user_id=user.id, token=token, expires_at=expires_at)

    def end_session(self, token: str) -> None:
        if token:
            self._tokens.revoke(digest_token(token))

    def resolve(self, token: str) -> int | None:
        if not token:
            return None
        return self._tokens.find_user_id(digest_token(token), self._clock())
