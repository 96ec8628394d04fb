# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from users_api.domain.users.entities import User as DomainUser
from users_api.domain.users.exceptions import DuplicateEmailError
from users_api.domain.users.repositories import AccessTokenRepository, UserRepository
from users_api.infrastructure.db.models import AccessToken, User
from users_api.infrastructure.unit_of_work import unit_of_work_scope


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        lastname=row.lastname,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _is_email_conflict(exc: IntegrityError) -> bool:
    detail = str(exc.orig).lower()
    return "uq_users_email" in detail or "users.email" in detail


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with unit_of_work_scope(self._session_factory) as session:
            row = User(
                name=user.name,
                lastname=user.lastname,
                email=user.email,
                password_hash=user.password_hash,
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                if _is_email_conflict(exc):
                    raise DuplicateEmailError() from exc
                raise
            session.refresh(row)
            return _to_domain(row)

    def update_fields(self, user_id: int, changes: Mapping[str, str]) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            if changes:
                try:
                    session.execute(
                        update(User).where(User.id == user_id).values(**changes)
                    )
                except IntegrityError as exc:
                    if _is_email_conflict(exc):
                        raise DuplicateEmailError(
                            "Email address is already associated with another user"
                        ) from exc
                    raise
            row = session.get(User, user_id, populate_existing=True)
            return _to_domain(row) if row else None


class SqlAlchemyAccessTokenRepository(AccessTokenRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, user_id: int, token_hash: str, expires_at: datetime) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.add(
                AccessToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
            )

    def find_user_id(self, token_hash: str, now: datetime) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalars(
                select(AccessToken.user_id).where(
                    AccessToken.token_hash == token_hash,
                    AccessToken.expires_at > now,
                )
            ).first()

    def revoke(self, token_hash: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(delete(AccessToken).where(AccessToken.token_hash == token_hash))

    def purge_expired(self, user_id: int, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                delete(AccessToken).where(
                    AccessToken.user_id == user_id,
                    AccessToken.expires_at <= now,
                )
            )
            return int(result.rowcount or 0)
