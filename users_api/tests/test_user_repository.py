from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from users_api.domain.users.entities import User
from users_api.domain.users.exceptions import DuplicateEmailError
from users_api.infrastructure.db import Database
from users_api.infrastructure.db.models import AccessToken
from users_api.infrastructure.db.models import User as UserRow
from users_api.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyAccessTokenRepository, SqlAlchemyUserRepository)
from users_api.shared.config import DatabaseConfig
from users_api.shared.errors import InfrastructureError


@pytest.fixture()
def database():
    db = Database(DatabaseConfig(url="sqlite://"))
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture()
def repo(database: Database) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(database.session_factory)


@pytest.fixture()
def token_repo(database: Database) -> SqlAlchemyAccessTokenRepository:
    return SqlAlchemyAccessTokenRepository(database.session_factory)


def _user(email: str = "ada@example.com") -> User:
    return User(id=0, name="Ada", lastname="Lovelace", email=email, password_hash="h")


def test_add_assigns_id_and_timestamps(repo: SqlAlchemyUserRepository) -> None:
    created = repo.add(_user())

    assert created.id > 0
    assert created.created_at is not None
    assert created.created_at.tzinfo is not None
    assert repo.find_by_id(created.id) == created
    assert repo.find_by_email("ada@example.com") == created


def test_unique_constraint_surfaces_as_duplicate_email(
    repo: SqlAlchemyUserRepository, database: Database
) -> None:
    repo.add(_user())

    with pytest.raises(DuplicateEmailError):
        repo.add(_user())

    with database.session_scope() as session:
        assert session.query(UserRow).count() == 1


def test_update_fields_is_partial(repo: SqlAlchemyUserRepository) -> None:
    created = repo.add(_user())

    updated = repo.update_fields(created.id, {"lastname": "King"})

    assert updated is not None
    assert updated.lastname == "King"
    assert updated.name == "Ada"
    assert updated.email == "ada@example.com"
    assert updated.password_hash == "h"


def test_update_fields_to_taken_email_is_rejected(repo: SqlAlchemyUserRepository) -> None:
    ada = repo.add(_user())
    repo.add(_user("alan@example.com"))

    with pytest.raises(DuplicateEmailError):
        repo.update_fields(ada.id, {"email": "alan@example.com"})

    assert repo.find_by_id(ada.id).email == "ada@example.com"


def test_update_fields_unknown_user_returns_none(repo: SqlAlchemyUserRepository) -> None:
    assert repo.update_fields(999, {"name": "X"}) is None


def test_token_lookup_respects_expiry(
    repo: SqlAlchemyUserRepository, token_repo: SqlAlchemyAccessTokenRepository
) -> None:
    user = repo.add(_user())
    now = datetime.now(UTC)
    token_repo.add(user.id, "a" * 64, now + timedelta(days=3))

    assert token_repo.find_user_id("a" * 64, now) == user.id
    assert token_repo.find_user_id("a" * 64, now + timedelta(days=4)) is None
    assert token_repo.find_user_id("b" * 64, now) is None


def test_revoke_and_purge(
    repo: SqlAlchemyUserRepository,
    token_repo: SqlAlchemyAccessTokenRepository,
    database: Database,
) -> None:
    user = repo.add(_user())
    now = datetime.now(UTC)
    token_repo.add(user.id, "a" * 64, now + timedelta(days=3))
    token_repo.add(user.id, "b" * 64, now - timedelta(minutes=1))

    assert token_repo.purge_expired(user.id, now) == 1
    token_repo.revoke("a" * 64)

    with database.session_scope() as session:
        assert session.query(AccessToken).count() == 0


def test_driver_errors_surface_as_infrastructure_error(
    repo: SqlAlchemyUserRepository, database: Database
) -> None:
    database.drop_all()

    with pytest.raises(InfrastructureError) as excinfo:
        repo.find_by_email("ada@example.com")

    assert excinfo.value.code == "internal_error"
    assert excinfo.value.status == 500


def test_duplicate_email_is_not_wrapped(repo: SqlAlchemyUserRepository) -> None:
    repo.add(_user())

    with pytest.raises(DuplicateEmailError):
        repo.add(_user())
