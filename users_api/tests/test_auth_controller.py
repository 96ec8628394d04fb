from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from flask import Flask

from users_api.domain.users.entities import AccessToken, User
from users_api.domain.users.exceptions import (DuplicateEmailError,
                                               InvalidPasswordError,
                                               UserNotFoundError)
from users_api.interfaces.http.controllers.users_controller import \
    UsersController
from users_api.shared.config import AppConfig
from users_api.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2026, 1, 1, tzinfo=UTC)
ADA = User(
    id=7,
    name="Ada",
    lastname="Lovelace",
    email="ada@example.com",
    password_hash="scrypt:32768:8:1$salt$secret-hash",
    created_at=NOW,
    updated_at=NOW,
)


class StubAuthenticator:
    def resolve(self, token: str) -> int | None:
        return ADA.id if token == "good-token" else None


@pytest.fixture()
def use_cases() -> dict[str, MagicMock]:
    return {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "show_use_case": MagicMock(),
        "update_use_case": MagicMock(),
    }


@pytest.fixture()
def client(config: AppConfig, use_cases: dict[str, MagicMock]):
    app = Flask(__name__)
    configure_error_handling(app, config)
    controller = UsersController(authenticator=StubAuthenticator(), **use_cases)
    app.register_blueprint(controller.as_blueprint())
    with app.test_client() as client:
        yield client


AUTH = {"Authorization": "Bearer good-token"}


def test_register_returns_201_without_password_hash(client, use_cases) -> None:
    use_cases["register_use_case"].execute.return_value = ADA

    response = client.post(
        "/api/users",
        json={
            "name": "Ada",
            "lastname": "Lovelace",
            "email": " Ada@Example.com ",
            "password": "password123",
        },
    )

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["type"] == "Success"
    assert payload["data"]["id"] == 7
    assert payload["data"]["email"] == "ada@example.com"
    assert "password_hash" not in payload["data"]
    assert "secret-hash" not in response.get_data(as_text=True)
    use_cases["register_use_case"].execute.assert_called_once_with(
        "Ada", "Lovelace", "ada@example.com", "password123"
    )


def test_register_short_password_is_rejected(client, use_cases) -> None:
    response = client.post(
        "/api/users/",
        json={"name": "A", "lastname": "B", "email": "a@x.com", "password": "short"},
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["type"] == "Error"
    assert payload["error"] == "validation_error"
    assert payload["message"].startswith("password")
    use_cases["register_use_case"].execute.assert_not_called()


def test_register_invalid_email_reports_email_first(client, use_cases) -> None:
    response = client.post(
        "/api/users/",
        json={"name": "A", "lastname": "B", "email": "not-an-email", "password": "x"},
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["message"].startswith("email")
    assert payload["context"]["fields"] == ["email", "password"]


def test_register_duplicate_email_is_400(client, use_cases) -> None:
    use_cases["register_use_case"].execute.side_effect = DuplicateEmailError()

    response = client.post(
        "/api/users/",
        json={"name": "A", "lastname": "B", "email": "a@x.com", "password": "password123"},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_email"


def test_login_returns_token_and_public_user(client, use_cases) -> None:
    use_cases["login_use_case"].execute.return_value = (
        ADA,
        AccessToken(user_id=ADA.id, token="tok", expires_at=NOW + timedelta(days=3)),
    )

    response = client.post(
        "/api/users/login", json={"email": "ada@example.com", "password": "password123"}
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["token"]["type"] == "bearer"
    assert data["token"]["token"] == "tok"
    assert data["token"]["expires_at"].startswith("2026-01-04T00:00:00")
    assert data["user"]["id"] == ADA.id
    assert "password_hash" not in data["user"]


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (UserNotFoundError(), 404, "user_not_found"),
        (InvalidPasswordError(), 401, "invalid_password"),
    ],
)
def test_login_failures(client, use_cases, error, status, code) -> None:
    use_cases["login_use_case"].execute.side_effect = error

    response = client.post(
        "/api/users/login", json={"email": "ada@example.com", "password": "nope"}
    )

    assert response.status_code == status
    assert response.get_json()["error"] == code


def test_login_unexpected_error_is_500_without_details(client, use_cases) -> None:
    use_cases["login_use_case"].execute.side_effect = RuntimeError("db exploded")

    response = client.post(
        "/api/users/login", json={"email": "ada@example.com", "password": "x"}
    )

    assert response.status_code == 500
    assert response.get_json()["error"] == "internal_error"
    assert "db exploded" not in response.get_data(as_text=True)


def test_login_missing_fields_is_400(client) -> None:
    response = client.post("/api/users/login", json={})

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


@pytest.mark.parametrize(
    ("method", "path"),
    [("get", "/api/users/7"), ("post", "/api/users/logout"), ("put", "/api/users/actualizar")],
)
def test_protected_routes_require_bearer(client, method, path) -> None:
    response = getattr(client, method)(path, headers={"Authorization": "Bearer bad"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_show_returns_user(client, use_cases) -> None:
    use_cases["show_use_case"].execute.return_value = ADA

    response = client.get("/api/users/7", headers=AUTH)

    assert response.status_code == 200
    assert response.get_json()["data"]["email"] == "ada@example.com"
    use_cases["show_use_case"].execute.assert_called_once_with(7)


def test_logout_revokes_presented_token(client, use_cases) -> None:
    response = client.post("/api/users/logout", headers=AUTH)

    assert response.status_code == 200
    use_cases["logout_use_case"].execute.assert_called_once_with("good-token")


def test_update_passes_only_supplied_fields(client, use_cases) -> None:
    use_cases["update_use_case"].execute.return_value = ADA

    response = client.put(
        "/api/users/actualizar", headers=AUTH, json={"name": "B", "role": "admin"}
    )

    assert response.status_code == 200
    use_cases["update_use_case"].execute.assert_called_once_with(ADA.id, {"name": "B"})


def test_update_rejects_null_values(client, use_cases) -> None:
    response = client.put("/api/users/actualizar", headers=AUTH, json={"name": None})

    assert response.status_code == 400
    use_cases["update_use_case"].execute.assert_not_called()


def test_update_duplicate_email_is_400(client, use_cases) -> None:
    use_cases["update_use_case"].execute.side_effect = DuplicateEmailError()

    response = client.put(
        "/api/users/actualizar", headers=AUTH, json={"email": "alan@example.com"}
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_email"


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get("/api/users/not-a-number", headers=AUTH)

    assert response.status_code == 404
    payload = response.get_json()
    assert payload["type"] == "Error"
    assert payload["error"] == "not_found"
