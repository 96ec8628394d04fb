# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, request
from pydantic import ValidationError

from users_api.application.use_cases.users.login_user import LoginUserUseCase
from users_api.application.use_cases.users.logout_user import LogoutUserUseCase
from users_api.application.use_cases.users.register_user import \
    RegisterUserUseCase
from users_api.application.use_cases.users.show_user import ShowUserUseCase
from users_api.application.use_cases.users.update_user import \
    UpdateUserUseCase
from users_api.domain.users.exceptions import (InvalidPasswordError,
                                               UserNotFoundError)
from users_api.domain.users.repositories import Authenticator
from users_api.infrastructure.audit import AuditAction, audit_log
from users_api.interfaces.http.auth import bearer_required
from users_api.interfaces.http.dto.users import (LoginRequestDTO,
                                                 LoginResultDTO,
                                                 RegisterRequestDTO, TokenDTO,
                                                 UpdateProfileRequestDTO,
                                                 UserPublicDTO)
from users_api.interfaces.http.responses import success
from users_api.shared.errors.validation import raise_validation_error
from users_api.shared.logging import logger

# Largest primary key the database can store; larger ids never match a row.
_MAX_ROW_ID = 2**63 - 1


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _json_body() -> object:
    return request.get_json(silent=True) or {}


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        show_use_case: ShowUserUseCase,
        update_use_case: UpdateUserUseCase,
        authenticator: Authenticator,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._show_use_case = show_use_case
        self._update_use_case = update_use_case
        self._authenticator = authenticator

    def register(self) -> tuple[Response, HTTPStatus]:
        try:
            dto = RegisterRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(
            dto.name, dto.lastname, str(dto.email), dto.password
        )

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            success=True,
        )
        logger.info(f"users.register: ok user_id={user.id}")
        return success(
            "Registration successful",
            "User registered successfully.",
            UserPublicDTO.model_validate(user),
            status=HTTPStatus.CREATED,
        )

    def login(self) -> tuple[Response, HTTPStatus]:
        try:
            dto = LoginRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()
        try:
            user, token = self._login_use_case.execute(dto.email, dto.password)
        except (UserNotFoundError, InvalidPasswordError) as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"reason": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.LOGIN_SUCCESS, user_id=user.id, ip_address=ip_address)
        logger.info(f"users.login: ok user_id={user.id}")
        result = LoginResultDTO(
            token=TokenDTO.model_validate(token),
            user=UserPublicDTO.model_validate(user),
        )
        return success("Login successful", "Logged in successfully", result)

    def logout(self) -> tuple[Response, HTTPStatus]:
        self._logout_use_case.execute(g.token)

        audit_log(AuditAction.LOGOUT, user_id=g.user_id, ip_address=_get_client_ip())
        logger.info(f"users.logout: ok user_id={g.user_id}")
        return success("Logout successful", "Logged out successfully")

    def show(self, user_id: int) -> tuple[Response, HTTPStatus]:
        user = self._show_use_case.execute(user_id)
        return success(
            "User found",
            "User matching the given id",
            UserPublicDTO.model_validate(user),
        )

    def update(self) -> tuple[Response, HTTPStatus]:
        try:
            dto = UpdateProfileRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        changes = dto.changes()
        user = self._update_use_case.execute(g.user_id, changes)

        audit_log(
            AuditAction.PROFILE_UPDATED,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"fields": sorted(changes)},
        )
        return success(
            "Profile updated",
            "User data updated",
            UserPublicDTO.model_validate(user),
        )

    def as_blueprint(self) -> Blueprint:
        guard = bearer_required(self._authenticator)
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule(
            "/", view_func=self.register, methods=["POST"], strict_slashes=False
        )
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=guard(self.logout), methods=["POST"])
        bp.add_url_rule(
            f"/<int(max={_MAX_ROW_ID}):user_id>",
            view_func=guard(self.show),
            methods=["GET"],
        )
        bp.add_url_rule("/actualizar", view_func=guard(self.update), methods=["PUT"])
        return bp
