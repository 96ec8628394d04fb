# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from users_api.shared.errors.base import DomainError


class DuplicateEmailError(DomainError):
    code = "duplicate_email"
    status = HTTPStatus.BAD_REQUEST
    title = "Duplicate email"
    message = "Email address is already registered"


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND
    title = "User not found"
    message = "No user matches the given email"


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    title = "User not found"
    message = "The id does not match any registered user"


class InvalidPasswordError(DomainError):
    code = "invalid_password"
    status = HTTPStatus.UNAUTHORIZED
    title = "Invalid password"
    message = "Incorrect password"
