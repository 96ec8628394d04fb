# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Shared error hierarchy for the service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(eq=False)
class AppError(Exception):
    """Base application exception carrying structured metadata."""

    code: str
    status: HTTPStatus
    title: str = "Error"
    message: str = "Request failed"
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "Error",
            "title": self.title,
            "message": self.message,
            "error": self.code,
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Domain-level rule violation.

    Subclasses declare ``code``, ``status``, ``title`` and ``message`` as class
    attributes; callers may override ``message`` and attach ``context``.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = cast(str, getattr(type(self), "code", "domain_error"))
        resolved_status = cast(
            HTTPStatus, getattr(type(self), "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_title = cast(str, getattr(type(self), "title", "Error"))
        resolved_message = message or cast(
            str, getattr(type(self), "message", "Request failed")
        )
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            title=resolved_title,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        message: str = "Internal server error",
        *,
        code: str = "internal_error",
        title: str = "Server error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            title=title,
            message=message,
            context=context,
        )


class ValidationError(AppError):
    def __init__(
        self,
        message: str = "Request validation failed",
        *,
        code: str = "validation_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            title="Invalid data",
            message=message,
            context=context,
        )


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Missing or invalid bearer token") -> None:
        super().__init__(
            code="unauthorized",
            status=HTTPStatus.UNAUTHORIZED,
            title="Unauthorized",
            message=message,
        )
