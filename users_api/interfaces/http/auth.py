# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from users_api.domain.users.repositories import Authenticator
from users_api.shared.errors import UnauthorizedError
from users_api.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def bearer_required(authenticator: Authenticator) -> Callable[[F], F]:
    """Build a view decorator that admits only live bearer tokens.

    On success the caller's id is stored on ``g.user_id`` and the raw token on
    ``g.token`` (logout needs it to revoke the session).
    """

    def decorator(view: F) -> F:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            token = bearer_token()
            if not token:
                logger.warning(
                    f"No bearer token on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise UnauthorizedError()

            user_id = authenticator.resolve(token)
            if user_id is None:
                logger.warning(
                    f"Auth failed (token unknown/expired/revoked) on {request.method} {request.path}"
                )
                raise UnauthorizedError("Token is invalid, expired or revoked")

            g.user_id = user_id
            g.token = token
            logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return cast(F, inner)

    return decorator


__all__ = ["bearer_required", "bearer_token"]
