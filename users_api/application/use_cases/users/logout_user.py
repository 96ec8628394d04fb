"""Use-case for revoking access tokens."""

from __future__ import annotations

from users_api.domain.users.repositories import Authenticator


class LogoutUserUseCase:
    def __init__(self, *, authenticator: Authenticator) -> None:
        self._authenticator = authenticator

    def execute(self, token: str) -> None:
        self._authenticator.end_session(token)
