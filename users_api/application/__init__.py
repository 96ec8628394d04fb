# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users import (
    LoginUserUseCase,
    LogoutUserUseCase,
    RegisterUserUseCase,
    ShowUserUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "ShowUserUseCase",
    "UpdateUserUseCase",
]
