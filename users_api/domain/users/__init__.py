# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import AccessToken, User
from .exceptions import (DuplicateEmailError, InvalidPasswordError,
                         NotFoundError, UserNotFoundError)

__all__ = [
    "AccessToken",
    "DuplicateEmailError",
    "InvalidPasswordError",
    "NotFoundError",
    "User",
    "UserNotFoundError",
]
