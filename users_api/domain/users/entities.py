# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    lastname: str
    email: str
    password_hash: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class AccessToken:
    """Bearer credential as handed to the client; only its digest is stored."""

    user_id: int
    token: str
    expires_at: datetime
    type: str = "bearer"
