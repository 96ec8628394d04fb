from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class RegisterRequestDTO(BaseModel):
    # Declaration order decides which violation is reported first.
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=128)
    lastname: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return _normalize_email(value)

    @field_validator("name", "lastname", mode="after")
    @classmethod
    def strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("blank", "Value cannot be blank", {})
        return value


class LoginRequestDTO(BaseModel):
    # No format or strength checks on login: unknown emails are a 404, not a 400.
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return _normalize_email(value)


class UpdateProfileRequestDTO(BaseModel):
    """Sparse update body; keys outside the three profile fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=128)
    lastname: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr | None = None

    @field_validator("name", "lastname", "email", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Validators only run for supplied keys, so absent fields stay unset.
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Value cannot be null", {})
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return _normalize_email(value)

    @field_validator("name", "lastname", mode="after")
    @classmethod
    def strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("blank", "Value cannot be blank", {})
        return value

    def changes(self) -> dict[str, str]:
        return self.model_dump(exclude_unset=True)


class UserPublicDTO(BaseModel):
    """The only user shape ever written to a response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    lastname: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TokenDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str = "bearer"
    token: str
    expires_at: datetime


class LoginResultDTO(BaseModel):
    token: TokenDTO
    user: UserPublicDTO
