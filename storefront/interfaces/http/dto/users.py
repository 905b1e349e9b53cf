# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from storefront.infrastructure.db import ListFilters
from storefront.shared.errors.validation_types import ValidationErrorType

from .common import ListQueryDTO, required_text

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _email(value: Any) -> str:
    email = required_text("email", value)
    if len(email) > 191:
        raise PydanticCustomError(ValidationErrorType.TOO_LONG, "email is too long", {"max_length": 191})
    if not _EMAIL_RE.match(email):
        raise PydanticCustomError(ValidationErrorType.EMAIL_INVALID, "email must be a valid email address", {})
    return email


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class UserCreateDTO(BaseModel):
    name: str
    email: str
    phone: str | None = None
    city: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return required_text("name", value)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        return _email(value)

    @field_validator("phone", "city", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> str | None:
        return _optional_text(value)


class UserUpdateDTO(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    city: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str | None:
        return None if value is None else required_text("name", value)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str | None:
        return None if value is None else _email(value)

    @field_validator("phone", "city", mode="before")
    @classmethod
    def optional_text(cls, value: Any) -> str | None:
        return _optional_text(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserListQueryDTO(ListQueryDTO):
    def to_filters(self) -> ListFilters:
        return ListFilters(
            search=self.q,
            sort=self.sort,
            direction=self.dir,
            page=self.page or 1,
            limit=self.limit if self.limit is not None else 10,
        )


class UserDTO(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    city: str | None = None
    created_at: datetime | str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserListDTO(BaseModel):
    data: list[UserDTO]
    page: int
    limit: int
    total: int

    @classmethod
    def build(cls, rows: list[dict[str, Any]], total: int, filters: ListFilters) -> UserListDTO:
        return cls(
            data=[UserDTO.model_validate(row) for row in rows],
            page=filters.effective_page,
            limit=filters.effective_limit,
            total=total,
        )


class UserCreatedDTO(BaseModel):
    message: str = "User created successfully"
    id: int


__all__ = [
    "UserCreateDTO",
    "UserCreatedDTO",
    "UserDTO",
    "UserListDTO",
    "UserListQueryDTO",
    "UserUpdateDTO",
]
