# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from storefront.shared.errors.validation_types import ValidationErrorType


def lenient_int(value: Any) -> int | None:
    """Query-string integers: anything unparseable counts as absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def required_text(field: str, value: Any) -> str:
    if value is None or not str(value).strip():
        raise PydanticCustomError(ValidationErrorType.BLANK, f"{field} is required", {})
    return str(value).strip()


class ListQueryDTO(BaseModel):
    """Query parameters shared by every listing endpoint."""

    q: str | None = None
    sort: str | None = None
    dir: str | None = None
    page: int | None = None
    limit: int | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("page", "limit", mode="before")
    @classmethod
    def parse_int(cls, value: Any) -> int | None:
        return lenient_int(value)

    @field_validator("q", "sort", "dir", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class MessageDTO(BaseModel):
    message: str


__all__ = ["ListQueryDTO", "MessageDTO", "lenient_int", "required_text"]
