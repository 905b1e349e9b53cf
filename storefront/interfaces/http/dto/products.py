# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from storefront.domain.entities import PRICE_CEILING
from storefront.infrastructure.db import ListFilters
from storefront.infrastructure.db.query import last_page
from storefront.shared.errors.validation_types import ValidationErrorType

from .common import ListQueryDTO, required_text


def _price(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise PydanticCustomError(ValidationErrorType.NOT_A_NUMBER, "price must be a number", {})
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise PydanticCustomError(
            ValidationErrorType.NOT_A_NUMBER, "price must be a number", {}
        ) from None
    if not math.isfinite(price):
        raise PydanticCustomError(ValidationErrorType.NOT_A_NUMBER, "price must be a number", {})
    if price < 0:
        raise PydanticCustomError(
            ValidationErrorType.NEGATIVE_NUMBER,
            "price must be greater than or equal to 0",
            {"ge": 0},
        )
    price = round(price, 2)
    if price >= PRICE_CEILING:
        raise PydanticCustomError(
            ValidationErrorType.NUMBER_TOO_LARGE,
            f"price must be less than {PRICE_CEILING}",
            {"lt": PRICE_CEILING},
        )
    return price


class ProductCreateDTO(BaseModel):
    title: str
    description: str | None = None
    price: float | None = None
    category: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value: Any) -> str:
        return required_text("title", value)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, value: Any) -> float | None:
        return _price(value)


class ProductUpdateDTO(BaseModel):
    """Partial update; fields that are absent or null keep their stored value."""

    title: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, value: Any) -> str | None:
        if value is None:
            return None
        return required_text("title", value)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, value: Any) -> float | None:
        return _price(value)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductListQueryDTO(ListQueryDTO):
    category: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def blank_category(cls, value: Any) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def to_filters(self) -> ListFilters:
        equals = {"category": self.category} if self.category else {}
        return ListFilters(
            search=self.q,
            equals=equals,
            sort=self.sort,
            direction=self.dir,
            page=self.page or 1,
            limit=self.limit if self.limit is not None else 10,
        )


class ProductDTO(BaseModel):
    id: int
    title: str
    description: str | None = None
    price: float
    category: str | None = None
    created_at: datetime | str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProductListMetaDTO(BaseModel):
    total: int
    per_page: int
    current_page: int
    last_page: int


class ProductListDTO(BaseModel):
    data: list[ProductDTO]
    meta: ProductListMetaDTO

    @classmethod
    def build(cls, rows: list[dict[str, Any]], total: int, filters: ListFilters) -> ProductListDTO:
        limit = filters.effective_limit
        return cls(
            data=[ProductDTO.model_validate(row) for row in rows],
            meta=ProductListMetaDTO(
                total=total,
                per_page=limit,
                current_page=filters.effective_page,
                last_page=last_page(total, limit),
            ),
        )


class ProductCreatedDTO(BaseModel):
    id: int
    message: str = "Product created"


__all__ = [
    "ProductCreateDTO",
    "ProductCreatedDTO",
    "ProductDTO",
    "ProductListDTO",
    "ProductListMetaDTO",
    "ProductListQueryDTO",
    "ProductUpdateDTO",
]
