# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from .exceptions import InvariantViolation

# products.price is NUMERIC(10, 2): eight integer digits.
PRICE_CEILING = 100_000_000


@dataclass(slots=True, frozen=True)
class Admin:

    id: int
    email: str
    name: str
    password_hash: str

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(slots=True, frozen=True)
class ProductFields:
    """Mutable columns of a product; written as a whole on create and update."""

    title: str
    description: str | None = None
    price: float = 0.0
    category: str | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise InvariantViolation("title is required", field="title")
        if self.price < 0:
            raise InvariantViolation("price must be greater than or equal to 0", field="price")
        if self.price >= PRICE_CEILING:
            raise InvariantViolation(f"price must be less than {PRICE_CEILING}", field="price")

    def as_values(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class UserFields:
    name: str
    email: str
    phone: str | None = None
    city: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvariantViolation("name is required", field="name")
        if not self.email or not self.email.strip():
            raise InvariantViolation("email is required", field="email")

    def as_values(self) -> dict[str, Any]:
        return asdict(self)


class AuthScheme(str, Enum):
    PUBLIC = "public"
    TOKEN = "token"
    SESSION = "session"


@dataclass(slots=True, frozen=True)
class AuthIdentity:
    """Who a request was authenticated as, and by which scheme."""

    subject_id: int
    scheme: AuthScheme
    email: str | None = None
