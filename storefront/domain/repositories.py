# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, Protocol

from storefront.infrastructure.db.query import ListFilters

from .entities import Admin, ProductFields, UserFields

Row = dict[str, Any]


class ProductRepository(Protocol):
    def list(self, filters: ListFilters) -> tuple[list[Row], int]: ...
    def find(self, product_id: int) -> Row | None: ...
    def create(self, fields: ProductFields) -> int: ...
    def update(self, product_id: int, fields: ProductFields) -> bool: ...
    def delete(self, product_id: int) -> bool: ...


class UserRepository(Protocol):
    def list(self, filters: ListFilters) -> tuple[list[Row], int]: ...
    def find(self, user_id: int) -> Row | None: ...
    def create(self, fields: UserFields) -> int: ...
    def update(self, user_id: int, fields: UserFields) -> bool: ...
    def delete(self, user_id: int) -> bool: ...


class AdminRepository(Protocol):
    def find_by_email(self, email: str) -> Admin | None: ...
    def add(self, *, email: str, name: str, password_hash: str) -> Admin: ...
    def set_password(self, admin_id: int, password_hash: str) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
