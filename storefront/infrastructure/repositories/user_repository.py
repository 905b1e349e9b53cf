# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.domain.entities import UserFields
from storefront.domain.exceptions import EmailAlreadyExistsError
from storefront.domain.repositories import Row, UserRepository
from storefront.infrastructure.db import Database, ListFilters, QueryBuilder
from storefront.shared.errors import ConflictError


class SqlUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database
        self._queries = QueryBuilder.for_entity("users")

    def list(self, filters: ListFilters) -> tuple[list[Row], int]:
        rows = self._db.fetch_all(self._queries.select_page(filters))
        total = int(self._db.fetch_value(self._queries.count(filters)) or 0)
        return rows, total

    def find(self, user_id: int) -> Row | None:
        return self._db.fetch(self._queries.select_by_id(user_id))

    def create(self, fields: UserFields) -> int:
        statement = self._queries.insert(fields.as_values())
        try:
            return self._db.insert(statement)
        except ConflictError as exc:
            raise EmailAlreadyExistsError() from exc

    def update(self, user_id: int, fields: UserFields) -> bool:
        statement = self._queries.update(user_id, fields.as_values())
        try:
            return self._db.execute(statement) > 0
        except ConflictError as exc:
            raise EmailAlreadyExistsError() from exc

    def delete(self, user_id: int) -> bool:
        return self._db.execute(self._queries.delete(user_id)) > 0
