# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.domain.entities import ProductFields
from storefront.domain.repositories import ProductRepository, Row
from storefront.infrastructure.db import Database, ListFilters, QueryBuilder


class SqlProductRepository(ProductRepository):
    def __init__(self, database: Database) -> None:
        self._db = database
        self._queries = QueryBuilder.for_entity("products")

    def list(self, filters: ListFilters) -> tuple[list[Row], int]:
        rows = self._db.fetch_all(self._queries.select_page(filters))
        total = int(self._db.fetch_value(self._queries.count(filters)) or 0)
        return rows, total

    def find(self, product_id: int) -> Row | None:
        return self._db.fetch(self._queries.select_by_id(product_id))

    def create(self, fields: ProductFields) -> int:
        statement = self._queries.insert(fields.as_values())
        return self._db.insert(statement)

    def update(self, product_id: int, fields: ProductFields) -> bool:
        statement = self._queries.update(product_id, fields.as_values())
        return self._db.execute(statement) > 0

    def delete(self, product_id: int) -> bool:
        return self._db.execute(self._queries.delete(product_id)) > 0
