# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from storefront.domain.entities import ProductFields
from storefront.domain.exceptions import InvariantViolation, ProductNotFoundError
from storefront.domain.repositories import ProductRepository, Row
from storefront.infrastructure.db import ListFilters
from storefront.shared.errors import ValidationError
from storefront.shared.logging import logger

_FIELDS = ("title", "description", "price", "category")


def _build(values: Mapping[str, Any]) -> ProductFields:
    try:
        return ProductFields(**{name: values[name] for name in _FIELDS if name in values})
    except InvariantViolation as exc:
        raise ValidationError(str(exc), field=exc.field) from exc


class ProductService:
    def __init__(self, *, products: ProductRepository) -> None:
        self._products = products

    def list(self, filters: ListFilters) -> tuple[list[Row], int]:
        return self._products.list(filters)

    def get(self, product_id: int) -> Row:
        row = self._products.find(product_id)
        if row is None:
            raise ProductNotFoundError()
        return row

    def create(self, values: Mapping[str, Any]) -> int:
        values = dict(values)
        if values.get("price") is None:
            values["price"] = 0.0
        fields = _build(values)
        product_id = self._products.create(fields)
        logger.info(f"Product {product_id} created")
        return product_id

    def update(self, product_id: int, changes: Mapping[str, Any]) -> bool:
        """Merge ``changes`` over the stored row and write every mutable column.

        Returns False when the store reports no affected rows.
        """
        current = self.get(product_id)
        merged = {name: current.get(name) for name in _FIELDS}
        merged.update(changes)
        if merged.get("price") is None:
            merged["price"] = 0.0
        changed = self._products.update(product_id, _build(merged))
        if changed:
            logger.info(f"Product {product_id} updated")
        return changed

    def delete(self, product_id: int) -> None:
        self.get(product_id)
        self._products.delete(product_id)
        logger.info(f"Product {product_id} deleted")
