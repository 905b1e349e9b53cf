# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Listing and CRUD statements built from the declared tables.

Which columns an entity projects, sorts, searches, filters and writes is
static configuration in ``ENTITY_TABLES``. Names in that configuration are
resolved against the SQLAlchemy ``Table`` of the model, so a request can only
ever pick among columns the schema declares. Values travel as bound
parameters.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import (
    Column,
    Delete,
    Insert,
    Select,
    Table,
    Update,
    asc,
    bindparam,
    delete,
    desc,
    func,
    insert,
    or_,
    select,
    update,
)
from sqlalchemy.sql.elements import ColumnElement

from storefront.infrastructure.db.models import Product, User
from storefront.shared.errors import ConfigurationError

DEFAULT_SORT = "created_at"
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET on every dialect.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")
_ORDERINGS = {"ASC": asc, "DESC": desc}


def validate_identifier(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER.fullmatch(name):
        raise ConfigurationError(f"Invalid SQL identifier: {name!r}")
    return name


@dataclass(frozen=True, slots=True)
class EntityTable:
    table: Table
    columns: tuple[str, ...]
    sortable: frozenset[str]
    search_columns: tuple[str, ...]
    filter_columns: tuple[str, ...] = ()
    writable: tuple[str, ...] = ()
    default_sort: str = DEFAULT_SORT

    def validate(self) -> None:
        for name in (
            *self.columns,
            *self.sortable,
            *self.search_columns,
            *self.filter_columns,
            *self.writable,
            self.default_sort,
        ):
            self.column(name)

    def column(self, name: str) -> Column[Any]:
        validate_identifier(name)
        try:
            return self.table.c[name]
        except KeyError as exc:
            raise ConfigurationError(f"Table {self.table.name} has no column {name!r}") from exc


ENTITY_TABLES: dict[str, EntityTable] = {
    "products": EntityTable(
        table=Product.__table__,
        columns=("id", "title", "description", "price", "category", "created_at"),
        sortable=frozenset({"title", "price", "created_at", "category"}),
        search_columns=("title", "description"),
        filter_columns=("category",),
        writable=("title", "description", "price", "category"),
    ),
    "users": EntityTable(
        table=User.__table__,
        columns=("id", "name", "email", "phone", "city", "created_at"),
        sortable=frozenset({"name", "email", "created_at"}),
        search_columns=("name", "email"),
        writable=("name", "email", "phone", "city"),
    ),
}


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(MAX_LIMIT, int(limit)))


def normalize_page(page: int | None) -> int:
    return max(1, min(MAX_PAGE, int(page or 1)))


def resolve_sort(entity: EntityTable, sort: str | None) -> str:
    return sort if sort in entity.sortable else entity.default_sort


def resolve_direction(direction: str | None) -> str:
    return "ASC" if (direction or "").strip().lower() == "asc" else "DESC"


def last_page(total: int, limit: int) -> int:
    return int(math.ceil(total / max(1, limit)))


@dataclass(frozen=True, slots=True)
class ListFilters:
    search: str | None = None
    equals: Mapping[str, Any] = field(default_factory=dict)
    sort: str | None = None
    direction: str | None = None
    page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def effective_page(self) -> int:
        return normalize_page(self.page)

    @property
    def effective_limit(self) -> int:
        return clamp_limit(self.limit)

    @property
    def offset(self) -> int:
        return (self.effective_page - 1) * self.effective_limit


class QueryBuilder:
    def __init__(self, entity: EntityTable) -> None:
        entity.validate()
        self._entity = entity
        self._table = entity.table
        self._projection = [entity.column(name) for name in entity.columns]

    @classmethod
    def for_entity(cls, name: str) -> QueryBuilder:
        try:
            return cls(ENTITY_TABLES[name])
        except KeyError as exc:
            raise ConfigurationError(f"Unknown entity: {name!r}") from exc

    @property
    def entity(self) -> EntityTable:
        return self._entity

    def _criteria(self, filters: ListFilters) -> list[ColumnElement[bool]]:
        criteria: list[ColumnElement[bool]] = []

        search = (filters.search or "").strip()
        if search:
            pattern = bindparam("q", f"%{search.lower()}%")
            criteria.append(
                or_(
                    *(
                        func.lower(self._entity.column(name)).like(pattern)
                        for name in self._entity.search_columns
                    )
                )
            )

        for name, value in filters.equals.items():
            if name not in self._entity.filter_columns:
                raise ConfigurationError(
                    f"Column {name!r} is not filterable on {self._table.name}"
                )
            if value is None or value == "":
                continue
            criteria.append(self._entity.column(name) == value)

        return criteria

    def select_page(self, filters: ListFilters) -> Select[Any]:
        order = _ORDERINGS[resolve_direction(filters.direction)]
        sort = self._entity.column(resolve_sort(self._entity, filters.sort))
        return (
            select(*self._projection)
            .where(*self._criteria(filters))
            .order_by(order(sort), order(self._table.c.id))
            .limit(filters.effective_limit)
            .offset(filters.offset)
        )

    def count(self, filters: ListFilters) -> Select[Any]:
        return select(func.count()).select_from(self._table).where(*self._criteria(filters))

    def select_by_id(self, row_id: int) -> Select[Any]:
        return select(*self._projection).where(self._table.c.id == int(row_id))

    def _writable_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(values) - set(self._entity.writable)
        if unknown:
            raise ConfigurationError(
                f"Columns {sorted(unknown)} are not writable on {self._table.name}"
            )
        # Every writable column is set so a write is always a full replace.
        return {name: values.get(name) for name in self._entity.writable}

    def insert(self, values: Mapping[str, Any]) -> Insert:
        return insert(self._table).values(**self._writable_values(values))

    def update(self, row_id: int, values: Mapping[str, Any]) -> Update:
        return (
            update(self._table)
            .where(self._table.c.id == int(row_id))
            .values(**self._writable_values(values))
        )

    def delete(self, row_id: int) -> Delete:
        return delete(self._table).where(self._table.c.id == int(row_id))


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_SORT",
    "ENTITY_TABLES",
    "MAX_LIMIT",
    "MAX_PAGE",
    "EntityTable",
    "ListFilters",
    "QueryBuilder",
    "clamp_limit",
    "last_page",
    "normalize_page",
    "resolve_direction",
    "resolve_sort",
    "validate_identifier",
]
