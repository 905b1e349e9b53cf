# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .database import Database, is_unique_violation
from .query import ENTITY_TABLES, ListFilters, QueryBuilder
from .session import Base, build_engine, init_db

__all__ = [
    "Base",
    "Database",
    "ENTITY_TABLES",
    "ListFilters",
    "QueryBuilder",
    "build_engine",
    "init_db",
    "is_unique_violation",
]
