# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Thin wrapper over a SQLAlchemy engine that runs Core statements.

Every call checks a connection out of the pool inside ``engine.begin()`` and
returns it when the block exits, committing on success and rolling back on
failure. Rows come back as plain dicts in projection order.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Insert
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Executable, Select

from storefront.shared.errors import ConflictError
from storefront.shared.logging import logger

# SQLSTATE for unique_violation (PostgreSQL) and ER_DUP_ENTRY (MySQL/MariaDB).
_PG_UNIQUE_VIOLATION = "23505"
_MYSQL_DUP_ENTRY = 1062


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    message = str(orig).lower()
    return "unique constraint" in message or "duplicate entry" in message


class Database:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        with self._engine.begin() as conn:
            yield conn

    def _run(self, conn: Connection, statement: Executable) -> CursorResult[Any]:
        logger.debug(f"db.execute: {' '.join(str(statement).split())}")
        try:
            return conn.execute(statement)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                logger.info(f"db.execute: unique constraint rejected write ({self.dialect})")
                raise ConflictError() from exc
            raise

    def fetch(self, statement: Executable) -> dict[str, Any] | None:
        with self.connection() as conn:
            row = self._run(conn, statement).mappings().first()
        return dict(row) if row is not None else None

    def fetch_all(self, statement: Executable) -> list[dict[str, Any]]:
        with self.connection() as conn:
            return [dict(row) for row in self._run(conn, statement).mappings()]

    def fetch_value(self, statement: Executable) -> Any:
        with self.connection() as conn:
            return self._run(conn, statement).scalar()

    def execute(self, statement: Executable) -> int:
        """Run an UPDATE/DELETE and return the number of affected rows."""
        with self.connection() as conn:
            return int(self._run(conn, statement).rowcount or 0)

    def insert(self, statement: Insert) -> int:
        """Run an INSERT and return the store-assigned primary key."""
        with self.connection() as conn:
            result = self._run(conn, statement)
            (new_id,) = result.inserted_primary_key
        return int(new_id)

    def explain(self, statement: Select[Any]) -> list[dict[str, Any]]:
        """Query plan of ``statement`` as reported by the store."""
        prefix = "EXPLAIN QUERY PLAN " if self.dialect == "sqlite" else "EXPLAIN "
        compiled = statement.compile(
            dialect=self._engine.dialect, compile_kwargs={"literal_binds": True}
        )
        with self.connection() as conn:
            result = conn.exec_driver_sql(prefix + str(compiled))
            return [dict(row) for row in result.mappings()]


__all__ = ["Database", "is_unique_violation"]
