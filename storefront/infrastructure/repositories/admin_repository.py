# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from sqlalchemy import insert, select, update

from storefront.domain.entities import Admin
from storefront.domain.repositories import AdminRepository
from storefront.infrastructure.db import Database
from storefront.infrastructure.db.models import Admin as AdminRow

_admins = AdminRow.__table__


class SqlAdminRepository(AdminRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_email(self, email: str) -> Admin | None:
        row = self._db.fetch(
            select(_admins.c.id, _admins.c.email, _admins.c.name, _admins.c.password)
            .where(_admins.c.email == email)
            .limit(1)
        )
        return self._to_domain(row) if row is not None else None

    def add(self, *, email: str, name: str, password_hash: str) -> Admin:
        new_id = self._db.insert(
            insert(_admins).values(email=email, name=name, password=password_hash)
        )
        return Admin(id=new_id, email=email, name=name, password_hash=password_hash)

    def set_password(self, admin_id: int, password_hash: str) -> bool:
        statement = update(_admins).where(_admins.c.id == admin_id).values(password=password_hash)
        return self._db.execute(statement) > 0

    def _to_domain(self, row: dict[str, Any]) -> Admin:
        return Admin(
            id=int(row["id"]),
            email=str(row["email"]),
            name=str(row["name"] or ""),
            password_hash=str(row["password"]),
        )
