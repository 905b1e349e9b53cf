# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from storefront.domain.entities import UserFields
from storefront.domain.exceptions import InvariantViolation, UserNotFoundError
from storefront.domain.repositories import Row, UserRepository
from storefront.infrastructure.db import ListFilters
from storefront.shared.errors import ValidationError
from storefront.shared.logging import logger

_FIELDS = ("name", "email", "phone", "city")


def _build(values: Mapping[str, Any]) -> UserFields:
    try:
        return UserFields(**{name: values[name] for name in _FIELDS if name in values})
    except InvariantViolation as exc:
        raise ValidationError(str(exc), field=exc.field) from exc


class UserService:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def list(self, filters: ListFilters) -> tuple[list[Row], int]:
        return self._users.list(filters)

    def get(self, user_id: int) -> Row:
        row = self._users.find(user_id)
        if row is None:
            raise UserNotFoundError()
        return row

    def create(self, values: Mapping[str, Any]) -> int:
        user_id = self._users.create(_build(values))
        logger.info(f"User {user_id} created")
        return user_id

    def update(self, user_id: int, changes: Mapping[str, Any]) -> bool:
        current = self.get(user_id)
        merged = {name: current.get(name) for name in _FIELDS}
        merged.update(changes)
        changed = self._users.update(user_id, _build(merged))
        if changed:
            logger.info(f"User {user_id} updated")
        return changed

    def delete(self, user_id: int) -> None:
        self.get(user_id)
        self._users.delete(user_id)
        logger.info(f"User {user_id} deleted")
