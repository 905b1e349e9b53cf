# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.shared.errors import ConflictError, NotFoundError, UnauthorizedError


class InvariantViolationError(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


InvariantViolation = InvariantViolationError


class InvalidCredentialsError(UnauthorizedError):
    default_message = "Invalid credentials"


class ProductNotFoundError(NotFoundError):
    default_message = "Product not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class EmailAlreadyExistsError(ConflictError):
    default_message = "Email already exists"
