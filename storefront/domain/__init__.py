# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Admin, AuthIdentity, AuthScheme, ProductFields, UserFields
from .exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvariantViolation,
    ProductNotFoundError,
    UserNotFoundError,
)

__all__ = [
    "Admin",
    "AuthIdentity",
    "AuthScheme",
    "EmailAlreadyExistsError",
    "InvalidCredentialsError",
    "InvariantViolation",
    "ProductFields",
    "ProductNotFoundError",
    "UserFields",
    "UserNotFoundError",
]
