# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error taxonomy shared by every layer.

An :class:`AppError` knows the HTTP status it maps to and the message a client
sees. Subclasses pick their defaults through ``default_message`` and
``default_status`` so call sites can raise them bare.
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar


class AppError(Exception):
    default_message: ClassVar[str] = "internal_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.status = HTTPStatus(status or self.default_status)
        self.context = dict(context) if context else None
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.context:
            body["context"] = dict(self.context)
        return body


class DomainError(AppError):
    default_message = "domain_error"
    default_status = HTTPStatus.BAD_REQUEST


class InfrastructureError(AppError):
    default_message = "infrastructure_error"


class BadRequestError(DomainError):
    default_message = "Bad request"


class ValidationError(DomainError):
    default_message = "validation_error"
    default_status = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        if context is None and field is not None:
            context = {"fields": [field]}
        super().__init__(message, context=context)


class UnauthorizedError(DomainError):
    default_message = "Unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED


class NotFoundError(DomainError):
    default_message = "Not Found"
    default_status = HTTPStatus.NOT_FOUND


class ConflictError(DomainError):
    """A write rejected by a uniqueness constraint held by the store."""

    default_message = "Resource already exists"


class ConfigurationError(InfrastructureError):
    default_message = "configuration_error"
