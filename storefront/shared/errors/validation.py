# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import BadRequestError, ValidationError

# Errors that mean "the caller did not send the field at all" rather than
# "the caller sent something unacceptable".
_MISSING_TYPES = {"missing"}


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part is not None)


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        field_path = _field_path(error.get("loc", ()))

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
                "message": error.get("msg", ""),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def _first_message(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    field_path = _field_path(first.get("loc", ()))
    message = str(first.get("msg", "is invalid"))
    if first.get("type") in _MISSING_TYPES:
        return f"{field_path} is required" if field_path else "missing field"
    # Custom validators already phrase their messages with the field name.
    if field_path and not message.startswith(field_path):
        return f"{field_path}: {message}"
    return message


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    raise ValidationError(_first_message(exc), context=context) from exc


def raise_bad_request(exc: PydanticValidationError, message: str) -> NoReturn:
    """Raise a 400 when required fields are absent, otherwise a 422."""
    if any(error.get("type") in _MISSING_TYPES for error in exc.errors()):
        raise BadRequestError(message, context=format_pydantic_errors(exc)) from exc
    raise_validation_error(exc)


__all__ = [
    "format_pydantic_errors",
    "raise_bad_request",
    "raise_validation_error",
]
