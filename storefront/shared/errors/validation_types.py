# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    BLANK = "blank"
    EMAIL_INVALID = "email_invalid"
    NEGATIVE_NUMBER = "negative_number"
    NOT_A_NUMBER = "not_a_number"
    NUMBER_TOO_LARGE = "number_too_large"
    TOO_LONG = "too_long"


__all__ = ["ValidationErrorType"]
