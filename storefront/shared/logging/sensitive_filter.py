# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

# (pattern, replacement) pairs applied in order to every log message.
SENSITIVE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    # Whole Authorization header values, whatever the scheme.
    (re.compile(r"(authorization\s*[:=]\s*['\"]?)[^'\"\n,}]+", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"(bearer\s+)[A-Za-z0-9_\-.]{8,}", re.IGNORECASE), rf"\1{_MASK}"),
    # Compact JWS as issued by the token endpoint.
    (re.compile(r"\beyJ[A-Za-z0-9_\-]*\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+"), "***JWT***"),
    (
        re.compile(r"((?:token|secret|jwt_secret|secret_key)\s*[:=]\s*['\"]?)[^'\"\s,}]{6,}", re.IGNORECASE),
        rf"\1{_MASK}",
    ),
    (re.compile(r"(password\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), rf"\1{_MASK}"),
    # Session cookie values and server-side session ids.
    (
        re.compile(r"((?:storefront_session|session[_-]?id|sid)\s*[:=]\s*['\"]?)[A-Za-z0-9_\-]{16,}", re.IGNORECASE),
        rf"\1{_MASK}",
    ),
    # Credentials embedded in a DATABASE_URL.
    (re.compile(r"([a-z][a-z0-9+]*://[^:/@\s]+):[^@\s]+@", re.IGNORECASE), rf"\1:{_MASK}@"),
    # Email local parts; the domain is kept for debugging.
    (re.compile(r"\b[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b"), r"***@\1"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter: scrub the message in place and always keep the record."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
