# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import request

from storefront.shared.errors import BadRequestError


def json_object() -> dict[str, Any]:
    """Return the body as a non-empty JSON object or raise a 400."""
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict) or not payload:
        raise BadRequestError("Invalid JSON")
    return payload


def json_or_form() -> dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


__all__ = ["json_object", "json_or_form"]
