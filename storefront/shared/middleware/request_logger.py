# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
import secrets
import time

from flask import Flask, Response, g, request

from storefront.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied ids are echoed back and logged; anything else is replaced.
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

_REDACTED_QUERY_KEYS = ("password", "token", "secret")


def _request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.fullmatch(supplied):
        return supplied
    return secrets.token_hex(8)


def _query_summary() -> str:
    if not request.args:
        return ""
    parts = []
    for key, value in request.args.items():
        if any(marker in key.lower() for marker in _REDACTED_QUERY_KEYS):
            value = "<redacted>"
        parts.append(f"{key}={value}")
    return "?" + "&".join(parts)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        set_correlation_id(_request_id())
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"--> {request.method} {request.path}{_query_summary()} "
                f"endpoint={request.endpoint} body_bytes={request.content_length or 0}"
            )

    @app.after_request
    def _after_request(response: Response) -> Response:
        started = getattr(g, "request_started", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        subject = getattr(g, "user_id", None)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms subject={subject if subject is not None else '-'}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
