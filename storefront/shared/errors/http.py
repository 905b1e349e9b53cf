# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON rendering of errors raised while serving a request."""

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from storefront.shared.logging import logger

from .base import AppError

INTERNAL_ERROR_BODY = {"error": "internal_error"}


def render_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def render_http_exception(exc: HTTPException) -> Response:
    """Routing failures (unknown path, wrong method) as ``{"error": <reason>}``."""
    response = jsonify({"error": exc.name})
    response.status_code = exc.code or HTTPStatus.INTERNAL_SERVER_ERROR
    allowed = getattr(exc, "valid_methods", None)
    if allowed:
        response.headers["Allow"] = ", ".join(allowed)
    return response


def _remote_peer() -> str:
    hops = request.headers.get("X-Forwarded-For", "")
    first_hop = hops.split(",", 1)[0].strip()
    return first_hop or request.remote_addr or "unknown"


def _where() -> str:
    return f"{request.method} {request.path}"


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    fallback_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        name = type(exc).__name__
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{name} on {_where()}: {exc.message}")
        else:
            logger.info(f"{name} answered with {int(exc.status)} on {_where()}")
        return render_app_error(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return render_http_exception(exc)

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        message = f"Unhandled {type(exc).__name__} on {_where()}"
        if debug_mode:
            message += (
                f" peer={_remote_peer()} subject={getattr(g, 'user_id', None)}"
                f" args={sorted(request.args)} body_bytes={request.content_length or 0}"
            )
        logger.opt(exception=exc).error(message)
        return jsonify(INTERNAL_ERROR_BODY), fallback_status
