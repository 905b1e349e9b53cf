# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Route groups and the per-route authentication guard.

Every route belongs to a group that names a URL prefix and a default auth
scheme; a route may override the scheme (login endpoints are public). Werkzeug
does the matching, so an unknown path is a 404, a known path with the wrong
method is a 405, and ``<int:...>`` segments that are not numeric never reach a
handler.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import Blueprint, Flask, g, request

from storefront.domain.entities import AuthScheme
from storefront.infrastructure.auth import Authenticator
from storefront.shared.errors import ConfigurationError, UnauthorizedError
from storefront.shared.logging import logger, set_subject

Handler = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class Route:
    rule: str
    endpoint: str
    handler: Handler
    methods: tuple[str, ...] = ("GET",)
    auth: AuthScheme | None = None


@dataclass(frozen=True, slots=True)
class RouteGroup:
    name: str
    prefix: str
    auth: AuthScheme
    routes: tuple[Route, ...]

    def scheme_for(self, route: Route) -> AuthScheme:
        return route.auth if route.auth is not None else self.auth


class Dispatcher:
    def __init__(self, authenticators: Mapping[AuthScheme, Authenticator]) -> None:
        self._authenticators = dict(authenticators)

    def mount(self, app: Flask, group: RouteGroup) -> Blueprint:
        bp = Blueprint(group.name, __name__, url_prefix=group.prefix or None)
        for route in group.routes:
            bp.add_url_rule(
                route.rule,
                endpoint=route.endpoint,
                view_func=self._guard(route.handler, group.scheme_for(route)),
                methods=list(route.methods),
            )
        app.register_blueprint(bp)
        return bp

    def mount_all(self, app: Flask, groups: Sequence[RouteGroup]) -> None:
        for group in groups:
            self.mount(app, group)

    def _guard(self, handler: Handler, scheme: AuthScheme) -> Handler:
        if scheme is AuthScheme.PUBLIC:
            return handler

        authenticator = self._authenticators.get(scheme)
        if authenticator is None:
            raise ConfigurationError(f"No authenticator registered for {scheme.value}")

        @wraps(handler)
        def guarded(**kwargs: Any) -> Any:
            try:
                identity = authenticator.authenticate(request)
            except UnauthorizedError as exc:
                logger.warning(
                    f"auth.{scheme.value}: rejected {request.method} {request.path}: {exc.message}"
                )
                raise
            g.user_id = identity.subject_id
            set_subject(identity.subject_id)
            return handler(identity, **kwargs)

        return guarded


__all__ = ["Dispatcher", "Handler", "Route", "RouteGroup"]
