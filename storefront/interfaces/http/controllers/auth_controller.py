# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response, jsonify
from pydantic import ValidationError

from storefront.application.use_cases.authenticate_admin import AuthenticateAdminUseCase
from storefront.domain.entities import AuthScheme
from storefront.infrastructure.auth import JwtTokenService
from storefront.interfaces.http.dispatcher import Route, RouteGroup
from storefront.interfaces.http.dto.auth import LoginRequestDTO, TokenDTO
from storefront.interfaces.http.request_body import json_or_form
from storefront.shared.errors import BadRequestError
from storefront.shared.errors.validation import format_pydantic_errors
from storefront.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        authenticate: AuthenticateAdminUseCase,
        tokens: JwtTokenService,
    ) -> None:
        self._authenticate = authenticate
        self._tokens = tokens

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(json_or_form())
        except ValidationError as exc:
            raise BadRequestError(
                "email and password required", context=format_pydantic_errors(exc)
            ) from exc

        admin = self._authenticate.execute(dto.email, dto.password)
        token, ttl = self._tokens.issue(admin)

        logger.info(f"auth.login: token issued admin_id={admin.id}")
        return jsonify(TokenDTO(token=token, expires_in=ttl).model_dump()), 200

    def route_group(self) -> RouteGroup:
        return RouteGroup(
            name="api_auth",
            prefix="/api/auth",
            auth=AuthScheme.PUBLIC,
            routes=(Route("/login", "login", self.login, ("POST",)),),
        )
