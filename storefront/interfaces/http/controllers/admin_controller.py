# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response, jsonify, request
from pydantic import ValidationError

from storefront.application.services.user_service import UserService
from storefront.application.use_cases.authenticate_admin import AuthenticateAdminUseCase
from storefront.domain.entities import AuthIdentity, AuthScheme
from storefront.infrastructure.auth import SessionAuthenticator
from storefront.interfaces.http.dispatcher import Route, RouteGroup
from storefront.interfaces.http.dto.auth import (
    AdminLoginDTO,
    AdminSummaryDTO,
    LoginHintDTO,
    LoginRequestDTO,
)
from storefront.interfaces.http.dto.common import MessageDTO
from storefront.interfaces.http.dto.users import (
    UserCreateDTO,
    UserCreatedDTO,
    UserDTO,
    UserListDTO,
    UserListQueryDTO,
    UserUpdateDTO,
)
from storefront.interfaces.http.request_body import json_object, json_or_form
from storefront.shared.errors import BadRequestError
from storefront.shared.errors.validation import (
    format_pydantic_errors,
    raise_bad_request,
    raise_validation_error,
)
from storefront.shared.logging import logger


class AdminController:
    """Session-authenticated admin panel over the ``users`` table."""

    def __init__(
        self,
        *,
        users: UserService,
        authenticate: AuthenticateAdminUseCase,
        sessions: SessionAuthenticator,
    ) -> None:
        self._users = users
        self._authenticate = authenticate
        self._sessions = sessions

    def login_hint(self) -> tuple[Response, int]:
        return jsonify(LoginHintDTO().model_dump()), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(json_or_form())
        except ValidationError as exc:
            raise BadRequestError(
                "Email and password are required", context=format_pydantic_errors(exc)
            ) from exc

        admin = self._authenticate.execute(dto.email, dto.password)
        self._sessions.establish(admin)

        logger.info(f"admin.login: ok admin_id={admin.id}")
        payload = AdminLoginDTO(admin=AdminSummaryDTO(**admin.summary()))
        return jsonify(payload.model_dump()), 200

    def logout(self) -> tuple[Response, int]:
        self._sessions.destroy()
        logger.info("admin.logout: ok")
        return jsonify(MessageDTO(message="Logged out").model_dump()), 200

    def list_users(self, identity: AuthIdentity) -> tuple[Response, int]:
        try:
            query = UserListQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        filters = query.to_filters()
        rows, total = self._users.list(filters)
        return jsonify(UserListDTO.build(rows, total, filters).model_dump(mode="json")), 200

    def create_user(self, identity: AuthIdentity) -> tuple[Response, int]:
        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict) or not body:
            raise BadRequestError("Name and email are required")
        try:
            dto = UserCreateDTO.model_validate(body)
        except ValidationError as exc:
            raise_bad_request(exc, "Name and email are required")

        user_id = self._users.create(dto.model_dump())
        logger.info(f"admin.users.create: ok id={user_id} by={identity.subject_id}")
        return jsonify(UserCreatedDTO(id=user_id).model_dump()), 201

    def show_user(self, identity: AuthIdentity, user_id: int) -> tuple[Response, int]:
        row = self._users.get(user_id)
        return jsonify(UserDTO.model_validate(row).model_dump(mode="json")), 200

    def update_user(self, identity: AuthIdentity, user_id: int) -> tuple[Response, int]:
        self._users.get(user_id)
        body = json_object()
        try:
            dto = UserUpdateDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        changed = self._users.update(user_id, dto.changes())
        message = "User updated" if changed else "No changes applied"
        return jsonify(MessageDTO(message=message).model_dump()), 200

    def delete_user(self, identity: AuthIdentity, user_id: int) -> tuple[Response, int]:
        self._users.delete(user_id)
        logger.info(f"admin.users.delete: ok id={user_id} by={identity.subject_id}")
        return jsonify(MessageDTO(message="User deleted").model_dump()), 200

    def route_group(self) -> RouteGroup:
        return RouteGroup(
            name="admin",
            prefix="/admin",
            auth=AuthScheme.SESSION,
            routes=(
                Route("/login", "login_hint", self.login_hint, ("GET",), AuthScheme.PUBLIC),
                Route("/login", "login", self.login, ("POST",), AuthScheme.PUBLIC),
                Route("/logout", "logout", self.logout, ("POST",), AuthScheme.PUBLIC),
                Route("/users", "list_users", self.list_users, ("GET",)),
                Route("/users", "create_user", self.create_user, ("POST",)),
                Route("/users/<int:user_id>", "show_user", self.show_user, ("GET",)),
                Route("/users/<int:user_id>", "update_user", self.update_user, ("PUT",)),
                Route("/users/<int:user_id>", "delete_user", self.delete_user, ("DELETE",)),
            ),
        )
