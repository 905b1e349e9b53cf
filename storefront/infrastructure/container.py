# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine

from storefront.application.services.password_hashing import WerkzeugPasswordHasher
from storefront.application.services.product_service import ProductService
from storefront.application.services.user_service import UserService
from storefront.application.use_cases.authenticate_admin import AuthenticateAdminUseCase
from storefront.application.use_cases.bootstrap_admin import BootstrapAdminUseCase
from storefront.domain.entities import AuthScheme
from storefront.domain.repositories import (
    AdminRepository,
    PasswordHasher,
    ProductRepository,
    UserRepository,
)
from storefront.infrastructure.auth import (
    Authenticator,
    DatabaseSessionInterface,
    JwtTokenService,
    SessionAuthenticator,
    SqlAlchemySessionStore,
    TokenAuthenticator,
)
from storefront.infrastructure.db import Database, build_engine
from storefront.infrastructure.repositories.admin_repository import SqlAdminRepository
from storefront.infrastructure.repositories.product_repository import SqlProductRepository
from storefront.infrastructure.repositories.user_repository import SqlUserRepository
from storefront.interfaces.http.controllers.admin_controller import AdminController
from storefront.interfaces.http.controllers.auth_controller import AuthController
from storefront.interfaces.http.controllers.product_controller import ProductController
from storefront.interfaces.http.dispatcher import Dispatcher, RouteGroup
from storefront.shared.config import AppConfig, load_config


class Container:
    """Lazily wired application graph.

    Members are ``cached_property`` objects, so tests can assign a replacement
    (``container.product_repository = FakeRepo()``) before ``create_app`` reads it.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config)

    @cached_property
    def database(self) -> Database:
        return Database(self.engine)

    @cached_property
    def product_repository(self) -> ProductRepository:
        return SqlProductRepository(self.database)

    @cached_property
    def user_repository(self) -> UserRepository:
        return SqlUserRepository(self.database)

    @cached_property
    def admin_repository(self) -> AdminRepository:
        return SqlAdminRepository(self.database)

    # Auth

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(self.config.jwt_secret, self.config.jwt_ttl)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(self.database)

    @cached_property
    def session_interface(self) -> DatabaseSessionInterface:
        return DatabaseSessionInterface(
            self.session_store, lifetime=self.config.session_lifetime
        )

    @cached_property
    def token_authenticator(self) -> TokenAuthenticator:
        return TokenAuthenticator(self.token_service)

    @cached_property
    def session_authenticator(self) -> SessionAuthenticator:
        return SessionAuthenticator()

    @cached_property
    def authenticators(self) -> dict[AuthScheme, Authenticator]:
        return {
            AuthScheme.TOKEN: self.token_authenticator,
            AuthScheme.SESSION: self.session_authenticator,
        }

    # Application

    @cached_property
    def authenticate_admin_use_case(self) -> AuthenticateAdminUseCase:
        return AuthenticateAdminUseCase(
            admins=self.admin_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def bootstrap_admin_use_case(self) -> BootstrapAdminUseCase:
        return BootstrapAdminUseCase(
            admins=self.admin_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def product_service(self) -> ProductService:
        return ProductService(products=self.product_repository)

    @cached_property
    def user_service(self) -> UserService:
        return UserService(users=self.user_repository)

    # HTTP

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            authenticate=self.authenticate_admin_use_case,
            tokens=self.token_service,
        )

    @cached_property
    def product_controller(self) -> ProductController:
        return ProductController(products=self.product_service)

    @cached_property
    def admin_controller(self) -> AdminController:
        return AdminController(
            users=self.user_service,
            authenticate=self.authenticate_admin_use_case,
            sessions=self.session_authenticator,
        )

    @cached_property
    def dispatcher(self) -> Dispatcher:
        return Dispatcher(self.authenticators)

    def route_groups(self) -> list[RouteGroup]:
        return [
            self.auth_controller.route_group(),
            self.product_controller.route_group(),
            self.admin_controller.route_group(),
        ]
