# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .services.product_service import ProductService
from .services.user_service import UserService
from .use_cases.authenticate_admin import AuthenticateAdminUseCase
from .use_cases.bootstrap_admin import BootstrapAdminUseCase

__all__ = [
    "AuthenticateAdminUseCase",
    "BootstrapAdminUseCase",
    "ProductService",
    "UserService",
    "WerkzeugPasswordHasher",
]
