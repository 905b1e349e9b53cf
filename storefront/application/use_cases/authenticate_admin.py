# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.domain.entities import Admin
from storefront.domain.exceptions import InvalidCredentialsError
from storefront.domain.repositories import AdminRepository, PasswordHasher


class AuthenticateAdminUseCase:
    """Check an email/password pair against the admin record.

    Both login surfaces (bearer token and admin session) go through here, so a
    wrong email and a wrong password fail with the same error.
    """

    def __init__(self, *, admins: AdminRepository, password_hasher: PasswordHasher) -> None:
        self._admins = admins
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> Admin:
        admin = self._admins.find_by_email(email.strip())
        if admin is None or not self._password_hasher.verify(password, admin.password_hash):
            raise InvalidCredentialsError()
        return admin
