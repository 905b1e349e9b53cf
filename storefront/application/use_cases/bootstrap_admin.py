# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace

from storefront.domain.entities import Admin
from storefront.domain.repositories import AdminRepository, PasswordHasher


class BootstrapAdminUseCase:
    def __init__(self, *, admins: AdminRepository, password_hasher: PasswordHasher) -> None:
        self._admins = admins
        self._password_hasher = password_hasher

    def execute(
        self,
        email: str,
        password: str,
        name: str = "Administrator",
        *,
        reset_password: bool = False,
    ) -> tuple[Admin, bool]:
        """Return the admin for ``email``, creating it when absent.

        The boolean is True when a new row was written. With ``reset_password``
        an existing admin gets ``password`` re-hashed in place, which is how
        rows carrying a hash format this service cannot verify are re-seeded.
        """
        email = email.strip()
        if not email or not password:
            raise ValueError("email and password are required")

        existing = self._admins.find_by_email(email)
        if existing is not None:
            if not reset_password:
                return existing, False
            password_hash = self._password_hasher.hash(password)
            self._admins.set_password(existing.id, password_hash)
            return replace(existing, password_hash=password_hash), False

        admin = self._admins.add(
            email=email,
            name=name.strip() or "Administrator",
            password_hash=self._password_hasher.hash(password),
        )
        return admin, True
