# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create an admin account for the panel and the token API."""

from __future__ import annotations

import argparse
import getpass
import sys

from storefront.application.services.password_hashing import WerkzeugPasswordHasher
from storefront.application.use_cases.bootstrap_admin import BootstrapAdminUseCase
from storefront.infrastructure.db import Database, build_engine, init_db
from storefront.infrastructure.repositories.admin_repository import SqlAdminRepository
from storefront.shared.config import load_config


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("email", help="Admin email address")
    parser.add_argument("--name", default="Administrator", help="Display name")
    parser.add_argument(
        "--password",
        default=None,
        help="Password (prompted for when omitted)",
    )
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Replace the password of an existing admin with the given one",
    )
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 2

    engine = build_engine(load_config())
    try:
        init_db(engine)
        bootstrap = BootstrapAdminUseCase(
            admins=SqlAdminRepository(Database(engine)),
            password_hasher=WerkzeugPasswordHasher(),
        )
        admin, created = bootstrap.execute(
            args.email, password, args.name, reset_password=args.reset_password
        )
    finally:
        engine.dispose()

    if created:
        print(f"Created admin {admin.email} (id={admin.id})")
    elif args.reset_password:
        print(f"Password reset for admin {admin.email} (id={admin.id})")
    else:
        print(f"Admin {admin.email} already exists (id={admin.id}); nothing changed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
