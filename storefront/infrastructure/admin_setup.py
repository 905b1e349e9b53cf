# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.application.use_cases.bootstrap_admin import BootstrapAdminUseCase
from storefront.shared.config import AppConfig
from storefront.shared.logging import logger


class AdminSetupError(Exception):
    pass


def setup_admin_user(config: AppConfig, bootstrap: BootstrapAdminUseCase) -> None:
    if not config.admin_email or not config.admin_password:
        logger.info("admin_setup: ADMIN_EMAIL/ADMIN_PASSWORD not configured, skipping admin setup")
        return

    try:
        admin, created = bootstrap.execute(
            config.admin_email, config.admin_password, config.admin_name
        )
    except Exception as e:
        logger.error(f"admin_setup: Failed to setup admin user: {e}")
        raise AdminSetupError(f"Failed to setup admin user: {e}") from e

    if created:
        logger.info(f"admin_setup: Created admin account {admin.id}")
    else:
        logger.info(f"admin_setup: Admin account {admin.id} already present")


__all__ = [
    "AdminSetupError",
    "setup_admin_user",
]
