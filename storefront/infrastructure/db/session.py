# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase

from storefront.shared.config import AppConfig
from storefront.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(config: AppConfig) -> Engine:
    options: dict[str, object] = {"echo": False, "pool_pre_ping": True}
    if config.is_sqlite():
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(config.database_pool_timeout),
        }
    else:
        options.update(
            pool_size=config.database_pool_size,
            max_overflow=config.database_max_overflow,
            pool_timeout=config.database_pool_timeout,
        )

    engine = create_engine(config.database_url, **options)
    logger.debug(f"db.engine: created for dialect={engine.dialect.name}")
    return engine


def init_db(engine: Engine) -> None:
    # Import for side effect: registers the tables on Base.metadata.
    from storefront.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
