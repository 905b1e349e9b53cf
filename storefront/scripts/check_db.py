# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database connectivity check."""

from __future__ import annotations

import argparse
import sys

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from storefront.infrastructure.db import Database, ListFilters, QueryBuilder, build_engine
from storefront.shared.config import load_config


def check_connection(db: Database) -> object:
    return db.fetch_value(select(func.current_timestamp()))


def explain_product_listing(db: Database) -> list[dict[str, object]]:
    return db.explain(QueryBuilder.for_entity("products").select_page(ListFilters()))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify the configured database is reachable")
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the EXPLAIN output for the default product listing query",
    )
    args = parser.parse_args(argv)

    config = load_config()
    db = Database(build_engine(config))
    try:
        now = check_connection(db)
        print(f"Database connection successful ({db.dialect}). Server time: {now}")
        if args.explain:
            for row in explain_product_listing(db):
                print("  " + ", ".join(f"{key}={value}" for key, value in row.items()))
    except SQLAlchemyError as exc:
        print(f"Database connection failed: {exc}", file=sys.stderr)
        return 1
    finally:
        db.engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
