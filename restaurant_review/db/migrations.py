"""Versioned schema migrations for the SQLite store.

The schema version lives in ``PRAGMA user_version``. Each step upgrades the
database from ``version - 1`` to ``version`` inside one transaction and must
be safe to run against a database that already has the target shape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from restaurant_review.core.errors import StorageFault
from restaurant_review.db.base import Base

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION: int = 1


def _migrate_to_v1(connection: Connection) -> None:
    """Initial schema: create all tables that are missing."""
    Base.metadata.create_all(bind=connection)


MIGRATIONS: dict[int, Callable[[Connection], None]] = {
    1: _migrate_to_v1,
}


def get_schema_version(connection: Connection) -> int:
    """Return the version stamped on the database (0 for a fresh file)."""
    if connection.dialect.name != "sqlite":
        return 0
    return int(connection.execute(text("PRAGMA user_version")).scalar_one())


def _set_schema_version(connection: Connection, version: int) -> None:
    if connection.dialect.name != "sqlite":
        return
    # PRAGMA does not accept bound parameters.
    connection.execute(text(f"PRAGMA user_version = {int(version)}"))


def run_migrations(engine: Engine, target_version: int = CURRENT_SCHEMA_VERSION) -> int:
    """Upgrade the store to target_version; return the version it started from."""
    try:
        with engine.begin() as connection:
            stored_version = get_schema_version(connection)
            if stored_version > target_version:
                raise StorageFault(
                    f"Database schema version {stored_version} is newer than supported version {target_version}"
                )
            if engine.dialect.name != "sqlite":
                Base.metadata.create_all(bind=connection)
                return stored_version

            # A fresh file still runs every step so the tables exist.
            for version in range(stored_version + 1, target_version + 1):
                logger.info("[MIGRATE] Upgrading schema %s -> %s", version - 1, version)
                MIGRATIONS[version](connection)
                _set_schema_version(connection, version)
    except SQLAlchemyError as exc:
        logger.exception("[MIGRATE] Schema migration failed")
        raise StorageFault(f"Schema migration failed: {exc}") from exc
    return stored_version
