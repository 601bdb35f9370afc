"""Application startup and shutdown for the restaurant catalogue core."""

from __future__ import annotations

import logging

from restaurant_review.core.config import Settings, settings as default_settings
from restaurant_review.core.errors import StorageFault
from restaurant_review.core.logging_config import configure_logging
from restaurant_review.db.migrations import CURRENT_SCHEMA_VERSION, run_migrations
from restaurant_review.db.session import build_engine, build_session_factory
from restaurant_review.services.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


def bootstrap(settings: Settings | None = None) -> CatalogRepository:
    """Open the store, migrate it, seed defaults and return the repository.

    Migration failures propagate as StorageFault. A failed seed is logged and
    startup continues, since the catalogue still works without default
    categories.
    """
    settings = settings or default_settings
    configure_logging(settings)

    engine = build_engine(settings.database_url)
    previous_version = run_migrations(engine)
    logger.info(
        "[BOOTSTRAP] %s (%s) store ready at schema version %s (was %s)",
        settings.app_name,
        settings.app_env,
        CURRENT_SCHEMA_VERSION,
        previous_version,
    )

    repository = CatalogRepository(build_session_factory(engine), settings=settings)
    try:
        report = repository.seed_defaults_if_empty()
        logger.info("[BOOTSTRAP] default data seeded: %s", "yes" if report.changed else "no")
    except StorageFault:
        logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")
    return repository


def shutdown(repository: CatalogRepository) -> None:
    """Release the engine behind repository."""
    repository.engine.dispose()
    logger.info("[BOOTSTRAP] Store closed")
