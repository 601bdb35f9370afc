"""Category listing and creation tests."""

from pathlib import Path

import pytest

from restaurant_review.core.config import Settings
from restaurant_review.core.errors import ValidationError
from restaurant_review.db.migrations import run_migrations
from restaurant_review.db.seed import DEFAULT_RESTAURANT_GENRES
from restaurant_review.db.session import build_engine, build_session_factory
from restaurant_review.services.catalog_repository import CatalogRepository


def _build_repository(db_file: Path) -> CatalogRepository:
    engine = build_engine(f"sqlite:///{db_file}")
    run_migrations(engine)
    repository = CatalogRepository(build_session_factory(engine), settings=Settings())
    repository.seed_defaults_if_empty()
    return repository


def test_create_category_allows_duplicate_names(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "duplicate_category.db")

    duplicate = repository.create_category("カフェ", "restaurant")

    categories = repository.list_categories("restaurant")
    cafes = [category for category in categories if category.name == "カフェ"]
    assert len(cafes) == 2
    assert duplicate.id in {category.id for category in cafes}
    assert len(categories) == len(DEFAULT_RESTAURANT_GENRES) + 1


def test_list_categories_filters_by_type_and_sorts_by_name(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "category_kinds.db")
    repository.create_category("  麺類  ", "dish")

    names = [category.name for category in repository.list_categories("dish")]

    assert "麺類" in names
    assert names == sorted(names)
    assert "麺類" not in [category.name for category in repository.list_categories("restaurant")]


def test_unknown_category_type_is_rejected(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "category_invalid.db")

    with pytest.raises(ValidationError):
        repository.list_categories("bogus")
    with pytest.raises(ValidationError):
        repository.create_category("Snacks", "bogus")
    with pytest.raises(ValidationError):
        repository.create_category("   ", "dish")
