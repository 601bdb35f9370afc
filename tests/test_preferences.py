"""User preferences upsert tests."""

from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

from restaurant_review.core.config import Settings
from restaurant_review.core.errors import ValidationError
from restaurant_review.db.migrations import run_migrations
from restaurant_review.db.session import build_engine, build_session_factory
from restaurant_review.models import UserPreferences
from restaurant_review.services.catalog_repository import CatalogRepository


def _build_repository(db_file: Path) -> CatalogRepository:
    engine = build_engine(f"sqlite:///{db_file}")
    run_migrations(engine)
    return CatalogRepository(build_session_factory(engine), settings=Settings())


def test_get_preferences_absent_before_seed(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "prefs_empty.db")

    assert repository.get_preferences() is None


def test_save_preferences_creates_row_when_missing(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "prefs_create.db")

    saved = repository.save_preferences(theme="dark", sort_order="rating")

    assert saved.theme == "dark"
    assert saved.default_sort_order == "rating"
    assert saved.default_filter_genre is None
    assert repository.get_preferences() == saved


def test_save_preferences_updates_single_row(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "prefs_update.db")
    repository.seed_defaults_if_empty()

    repository.save_preferences(theme="light", sort_order="date")
    saved = repository.save_preferences(theme="dark", sort_order="name", default_filter_genre="カフェ")

    assert saved.theme == "dark"
    assert saved.default_sort_order == "name"
    assert saved.default_filter_genre == "カフェ"

    testing_session_local = sessionmaker(bind=repository.engine)
    with testing_session_local() as session:
        assert session.query(UserPreferences).count() == 1


def test_save_preferences_rejects_unknown_values(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "prefs_invalid.db")
    repository.seed_defaults_if_empty()

    with pytest.raises(ValidationError):
        repository.save_preferences(theme="sepia", sort_order="name")
    with pytest.raises(ValidationError):
        repository.save_preferences(theme="dark", sort_order="price")
    with pytest.raises(ValidationError):
        repository.save_preferences(theme="dark", sort_order="name", default_filter_genre="宇宙食")

    preferences = repository.get_preferences()
    assert preferences is not None
    assert preferences.theme == "system"
