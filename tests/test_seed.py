"""Default data seeding tests."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from restaurant_review.core.config import Settings
from restaurant_review.db.migrations import run_migrations
from restaurant_review.db.seed import DEFAULT_DISH_CATEGORIES, DEFAULT_RESTAURANT_GENRES, seed_defaults_if_empty
from restaurant_review.models import Category, UserPreferences
from restaurant_review.services.catalog_repository import CatalogRepository


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def test_seed_defaults_creates_preferences_and_categories(tmp_path: Path) -> None:
    """First seed inserts one preferences row and both default category sets."""
    engine = _build_test_engine(tmp_path / "seed_first.db")
    run_migrations(engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with testing_session_local() as session:
        report = seed_defaults_if_empty(session)

    assert report.preferences_created is True
    assert report.restaurant_categories_created == len(DEFAULT_RESTAURANT_GENRES)
    assert report.dish_categories_created == len(DEFAULT_DISH_CATEGORIES)

    with testing_session_local() as session:
        preferences = session.query(UserPreferences).all()
        assert len(preferences) == 1
        assert preferences[0].default_sort_order == "name"
        assert preferences[0].theme == "system"
        genres = {row.name for row in session.query(Category).filter(Category.type == "restaurant")}
        dish_categories = {row.name for row in session.query(Category).filter(Category.type == "dish")}

    assert genres == set(DEFAULT_RESTAURANT_GENRES)
    assert dish_categories == set(DEFAULT_DISH_CATEGORIES)


def test_seed_defaults_is_idempotent(tmp_path: Path) -> None:
    """Calling the seed repeatedly leaves exactly the first run's rows."""
    engine = _build_test_engine(tmp_path / "seed_repeat.db")
    run_migrations(engine)
    repository = CatalogRepository(
        sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine),
        settings=Settings(),
    )

    first = repository.seed_defaults_if_empty()
    later = [repository.seed_defaults_if_empty() for _ in range(4)]

    assert first.changed is True
    assert all(not report.changed for report in later)
    assert len(repository.list_categories("restaurant")) == len(DEFAULT_RESTAURANT_GENRES)
    assert len(repository.list_categories("dish")) == len(DEFAULT_DISH_CATEGORIES)

    testing_session_local = sessionmaker(bind=engine)
    with testing_session_local() as session:
        assert session.query(UserPreferences).count() == 1


def test_seed_only_fills_missing_kind(tmp_path: Path) -> None:
    """A kind that already has rows is left alone while an empty kind is seeded."""
    engine = _build_test_engine(tmp_path / "seed_partial.db")
    run_migrations(engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with testing_session_local() as session:
        session.add(Category(name="ラーメン", type="restaurant"))
        session.commit()

    with testing_session_local() as session:
        report = seed_defaults_if_empty(session)

    assert report.restaurant_categories_created == 0
    assert report.dish_categories_created == len(DEFAULT_DISH_CATEGORIES)

    with testing_session_local() as session:
        genres = [row.name for row in session.query(Category).filter(Category.type == "restaurant")]
    assert genres == ["ラーメン"]
