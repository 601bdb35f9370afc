"""Change notification tests."""

from pathlib import Path

import pytest

from restaurant_review.core.config import Settings
from restaurant_review.core.errors import ValidationError
from restaurant_review.db.migrations import run_migrations
from restaurant_review.db.session import build_engine, build_session_factory
from restaurant_review.schemas.events import ChangeEvent
from restaurant_review.services.catalog_repository import CatalogRepository


def _build_repository(db_file: Path) -> CatalogRepository:
    engine = build_engine(f"sqlite:///{db_file}")
    run_migrations(engine)
    return CatalogRepository(build_session_factory(engine), settings=Settings())


def test_subscribers_receive_events_for_committed_writes(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "events.db")
    events: list[ChangeEvent] = []
    repository.subscribe(events.append)

    repository.seed_defaults_if_empty()
    restaurant = repository.create_restaurant("Sushi Taro", "和食", "Tokyo")
    dish = repository.create_dish(restaurant.id, "Toro Nigiri", "メイン", price=1200, score=90)
    repository.delete_dish(dish.id)
    repository.delete_restaurant(restaurant.id)

    assert [(event.entity, event.action) for event in events] == [
        ("preferences", "created"),
        ("category", "created"),
        ("restaurant", "created"),
        ("dish", "created"),
        ("dish", "deleted"),
        ("restaurant", "deleted"),
    ]
    assert events[3].parent_id == str(restaurant.id)
    assert events[3].record_id == str(dish.id)


def test_failed_write_publishes_nothing(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "events_failed.db")
    repository.seed_defaults_if_empty()
    events: list[ChangeEvent] = []
    repository.subscribe(events.append)

    with pytest.raises(ValidationError):
        repository.create_restaurant("", "和食", "Tokyo")

    assert events == []


def test_unsubscribe_and_failing_listener(tmp_path: Path) -> None:
    repository = _build_repository(tmp_path / "events_unsub.db")
    repository.seed_defaults_if_empty()
    received: list[ChangeEvent] = []

    def broken_listener(event: ChangeEvent) -> None:
        raise RuntimeError("render failed")

    repository.subscribe(broken_listener)
    unsubscribe = repository.subscribe(received.append)

    repository.create_restaurant("First", "和食", "Tokyo")
    unsubscribe()
    repository.create_restaurant("Second", "和食", "Tokyo")

    assert len(received) == 1
    assert len(repository.list_restaurants()) == 2
