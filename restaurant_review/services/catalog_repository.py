"""Repository that owns every read and write against the catalogue store.

Each public method runs in its own session and commits at most once, so a
logical change (an edit, a dish added to a restaurant) lands as one unit.
Callers only ever get frozen pydantic snapshots back; to change data they call
another method here. Subscribers registered with :meth:`subscribe` are told
about every committed write.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from restaurant_review.core.config import Settings, settings as default_settings
from restaurant_review.core.errors import NotFoundError, StorageFault, ValidationError
from restaurant_review.db import seed
from restaurant_review.models.restaurant import Dish, Restaurant
from restaurant_review.schemas.category import CategoryCreate, CategoryRead
from restaurant_review.schemas.events import ChangeEvent, SeedReport
from restaurant_review.schemas.preferences import PreferencesRead, PreferencesUpdate
from restaurant_review.schemas.restaurant import (
    DishCreate,
    DishRead,
    DishUpdate,
    RestaurantCreate,
    RestaurantRead,
    RestaurantUpdate,
)
from restaurant_review.services import category_service, dish_service, preferences_service, restaurant_service

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)
ChangeListener = Callable[[ChangeEvent], None]


def _parse(model: type[PayloadT], data: dict[str, Any]) -> PayloadT:
    """Validate data into model, surfacing the first problem as a domain ValidationError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(f"{location}: {first['msg']}") from exc


def _as_uuid(entity: str, record_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except ValueError as exc:
        raise NotFoundError(entity, record_id) from exc


class CatalogRepository:
    """Single point of truth for restaurants, dishes, categories and preferences."""

    def __init__(self, session_factory: sessionmaker[Session], settings: Settings | None = None) -> None:
        self._session_factory = session_factory
        self._settings = settings or default_settings
        self._listeners: list[ChangeListener] = []

    @property
    def engine(self) -> Engine:
        return self._session_factory.kw["bind"]

    # -- change notifications -------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register listener for change events; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # Listeners run after commit; a failing one does not stop the others.
                logger.exception("[STORE] Change listener failed for %s %s", event.entity, event.action)

    # -- session handling ------------------------------------------------------

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("[STORE] Storage operation failed")
            raise StorageFault(f"Storage operation failed: {exc}") from exc
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _load_restaurant(self, db: Session, restaurant_id: uuid.UUID | str) -> Restaurant:
        restaurant = restaurant_service.get_restaurant(db, _as_uuid("Restaurant", restaurant_id))
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return restaurant

    def _load_dish(self, db: Session, dish_id: uuid.UUID | str) -> Dish:
        dish = dish_service.get_dish(db, _as_uuid("Dish", dish_id))
        if dish is None:
            raise NotFoundError("Dish", dish_id)
        return dish

    def _check_category(self, db: Session, name: str | None, category_type: str) -> None:
        if name is None or not self._settings.enforce_category_names:
            return
        category_service.ensure_known_category_name(db, name, category_type)

    # -- restaurants -----------------------------------------------------------

    def create_restaurant(self, name: str, genre: str = "", address: str = "", **fields: Any) -> RestaurantRead:
        payload = _parse(RestaurantCreate, {"name": name, "genre": genre, "address": address, **fields})
        with self._session() as db:
            self._check_category(db, payload.genre, "restaurant")
            restaurant = restaurant_service.create_restaurant(db, payload)
            snapshot = RestaurantRead.model_validate(restaurant)
        logger.info("Created restaurant id=%s name=%s", snapshot.id, snapshot.name)
        self._publish(ChangeEvent(entity="restaurant", action="created", record_id=str(snapshot.id)))
        return snapshot

    def get_restaurant(self, restaurant_id: uuid.UUID | str) -> RestaurantRead:
        with self._session() as db:
            return RestaurantRead.model_validate(self._load_restaurant(db, restaurant_id))

    def update_restaurant(self, restaurant_id: uuid.UUID | str, **fields: Any) -> RestaurantRead:
        """Overwrite the given fields and touch last_update_date."""
        payload = _parse(RestaurantUpdate, fields)
        with self._session() as db:
            restaurant = self._load_restaurant(db, restaurant_id)
            self._check_category(db, payload.genre, "restaurant")
            restaurant = restaurant_service.update_restaurant(db, restaurant, payload)
            snapshot = RestaurantRead.model_validate(restaurant)
        self._publish(ChangeEvent(entity="restaurant", action="updated", record_id=str(snapshot.id)))
        return snapshot

    def toggle_restaurant_favorite(self, restaurant_id: uuid.UUID | str) -> RestaurantRead:
        with self._session() as db:
            restaurant = restaurant_service.toggle_restaurant_favorite(db, self._load_restaurant(db, restaurant_id))
            snapshot = RestaurantRead.model_validate(restaurant)
        self._publish(ChangeEvent(entity="restaurant", action="updated", record_id=str(snapshot.id)))
        return snapshot

    def record_visit(self, restaurant_id: uuid.UUID | str) -> RestaurantRead:
        with self._session() as db:
            restaurant = restaurant_service.record_visit(db, self._load_restaurant(db, restaurant_id))
            snapshot = RestaurantRead.model_validate(restaurant)
        self._publish(ChangeEvent(entity="restaurant", action="updated", record_id=str(snapshot.id)))
        return snapshot

    def delete_restaurant(self, restaurant_id: uuid.UUID | str) -> None:
        """Delete a restaurant together with all of its dishes."""
        with self._session() as db:
            restaurant = self._load_restaurant(db, restaurant_id)
            record_id = str(restaurant.id)
            dish_count = len(restaurant.dishes)
            restaurant_service.delete_restaurant(db, restaurant)
        logger.info("Deleted restaurant id=%s with %s dishes", record_id, dish_count)
        self._publish(ChangeEvent(entity="restaurant", action="deleted", record_id=record_id))

    def list_restaurants(self, sort_key: str = "name", descending: bool = False) -> list[RestaurantRead]:
        with self._session() as db:
            restaurants = restaurant_service.list_restaurants(db, sort_key=sort_key, descending=descending)
            return [RestaurantRead.model_validate(restaurant) for restaurant in restaurants]

    def list_restaurants_by_genre(self, genre: str) -> list[RestaurantRead]:
        with self._session() as db:
            restaurants = restaurant_service.list_restaurants_by_genre(db, genre)
            return [RestaurantRead.model_validate(restaurant) for restaurant in restaurants]

    # -- dishes ----------------------------------------------------------------

    def create_dish(
        self,
        restaurant_id: uuid.UUID | str,
        name: str,
        category: str = "",
        price: int = 0,
        score: int = 50,
        **fields: Any,
    ) -> DishRead:
        """Add a dish to the end of a restaurant's list."""
        payload = _parse(
            DishCreate,
            {"name": name, "category": category, "price": price, "score": score, **fields},
        )
        with self._session() as db:
            restaurant = self._load_restaurant(db, restaurant_id)
            self._check_category(db, payload.category, "dish")
            dish = dish_service.create_dish(db, restaurant, payload)
            snapshot = DishRead.model_validate(dish)
        self._publish(
            ChangeEvent(
                entity="dish",
                action="created",
                record_id=str(snapshot.id),
                parent_id=str(snapshot.restaurant_id),
            )
        )
        return snapshot

    def get_dish(self, dish_id: uuid.UUID | str) -> DishRead:
        with self._session() as db:
            return DishRead.model_validate(self._load_dish(db, dish_id))

    def update_dish(self, dish_id: uuid.UUID | str, **fields: Any) -> DishRead:
        payload = _parse(DishUpdate, fields)
        with self._session() as db:
            dish = self._load_dish(db, dish_id)
            self._check_category(db, payload.category, "dish")
            snapshot = DishRead.model_validate(dish_service.update_dish(db, dish, payload))
        self._publish(
            ChangeEvent(
                entity="dish",
                action="updated",
                record_id=str(snapshot.id),
                parent_id=str(snapshot.restaurant_id),
            )
        )
        return snapshot

    def toggle_dish_favorite(self, dish_id: uuid.UUID | str) -> DishRead:
        with self._session() as db:
            snapshot = DishRead.model_validate(dish_service.toggle_dish_favorite(db, self._load_dish(db, dish_id)))
        self._publish(
            ChangeEvent(
                entity="dish",
                action="updated",
                record_id=str(snapshot.id),
                parent_id=str(snapshot.restaurant_id),
            )
        )
        return snapshot

    def record_order(self, dish_id: uuid.UUID | str) -> DishRead:
        with self._session() as db:
            snapshot = DishRead.model_validate(dish_service.record_order(db, self._load_dish(db, dish_id)))
        self._publish(
            ChangeEvent(
                entity="dish",
                action="updated",
                record_id=str(snapshot.id),
                parent_id=str(snapshot.restaurant_id),
            )
        )
        return snapshot

    def delete_dish(self, dish_id: uuid.UUID | str) -> None:
        with self._session() as db:
            dish = self._load_dish(db, dish_id)
            record_id, parent_id = str(dish.id), str(dish.restaurant_id)
            dish_service.delete_dish(db, dish)
        self._publish(ChangeEvent(entity="dish", action="deleted", record_id=record_id, parent_id=parent_id))

    def list_dishes_of(self, restaurant_id: uuid.UUID | str) -> list[DishRead]:
        """Return the restaurant's dishes in the order they were added."""
        with self._session() as db:
            restaurant = self._load_restaurant(db, restaurant_id)
            return [DishRead.model_validate(dish) for dish in dish_service.list_dishes_of(restaurant)]

    def list_all_dishes(self) -> list[DishRead]:
        with self._session() as db:
            return [DishRead.model_validate(dish) for dish in dish_service.list_all_dishes(db)]

    # -- categories ------------------------------------------------------------

    def list_categories(self, category_type: str) -> list[CategoryRead]:
        with self._session() as db:
            categories = category_service.list_categories(db, category_type)
            return [CategoryRead.model_validate(category) for category in categories]

    def create_category(self, name: str, category_type: str) -> CategoryRead:
        payload = _parse(CategoryCreate, {"name": name, "type": category_type})
        with self._session() as db:
            snapshot = CategoryRead.model_validate(category_service.create_category(db, payload))
        self._publish(ChangeEvent(entity="category", action="created", record_id=str(snapshot.id)))
        return snapshot

    # -- seeding and preferences ------------------------------------------------

    def seed_defaults_if_empty(self) -> SeedReport:
        """Insert default preferences and categories once; later calls change nothing."""
        with self._session() as db:
            report = seed.seed_defaults_if_empty(db)
        if report.preferences_created:
            self._publish(ChangeEvent(entity="preferences", action="created"))
        if report.restaurant_categories_created or report.dish_categories_created:
            self._publish(ChangeEvent(entity="category", action="created"))
        return report

    def get_preferences(self) -> PreferencesRead | None:
        with self._session() as db:
            preferences = preferences_service.get_preferences(db)
            if preferences is None:
                return None
            return PreferencesRead.model_validate(preferences)

    def save_preferences(
        self,
        theme: str,
        sort_order: str,
        default_filter_genre: str | None = None,
    ) -> PreferencesRead:
        """Create the preferences row if missing, otherwise overwrite it."""
        payload = _parse(
            PreferencesUpdate,
            {"theme": theme, "default_sort_order": sort_order, "default_filter_genre": default_filter_genre},
        )
        with self._session() as db:
            self._check_category(db, payload.default_filter_genre, "restaurant")
            snapshot = PreferencesRead.model_validate(preferences_service.save_preferences(db, payload))
        self._publish(ChangeEvent(entity="preferences", action="updated"))
        return snapshot
