"""Dish persistence helpers; dishes always live in their restaurant's list."""

import uuid

from sqlalchemy.orm import Session

from restaurant_review.models.restaurant import Dish, Restaurant
from restaurant_review.schemas.restaurant import DishCreate, DishUpdate
from restaurant_review.services.restaurant_service import touch_restaurant
from restaurant_review.utils.time import next_update_time, utcnow


def get_dish(db: Session, dish_id: uuid.UUID) -> Dish | None:
    return db.get(Dish, dish_id)


def create_dish(db: Session, restaurant: Restaurant, payload: DishCreate) -> Dish:
    """Append a new dish to restaurant's list and touch the restaurant."""
    now = utcnow()
    dish = Dish(**payload.model_dump(), registration_date=now, last_update_date=now)
    restaurant.dishes.append(dish)
    touch_restaurant(restaurant)
    db.commit()
    db.refresh(dish)
    return dish


def update_dish(db: Session, dish: Dish, payload: DishUpdate) -> Dish:
    """Apply fields that were explicitly set on payload and persist."""
    for field_name, value in payload.model_dump(exclude_unset=True).items():
        setattr(dish, field_name, value)
    dish.last_update_date = next_update_time(dish.last_update_date)
    db.add(dish)
    db.commit()
    db.refresh(dish)
    return dish


def toggle_dish_favorite(db: Session, dish: Dish) -> Dish:
    dish.is_favorite = not dish.is_favorite
    dish.last_update_date = next_update_time(dish.last_update_date)
    db.commit()
    db.refresh(dish)
    return dish


def record_order(db: Session, dish: Dish) -> Dish:
    dish.order_count += 1
    dish.last_update_date = next_update_time(dish.last_update_date)
    db.commit()
    db.refresh(dish)
    return dish


def delete_dish(db: Session, dish: Dish) -> None:
    """Remove dish from its owner's list; the orphan row is deleted."""
    restaurant = dish.restaurant
    restaurant.dishes.remove(dish)
    restaurant.dishes.reorder()
    touch_restaurant(restaurant)
    db.commit()


def list_dishes_of(restaurant: Restaurant) -> list[Dish]:
    """Return restaurant's dishes in insertion order."""
    return list(restaurant.dishes)


def list_all_dishes(db: Session) -> list[Dish]:
    """Return every dish grouped by owner name, then list order."""
    return (
        db.query(Dish)
        .join(Restaurant, Dish.restaurant_id == Restaurant.id)
        .order_by(
            Restaurant.name.asc(),
            Restaurant.registration_date.asc(),
            Dish.position.asc(),
        )
        .all()
    )
