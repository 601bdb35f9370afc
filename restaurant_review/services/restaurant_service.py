"""Restaurant persistence helpers."""

import uuid

from sqlalchemy.orm import Session, selectinload

from restaurant_review.core.errors import ValidationError
from restaurant_review.models.restaurant import Restaurant
from restaurant_review.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from restaurant_review.utils.time import next_update_time, utcnow

RESTAURANT_SORT_COLUMNS = {
    "name": Restaurant.name,
    "genre": Restaurant.genre,
    "address": Restaurant.address,
    "registration_date": Restaurant.registration_date,
    "last_update_date": Restaurant.last_update_date,
    "visit_count": Restaurant.visit_count,
}


def get_restaurant(db: Session, restaurant_id: uuid.UUID) -> Restaurant | None:
    return db.get(Restaurant, restaurant_id)


def create_restaurant(db: Session, payload: RestaurantCreate) -> Restaurant:
    """Create and persist a restaurant with matching registration/update dates."""
    now = utcnow()
    restaurant = Restaurant(**payload.model_dump(), registration_date=now, last_update_date=now)
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def touch_restaurant(restaurant: Restaurant) -> None:
    """Move last_update_date forward without letting it go backwards."""
    restaurant.last_update_date = next_update_time(restaurant.last_update_date)


def update_restaurant(db: Session, restaurant: Restaurant, payload: RestaurantUpdate) -> Restaurant:
    """Apply fields that were explicitly set on payload and persist."""
    for field_name, value in payload.model_dump(exclude_unset=True).items():
        setattr(restaurant, field_name, value)
    touch_restaurant(restaurant)
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def toggle_restaurant_favorite(db: Session, restaurant: Restaurant) -> Restaurant:
    restaurant.is_favorite = not restaurant.is_favorite
    touch_restaurant(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def record_visit(db: Session, restaurant: Restaurant) -> Restaurant:
    restaurant.visit_count += 1
    touch_restaurant(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def delete_restaurant(db: Session, restaurant: Restaurant) -> None:
    """Delete restaurant; owned dishes are removed with it."""
    db.delete(restaurant)
    db.commit()


def list_restaurants(db: Session, sort_key: str = "name", descending: bool = False) -> list[Restaurant]:
    """Return all restaurants ordered by sort_key, ties broken by registration time."""
    column = RESTAURANT_SORT_COLUMNS.get(sort_key)
    if column is None:
        raise ValidationError(f"Unknown restaurant sort key: {sort_key!r}")
    ordering = column.desc() if descending else column.asc()
    return (
        db.query(Restaurant)
        .options(selectinload(Restaurant.dishes))
        .order_by(ordering, Restaurant.registration_date.asc())
        .all()
    )


def list_restaurants_by_genre(db: Session, genre: str) -> list[Restaurant]:
    """Return restaurants with exactly this genre ordered by name."""
    return (
        db.query(Restaurant)
        .options(selectinload(Restaurant.dishes))
        .filter(Restaurant.genre == genre)
        .order_by(Restaurant.name.asc(), Restaurant.registration_date.asc())
        .all()
    )
