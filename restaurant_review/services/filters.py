"""Pure view helpers over restaurant and dish snapshots.

Nothing here touches the store: every function takes a sequence of snapshots
and returns a new list, so callers can chain them freely (search, then
favorites, then sort) on whatever the repository last handed out.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TypeVar

from restaurant_review.core.errors import ValidationError
from restaurant_review.schemas.restaurant import DishRead, RestaurantRead

Favoritable = TypeVar("Favoritable", RestaurantRead, DishRead)

DEFAULT_SECTION_SIZE: int = 5


class RatingBand(str, Enum):
    """Coarse score bucket used for colour coding."""

    LOW = "low"
    MEDIUM_LOW = "medium_low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH = "high"


RATING_BANDS: tuple[tuple[int, int, RatingBand], ...] = (
    (0, 20, RatingBand.LOW),
    (21, 40, RatingBand.MEDIUM_LOW),
    (41, 60, RatingBand.MEDIUM),
    (61, 80, RatingBand.MEDIUM_HIGH),
    (81, 100, RatingBand.HIGH),
)


def rating_band(score: int) -> RatingBand:
    """Return the band containing score; bounds are inclusive."""
    for lower, upper, band in RATING_BANDS:
        if lower <= score <= upper:
            return band
    raise ValidationError(f"Score must be between 0 and 100, got {score}")


def _take(items: list[Favoritable], n: int) -> list[Favoritable]:
    if n < 0:
        raise ValidationError(f"Section size cannot be negative: {n}")
    return items[:n]


def recent(restaurants: Sequence[RestaurantRead], n: int = DEFAULT_SECTION_SIZE) -> list[RestaurantRead]:
    """Newest registrations first, at most n."""
    ordered = sorted(restaurants, key=lambda restaurant: restaurant.registration_date, reverse=True)
    return _take(ordered, n)


def frequent(restaurants: Sequence[RestaurantRead], n: int = DEFAULT_SECTION_SIZE) -> list[RestaurantRead]:
    """Most visited first, at most n."""
    ordered = sorted(restaurants, key=lambda restaurant: restaurant.visit_count, reverse=True)
    return _take(ordered, n)


def favorites(items: Sequence[Favoritable]) -> list[Favoritable]:
    return [item for item in items if item.is_favorite]


def _contains(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def search_restaurants(
    restaurants: Sequence[RestaurantRead],
    text: str = "",
    genre: str | None = None,
) -> list[RestaurantRead]:
    """Match text against name or address, and genre exactly; empty filters keep everything."""
    results = list(restaurants)
    if text:
        results = [
            restaurant
            for restaurant in results
            if _contains(restaurant.name, text) or _contains(restaurant.address, text)
        ]
    if genre is not None:
        results = [restaurant for restaurant in results if restaurant.genre == genre]
    return results


def search_dishes(
    dishes: Sequence[DishRead],
    text: str = "",
    category: str | None = None,
) -> list[DishRead]:
    """Match text against dish name, and category exactly; empty filters keep everything."""
    results = list(dishes)
    if text:
        results = [dish for dish in results if _contains(dish.name, text)]
    if category is not None:
        results = [dish for dish in results if dish.category == category]
    return results


def average_score(restaurant: RestaurantRead) -> float | None:
    """Mean score of the restaurant's dishes, or None when it has none."""
    if not restaurant.dishes:
        return None
    return sum(dish.score for dish in restaurant.dishes) / len(restaurant.dishes)


def sort_restaurants(restaurants: Sequence[RestaurantRead], order: str) -> list[RestaurantRead]:
    """Apply a saved sort preference: ``name``, ``date`` (newest first) or ``rating`` (best first)."""
    if order == "name":
        return sorted(restaurants, key=lambda restaurant: restaurant.name)
    if order == "date":
        return sorted(restaurants, key=lambda restaurant: restaurant.registration_date, reverse=True)
    if order == "rating":
        rated = [restaurant for restaurant in restaurants if restaurant.dishes]
        unrated = [restaurant for restaurant in restaurants if not restaurant.dishes]
        rated.sort(key=lambda restaurant: average_score(restaurant) or 0.0, reverse=True)
        return rated + unrated
    raise ValidationError(f"Unknown sort order: {order!r}")
