"""Schema exports."""

from restaurant_review.schemas.category import CategoryCreate, CategoryRead, CategoryType
from restaurant_review.schemas.events import ChangeEvent, SeedReport
from restaurant_review.schemas.preferences import PreferencesRead, PreferencesUpdate, SortOrder, Theme
from restaurant_review.schemas.restaurant import (
    DishCreate,
    DishRead,
    DishUpdate,
    RestaurantCreate,
    RestaurantRead,
    RestaurantUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CategoryType",
    "ChangeEvent",
    "SeedReport",
    "PreferencesRead",
    "PreferencesUpdate",
    "SortOrder",
    "Theme",
    "DishCreate",
    "DishRead",
    "DishUpdate",
    "RestaurantCreate",
    "RestaurantRead",
    "RestaurantUpdate",
]
