"""Application models package."""

from restaurant_review.models.category import Category
from restaurant_review.models.preferences import UserPreferences
from restaurant_review.models.restaurant import Dish, Restaurant

__all__ = ["Restaurant", "Dish", "Category", "UserPreferences"]
