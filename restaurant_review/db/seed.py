"""Database seeding helpers."""

import logging

from sqlalchemy.orm import Session

from restaurant_review.models.category import Category
from restaurant_review.models.preferences import PREFERENCES_ROW_ID, UserPreferences
from restaurant_review.schemas.events import SeedReport
from restaurant_review.services.category_service import count_categories
from restaurant_review.services.preferences_service import get_preferences

logger = logging.getLogger(__name__)

DEFAULT_RESTAURANT_GENRES: tuple[str, ...] = (
    "和食",
    "洋食",
    "中華",
    "イタリアン",
    "フレンチ",
    "アジア料理",
    "カフェ",
    "ファストフード",
    "その他",
)
DEFAULT_DISH_CATEGORIES: tuple[str, ...] = ("前菜", "メイン", "サイド", "デザート", "ドリンク", "その他")
DEFAULT_SORT_ORDER: str = "name"
DEFAULT_THEME: str = "system"


def _seed_categories(session: Session, category_type: str, names: tuple[str, ...]) -> int:
    if count_categories(session, category_type) > 0:
        return 0
    for name in names:
        session.add(Category(name=name, type=category_type))
    logger.info("[SEED] Added %s default %s categories", len(names), category_type)
    return len(names)


def seed_defaults_if_empty(session: Session) -> SeedReport:
    """Insert default preferences and categories for any kind that has no rows yet."""
    preferences_created = False
    if get_preferences(session) is None:
        session.add(
            UserPreferences(
                id=PREFERENCES_ROW_ID,
                default_sort_order=DEFAULT_SORT_ORDER,
                theme=DEFAULT_THEME,
            )
        )
        preferences_created = True
        logger.info("[SEED] Created default user preferences")

    restaurant_count = _seed_categories(session, "restaurant", DEFAULT_RESTAURANT_GENRES)
    dish_count = _seed_categories(session, "dish", DEFAULT_DISH_CATEGORIES)

    report = SeedReport(
        preferences_created=preferences_created,
        restaurant_categories_created=restaurant_count,
        dish_categories_created=dish_count,
    )
    if report.changed:
        session.commit()
    return report
