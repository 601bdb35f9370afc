"""Singleton user preferences helpers."""

from sqlalchemy.orm import Session

from restaurant_review.models.preferences import PREFERENCES_ROW_ID, UserPreferences
from restaurant_review.schemas.preferences import PreferencesUpdate


def get_preferences(db: Session) -> UserPreferences | None:
    """Return the preferences row, if it exists."""
    return db.query(UserPreferences).order_by(UserPreferences.id.asc()).first()


def save_preferences(db: Session, payload: PreferencesUpdate) -> UserPreferences:
    """Create the preferences row on first save, update it afterwards."""
    preferences: UserPreferences | None = get_preferences(db)
    if preferences is None:
        preferences = UserPreferences(id=PREFERENCES_ROW_ID)
        db.add(preferences)

    preferences.theme = payload.theme
    preferences.default_sort_order = payload.default_sort_order
    preferences.default_filter_genre = payload.default_filter_genre

    db.commit()
    db.refresh(preferences)
    return preferences
