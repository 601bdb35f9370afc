"""User preferences model for the single local user."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_review.db.base import Base

PREFERENCES_ROW_ID: int = 1


class UserPreferences(Base):
    """Singleton preferences row (id=1)."""

    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(primary_key=True, default=PREFERENCES_ROW_ID)
    default_sort_order: Mapped[str] = mapped_column(String(16), nullable=False, default="name")
    default_filter_genre: Mapped[str | None] = mapped_column(String(64), nullable=True)
    theme: Mapped[str] = mapped_column(String(16), nullable=False, default="system")
