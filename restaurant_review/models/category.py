"""Category ORM model used for genre and dish-category pickers."""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_review.db.base import Base

CATEGORY_TYPES: tuple[str, ...] = ("restaurant", "dish")


class Category(Base):
    """Flat tag; type is either ``restaurant`` or ``dish``."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
