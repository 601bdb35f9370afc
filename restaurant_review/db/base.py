"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from restaurant_review.models import category as _category  # noqa: E402,F401
from restaurant_review.models import preferences as _preferences  # noqa: E402,F401
from restaurant_review.models import restaurant as _restaurant  # noqa: E402,F401
