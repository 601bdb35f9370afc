"""Category lookups used by pickers, filter chips and write-time validation."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_review.core.errors import ValidationError
from restaurant_review.models.category import CATEGORY_TYPES, Category
from restaurant_review.schemas.category import CategoryCreate


def ensure_category_type(category_type: str) -> str:
    """Return category_type when it is a known kind, else raise ValidationError."""
    if category_type not in CATEGORY_TYPES:
        raise ValidationError(f"Unknown category type: {category_type!r}")
    return category_type


def list_categories(db: Session, category_type: str) -> list[Category]:
    """Return categories of one kind ordered by name."""
    ensure_category_type(category_type)
    return (
        db.query(Category)
        .filter(Category.type == category_type)
        .order_by(Category.name.asc(), Category.id.asc())
        .all()
    )


def count_categories(db: Session, category_type: str) -> int:
    return db.query(Category).filter(Category.type == category_type).count()


def category_names(db: Session, category_type: str) -> set[str]:
    return set(db.scalars(select(Category.name).where(Category.type == category_type)).all())


def ensure_known_category_name(db: Session, name: str, category_type: str) -> None:
    """Reject non-empty names that do not match a category of the given kind."""
    if not name:
        return
    if name not in category_names(db, category_type):
        raise ValidationError(f"{name!r} is not a known {category_type} category")


def create_category(db: Session, payload: CategoryCreate) -> Category:
    """Insert a category; duplicate names are allowed."""
    category = Category(name=payload.name, type=payload.type)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category
