"""Restaurant and dish payloads and snapshots."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from restaurant_review.schemas.common import UtcDatetime


def _reject_explicit_none(value: Any) -> Any:
    if value is None:
        raise ValueError("field cannot be cleared")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DishCreate(BaseModel):
    """Payload for adding a dish to a restaurant."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    category: str = Field(default="", max_length=64)
    score: int = Field(default=50, ge=0, le=100)
    memo: str | None = None
    price: int = Field(default=0, ge=0)
    is_favorite: bool = False
    order_count: int = Field(default=1, ge=1)
    image_path: str | None = None

    @field_validator("memo", "image_path", mode="before")
    @classmethod
    def clear_blank_text(cls, value: Any) -> Any:
        return _blank_to_none(value)


class DishUpdate(BaseModel):
    """Partial dish edit; only fields that were passed are applied."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=64)
    score: int | None = Field(default=None, ge=0, le=100)
    memo: str | None = None
    price: int | None = Field(default=None, ge=0)
    is_favorite: bool | None = None
    order_count: int | None = Field(default=None, ge=1)
    image_path: str | None = None

    @field_validator("memo", "image_path", mode="before")
    @classmethod
    def clear_blank_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("name", "category", "score", "price", "is_favorite", "order_count", mode="before")
    @classmethod
    def reject_cleared_required_fields(cls, value: Any) -> Any:
        return _reject_explicit_none(value)


class DishRead(BaseModel):
    """Immutable dish snapshot handed to the presentation layer."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    restaurant_id: UUID
    name: str
    category: str
    score: int
    memo: str | None
    price: int
    is_favorite: bool
    registration_date: UtcDatetime
    last_update_date: UtcDatetime
    order_count: int
    image_path: str | None


class RestaurantCreate(BaseModel):
    """Payload for registering a restaurant."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    genre: str = Field(default="", max_length=64)
    address: str = Field(default="", max_length=255)
    url: str | None = None
    image_path: str | None = None
    is_favorite: bool = False
    memo: str | None = None
    visit_count: int = Field(default=0, ge=0)
    business_hours: str | None = None

    @field_validator("url", "image_path", "memo", "business_hours", mode="before")
    @classmethod
    def clear_blank_text(cls, value: Any) -> Any:
        return _blank_to_none(value)


class RestaurantUpdate(BaseModel):
    """Partial restaurant edit; only fields that were passed are applied."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    genre: str | None = Field(default=None, max_length=64)
    address: str | None = Field(default=None, max_length=255)
    url: str | None = None
    image_path: str | None = None
    is_favorite: bool | None = None
    memo: str | None = None
    visit_count: int | None = Field(default=None, ge=0)
    business_hours: str | None = None

    @field_validator("url", "image_path", "memo", "business_hours", mode="before")
    @classmethod
    def clear_blank_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("name", "genre", "address", "is_favorite", "visit_count", mode="before")
    @classmethod
    def reject_cleared_required_fields(cls, value: Any) -> Any:
        return _reject_explicit_none(value)


class RestaurantRead(BaseModel):
    """Immutable restaurant snapshot including its dishes in list order."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    genre: str
    address: str
    url: str | None
    image_path: str | None
    registration_date: UtcDatetime
    last_update_date: UtcDatetime
    is_favorite: bool
    memo: str | None
    visit_count: int
    business_hours: str | None
    dishes: tuple[DishRead, ...] = ()
