"""Category payloads and snapshots."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

CategoryType = Literal["restaurant", "dish"]


class CategoryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(min_length=1, max_length=64)
    type: CategoryType


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    type: CategoryType
