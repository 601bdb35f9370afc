"""User preference payloads and snapshots."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SortOrder = Literal["name", "date", "rating"]
Theme = Literal["system", "light", "dark"]


class PreferencesUpdate(BaseModel):
    """Settings screen payload."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    theme: Theme = "system"
    default_sort_order: SortOrder = "name"
    default_filter_genre: str | None = Field(default=None, max_length=64)


class PreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    default_sort_order: SortOrder
    default_filter_genre: str | None
    theme: Theme
