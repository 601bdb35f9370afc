"""Change notifications and seeding results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

EntityName = Literal["restaurant", "dish", "category", "preferences"]
ChangeAction = Literal["created", "updated", "deleted"]


class ChangeEvent(BaseModel):
    """Published after a repository write commits."""

    model_config = ConfigDict(frozen=True)

    entity: EntityName
    action: ChangeAction
    record_id: str | None = None
    parent_id: str | None = None


class SeedReport(BaseModel):
    """What seed_defaults_if_empty inserted on this call."""

    model_config = ConfigDict(frozen=True)

    preferences_created: bool = False
    restaurant_categories_created: int = 0
    dish_categories_created: int = 0

    @property
    def changed(self) -> bool:
        return (
            self.preferences_created
            or self.restaurant_categories_created > 0
            or self.dish_categories_created > 0
        )
