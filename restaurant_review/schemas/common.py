"""Shared pydantic field types."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from restaurant_review.utils.time import ensure_utc

UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
