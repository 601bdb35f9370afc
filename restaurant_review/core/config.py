"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the restaurant catalogue."""

    app_name: str = "restaurant_review"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./restaurant_review.db")
    enforce_category_names: bool = getenv("ENFORCE_CATEGORY_NAMES", "1") == "1"


settings: Settings = Settings()
