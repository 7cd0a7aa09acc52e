"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_dir: Path
    planner_store_path: Path = Path(".eatwise/planner.json")
    quiz_question_count: int = 10
    quiz_debug: bool = False
    top_overall_excluded: str | None = "vegetable,fruit"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_excluded_categories(raw: str | None) -> set[str]:
    """Parse a comma-separated list of food categories."""
    if raw is None:
        return set()
    return {chunk.strip() for chunk in raw.split(",") if chunk.strip()}
