from datetime import date

from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./runclub.db"
    # Where week files (strava/weekN.json) and goals.csv live
    data_dir: str = "data"
    # When set, sources are fetched over HTTP from this base instead of data_dir
    data_base_url: str | None = None
    source_timeout: float = 15.0

    # Week calendar: ordered week ids and the Monday week 1 starts on
    available_weeks: list[str] = [
        "week1", "week2", "week3", "week4", "week5", "week6", "week7",
    ]
    calendar_anchor: date = date(2026, 1, 5)
    goals_filename: str = "goals.csv"

    log_level: str = "INFO"

    # Allow empty env strings for optional fields
    @field_validator("data_base_url", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    class Config:
        env_file = ".env"


settings = Settings()
