"""Application settings loaded from the environment."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    workout_size is the number of exercises in a generated draft.
    swap_count is how many extra exercises are drawn on top of it so the
    user has alternatives to swap in.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    workout_size: int = Field(default=5, gt=0)
    swap_count: int = Field(default=3, ge=0)
    log_level: str = "INFO"

    @property
    def requested_size(self) -> int:
        return self.workout_size + self.swap_count


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables and .env (cached, only runs once).

    Raises:
        pydantic.ValidationError: If a value is out of range
    """
    return Settings()
