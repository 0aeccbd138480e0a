# blogclient/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized client settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)

    Optional:
      - DATABASE_URL (Supabase Postgres connection string, only used by
        `blogclient init-db` to provision the tables)
      - SESSION_TTL_HOURS, SESSION_CACHE_PATH, DEVICE_PLATFORM
      - SUMMARIZER_BASE_URL, SUMMARIZER_TIMEOUT
      - LOG_LEVEL
    """

    PROJECT_NAME: str = "Blog Client"

    # Supabase / DB config
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str | None = None

    # Sessions
    SESSION_TTL_HOURS: int = 24
    SESSION_CACHE_PATH: Path = Path.home() / ".blogclient" / "session.json"
    DEVICE_PLATFORM: str = "mobile"

    # Text summarization backend
    SUMMARIZER_BASE_URL: str = "https://super30-backendnew.onrender.com"
    SUMMARIZER_TIMEOUT: float = 10.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import.
    """
    return Settings()
