"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Invalid numeric values fail at startup with a ValidationError

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - HTTP_PORT / HTTP_READ_TO keep their historical env names
    - Defaults provided for every setting: works out-of-the-box with a local SQLite file
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, populate_by_name=True,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./users.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # HTTP
    http_host: str = "0.0.0.0"
    http_port: int = Field(8080, gt=0, lt=65536)
    http_read_timeout_seconds: int = Field(10, alias="http_read_to", gt=0)

    # Upper bound for a single store call made on behalf of a request
    request_timeout_seconds: float = Field(10.0, gt=0)

    # Service info (GET /)
    service_name: str = "user-dal-example"
    service_version: str = "v0.1.0"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
