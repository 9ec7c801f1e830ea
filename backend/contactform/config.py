"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Settings are read once at startup and never mutated afterwards
    - get_settings() is cached (lru_cache) - single instance per process
    - CLI flags (see __main__.py) override env values by building a copy

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box on localhost
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True, extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    allowed_domain: str = "localhost"

    # Database
    database_url: str = "sqlite+aiosqlite:///contacts.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_sqlite_url(cls, v: str) -> str:
        """Plain sqlite:// URLs need the aiosqlite driver for the async engine."""
        if isinstance(v, str) and v.startswith("sqlite:///"):
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return v

    # Origin guard - strict mode also demands a matching Origin header
    require_origin_header: bool = False

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 1
    rate_limit_burst: int = 2

    # CORS
    cors_max_age: int = 3600

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cors_origins(self) -> list[str]:
        return [
            f"http://{self.allowed_domain}",
            f"https://{self.allowed_domain}",
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
