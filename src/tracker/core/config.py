from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Async drivers the engine can run on
SUPPORTED_DATABASE_SCHEMES = ("sqlite+aiosqlite", "postgresql+asyncpg")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Project Tracker"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    log_level: str | None = None  # overrides the debug-derived level
    enable_openapi: bool = True

    # Database
    database_url: str  # e.g. sqlite+aiosqlite:///./projects.db
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False
    database_create_tables: bool = False  # create_all at startup instead of migrations
    database_run_migrations: bool = False  # alembic upgrade head at startup
    seed_demo_data: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Board client
    notification_ttl_seconds: float = 5.0

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        scheme = v.split("://", 1)[0]
        if scheme not in SUPPORTED_DATABASE_SCHEMES:
            raise ValueError(
                f"DATABASE_URL must use an async driver: {', '.join(SUPPORTED_DATABASE_SCHEMES)}"
            )
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        # Credentials are allowed, so browsers refuse a wildcard origin anyway
        if "*" in v:
            raise ValueError("CORS_ORIGINS cannot contain the wildcard '*'; list origins explicitly")
        return v

    @field_validator("notification_ttl_seconds")
    @classmethod
    def validate_notification_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("NOTIFICATION_TTL_SECONDS must be positive")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
