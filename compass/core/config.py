"""
Application configuration module.

Loads settings from environment variables (or .env file) using pydantic-settings.
Database credentials and the identity-provider signing secret come from the
environment and are never hardcoded.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the Compass investor API.

    Environment variables are loaded automatically from .env if present.
    """

    PROJECT_NAME: str = "Compass Investor API"
    API_V1_STR: str = "/api/v1"

    # ── SQLite mode (no external DB required) ──
    USE_SQLITE: bool = False

    # ── PostgreSQL connection parameters ──
    # Empty defaults let USE_SQLITE=true run without dummy values; the
    # validator below enforces them whenever PostgreSQL is in use.
    POSTGRES_USER: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_SERVER: str = ""
    POSTGRES_DB: str = ""
    POSTGRES_PORT: int = 5432

    # ── Connection pool tuning ──
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a connection from the pool
    DB_POOL_RECYCLE: int = 1800  # seconds before a connection is recycled
    DB_CONNECT_RETRIES: int = 5  # startup attempts before degraded mode

    # ── Authentication (tokens are issued by the external identity provider) ──
    AUTH_JWT_SECRET: str = ""
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_AUDIENCE: str = "authenticated"

    # ── Listing / search ──
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    SEARCH_RESULT_LIMIT: int = 10

    # ── CORS ──
    # Comma-separated list of allowed origins.
    CORS_ORIGINS: str = "*"

    # ── Logging ──
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_FILE_BACKUP_COUNT: int = 5

    @model_validator(mode="after")
    def _require_production_settings(self) -> "Settings":
        """Fail fast when PostgreSQL mode is missing credentials or the JWT secret."""
        if self.USE_SQLITE:
            return self

        missing = [
            name
            for name in (
                "POSTGRES_USER",
                "POSTGRES_PASSWORD",
                "POSTGRES_SERVER",
                "POSTGRES_DB",
                "AUTH_JWT_SECRET",
            )
            if not getattr(self, name)
        ]
        if missing:
            vars_list = ", ".join(missing)
            raise ValueError(
                f"PostgreSQL mode requires these environment variables: "
                f"{vars_list}.\n\n"
                f"Set them in a .env file in the project root, export them "
                f"before starting the server, or run against in-memory SQLite:\n"
                f"       USE_SQLITE=true uvicorn compass.main:app"
            )
        return self

    @property
    def DATABASE_URL(self) -> str:
        """Construct the async database DSN.

        Returns an in-memory SQLite URL when ``USE_SQLITE`` is enabled,
        otherwise a PostgreSQL DSN for asyncpg.
        """
        if self.USE_SQLITE:
            return "sqlite+aiosqlite://"
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
