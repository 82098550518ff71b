"""Application settings and configuration.

This module defines all configuration options for the exposure store.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Exposure Store", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Database configuration
    database_url: str = Field(default="sqlite:///./exposure.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Width of a key bucket; 24 hours in the reference deployment.
    interval_length_hours: int = Field(default=24, ge=1, alias="INTERVAL_LENGTH_HOURS")

    # Retention windows for the two independent cleanup sweeps
    key_retention_intervals: int = Field(default=14, ge=0, alias="KEY_RETENTION_INTERVALS")
    verification_retention_hours: int = Field(
        default=24 * 14,
        ge=0,
        alias="VERIFICATION_RETENTION_HOURS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts async driver URLs to psycopg for synchronous operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        for async_scheme in ("postgresql+asyncpg", "postgresql+psycopg_async"):
            if url.startswith(async_scheme):
                return url.replace(async_scheme, "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
