"""Environment-driven settings for the techfest back end."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import make_url
from sqlalchemy.exc import ArgumentError

PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Runtime settings read from the process environment and ``PROJECT_ROOT/.env``.

    Environment variables take precedence over the .env file.
    """

    # -------------------------------------------------------------------------
    # RUNTIME
    # -------------------------------------------------------------------------
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------------------------------
    # POSTGRES
    # -------------------------------------------------------------------------
    # SQLAlchemy-style URL, e.g. postgresql://user:pw@host:5432/techfest
    DATABASE_URL: str = Field(..., min_length=1)
    DB_POOL_MIN: int = Field(default=1, ge=1)
    DB_POOL_MAX: int = Field(default=10, ge=1)

    # -------------------------------------------------------------------------
    # EVENT IMPORT SOURCES
    # -------------------------------------------------------------------------
    EVENT_IMPORT_CSV_PATH: Path = Path("data/event_submissions.csv")
    EVENT_IMPORT_XLSX_PATH: Path = Path("data/event_submissions.xlsx")

    # -------------------------------------------------------------------------
    # REGISTRATION CONTROL
    # -------------------------------------------------------------------------
    # Seeded into the settings store on startup when no schedule exists yet
    REGISTRATION_AUTO_DISABLE_AT: datetime | None = None
    AUTO_DISABLE_CHECK_INTERVAL_SECONDS: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def check_database_url(cls, v: str) -> str:
        try:
            url = make_url(v)
        except ArgumentError as e:
            raise ValueError(f"DATABASE_URL is not a valid database URL: {e}") from e
        if not url.drivername.startswith("postgresql"):
            raise ValueError(f"DATABASE_URL must point at PostgreSQL, got '{url.drivername}'")
        return v

    def get_psycopg2_params(self) -> dict:
        """
        Translate DATABASE_URL into keyword arguments for ``psycopg2.connect``.

        Query-string options such as ``sslmode`` are passed through; parts
        missing from the URL are left out so libpq defaults apply.
        """
        url = make_url(self.DATABASE_URL)
        params = {
            "host": url.host,
            "port": url.port,
            "dbname": url.database,
            "user": url.username,
            "password": url.password,
            **{key: value for key, value in url.query.items() if isinstance(value, str)},
        }
        return {key: value for key, value in params.items() if value is not None}


@lru_cache
def get_settings() -> Settings:
    """Settings singleton, built on first use."""
    return Settings()
