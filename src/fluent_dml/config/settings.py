"""
Configuration management for fluent_dml.

This module provides environment-based configuration using Pydantic BaseSettings,
so dialect selection, statement limits and logging can be tuned per deployment
without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fluent_dml.sql.dialects import resolve_dialect_name

logger = structlog.get_logger(__name__)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("FDML_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the FDML_ prefix, for example
    FDML_DIALECT overrides ``dialect``. Logging fields use bare upper-case
    names (LOG_LEVEL, LOG_TO_FILE, LOG_FILE_DIR).
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        validation_alias="LOG_TO_FILE",
        description="Also write logs to a daily rotating file",
    )
    LOG_FILE_DIR: str = Field(
        default="logs",
        validation_alias="LOG_FILE_DIR",
        description="Directory for log files",
    )

    database_url: Optional[str] = Field(
        default=None, description="SQLAlchemy database URL used by create_database()"
    )
    dialect: Optional[str] = Field(
        default=None,
        description="SQL dialect name; inferred from the engine when unset",
    )
    max_parameters_per_query: Optional[int] = Field(
        default=None, description="Override of the dialect's parameter limit"
    )
    max_rows_per_query: Optional[int] = Field(
        default=None, description="Override of the dialect's rows-per-statement limit"
    )
    log_sql_parameters: bool = Field(
        default=False, description="Include bound parameter values in SQL debug logs"
    )

    @field_validator("dialect")
    @classmethod
    def _normalise_dialect(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return resolve_dialect_name(value)

    @field_validator("max_parameters_per_query", "max_rows_per_query")
    @classmethod
    def _positive_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("Statement limits must be positive")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _fix_postgres_scheme(self) -> "Settings":
        """Rewrite the deprecated ``postgres://`` scheme for SQLAlchemy."""
        if self.database_url and self.database_url.startswith("postgres://"):
            self.database_url = self.database_url.replace(
                "postgres://", "postgresql://", 1
            )
            logger.info("configuration.database_url_scheme_corrected")
        return self

    model_config = SettingsConfigDict(
        env_prefix="FDML_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
