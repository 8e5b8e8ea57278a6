"""
Backend Configuration

SSOT (Single Source of Truth) for backend configuration.
Values come from environment variables (optionally a .env file) and are
validated by Pydantic on load. Nothing here is read at import time; call
get_settings() and pass the values you need into constructors explicitly.
"""

import logging
import os
from functools import lru_cache
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from src.exceptions import ConfigurationError
from src.utils.logger import setup_logger

# Environment variable -> Settings field
ENV_VARS = {
    "DATABASE_URL": "database_url",
    "PASSWORD_WORK_FACTOR": "password_work_factor",
    "PASSWORD_MEMORY_COST": "password_memory_cost",
    "PASSWORD_PARALLELISM": "password_parallelism",
    "DB_POOL_MIN_SIZE": "db_pool_min_size",
    "DB_POOL_MAX_SIZE": "db_pool_max_size",
    "DB_COMMAND_TIMEOUT": "command_timeout",
    "LOG_LEVEL": "log_level",
    "APP_ENV": "app_env",
}


class Settings(BaseModel):
    """Runtime settings for the user data-access layer."""

    database_url: str = Field(..., min_length=1, description="PostgreSQL connection string")
    app_env: Literal["development", "test", "production"] = Field(
        "development",
        description="Deployment environment"
    )

    # Argon2 parameters. The work factor is Argon2's time cost (iterations).
    password_work_factor: Optional[int] = Field(
        None,
        ge=1,
        description="Password hashing work factor (default: 3, or 1 when app_env is 'test')"
    )
    password_memory_cost: int = Field(65536, ge=8, description="Argon2 memory cost in KiB")
    password_parallelism: int = Field(4, ge=1, description="Argon2 parallelism")

    db_pool_min_size: int = Field(2, ge=0, description="Minimum pooled connections")
    db_pool_max_size: int = Field(10, ge=1, description="Maximum pooled connections")
    command_timeout: float = Field(60, gt=0, description="Statement timeout in seconds")

    log_level: str = Field("INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @model_validator(mode="after")
    def apply_environment_defaults(self):
        if self.password_work_factor is None:
            self.password_work_factor = 1 if self.app_env == "test" else 3
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) exceeds "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ after load_dotenv())

        Returns:
            Validated Settings instance

        Raises:
            ConfigurationError: If a variable is missing or invalid
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {
            field: environ[var]
            for var, field in ENV_VARS.items()
            if environ.get(var) not in (None, "")
        }

        try:
            return cls(**values)
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) or "settings" for err in e.errors()})
            raise ConfigurationError(
                message=f"Invalid configuration: {', '.join(fields)}",
                details={"errors": e.errors(include_url=False)},
                cause=e,
            ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once from the environment."""
    return Settings.from_env()


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Configure the root logger from settings.

    Call once at application startup; module loggers created with
    logging.getLogger(__name__) propagate to it.
    """
    return setup_logger("", log_level=settings.log_level)
