"""
Shared configuration management for the casbin ArangoDB adapter.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CASBIN_ARANGO_",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="info", description="Log level for adapter loggers")
