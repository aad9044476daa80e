"""
Configuration management for the JurisBinder gate.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = Field(default="JurisBinder Gate")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=3000)

    # Storage
    store_backend: Literal["memory", "sql"] = Field(
        default="memory",
        description="Record store backend: 'memory' (process lifetime) or 'sql' (SQLAlchemy).",
    )
    database_url: str = Field(default="sqlite:///:memory:")
    seed_demo_case: bool = Field(
        default=True,
        description="Provision the demonstration case at startup when it is absent.",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")

    # Gate policy
    min_justification_length: int = Field(
        default=10,
        ge=1,
        description="Minimum number of characters of a link justification.",
    )
    gate_actor: str = Field(
        default="AUTHORITATIVE_GATE",
        description="Actor tag recorded on every trace event written by the gate.",
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
