"""Configuration management for slicebox."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SLICEBOX_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["default", "console"] = Field(default="default", description="Log profile")
    log_actions: bool = Field(default=False, description="Log every dispatched action at DEBUG")

    # Demo Configuration
    fetch_delay_seconds: float = Field(default=3.0, ge=0, description="Simulated user fetch latency")
    demo_user_id: int = Field(default=101, description="User id fetched by the demo")


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Explicit values that win over environment and .env

    Returns:
        Settings instance
    """
    return Settings(**{key: value for key, value in overrides.items() if value is not None})
