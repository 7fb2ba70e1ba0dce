"""Configuration management for sani."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sani.render.styles import parse_style


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Output
    color: Literal["auto", "always", "never"] = Field(
        default="auto",
        alias="SANI_COLOR",
    )
    preserve_wrapping: bool = Field(
        default=False,
        alias="SANI_PRESERVE_WRAPPING",
    )

    # Terminal attributes per construct, e.g. "dim+strikethrough"
    emphasis_style: str = Field(default="italic", alias="SANI_EMPHASIS_STYLE")
    strong_style: str = Field(default="bold", alias="SANI_STRONG_STYLE")
    strikethrough_style: str = Field(
        default="strikethrough",
        alias="SANI_STRIKETHROUGH_STYLE",
    )

    log_level: str = Field(default="WARNING", alias="SANI_LOG_LEVEL")

    @field_validator("emphasis_style", "strong_style", "strikethrough_style")
    @classmethod
    def _check_style(cls, value: str) -> str:
        parse_style(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the global settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
