"""
Application Settings
===================

Process-wide settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


def default_generation_options() -> Dict[str, Any]:
    """Options applied to every generator built without explicit options."""
    return {
        "disable-gpu": True,
        "incognito": True,
        "enable-viewport": True,
        "window-size": [1280, 1696],
    }


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="Snappy Chrome", description="Application name")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_path: Optional[Path] = Field(
        default=None, description="Directory for rotating log files, disabled when unset"
    )

    # Backend Configuration
    backend: str = Field(default="chrome", description="Backend: chrome, playwright")
    chrome_binary: Optional[str] = Field(
        default=None, description="Chrome/Chromium executable, looked up on PATH when unset"
    )
    headless_mode: Optional[str] = Field(
        default="new", description="Value of the --headless switch, bare switch when empty"
    )
    generation_timeout: int = Field(default=60, gt=0, description="Generation timeout in seconds")

    # Temporary Files Configuration
    temp_path: Optional[Path] = Field(
        default=None, description="Temporary files directory, system default when unset"
    )
    temp_prefix: str = Field(default="snappy_chrome", description="Temporary file name prefix")
    remove_temporary_files: bool = Field(
        default=True, description="Remove temporary files at interpreter exit"
    )

    # Generation Configuration
    default_options: Dict[str, Any] = Field(
        default_factory=default_generation_options,
        description="Default options for generators built without explicit options",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate backend name."""
        allowed = {"chrome", "playwright"}
        if v.lower() not in allowed:
            raise ValueError(f"Backend must be one of: {allowed}")
        return v.lower()

    @field_validator("default_options")
    @classmethod
    def validate_default_options(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Option names must be non-empty strings."""
        for name in v:
            if not isinstance(name, str) or not name:
                raise ValueError(f"Invalid option name: {name!r}")
        return v

    @field_validator("log_path", "temp_path")
    @classmethod
    def create_directories(cls, v: Optional[Path]) -> Optional[Path]:
        """Ensure directories exist."""
        if v is not None:
            v.mkdir(parents=True, exist_ok=True)
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="SNAPPY_CHROME_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
