"""Configuration loading for the SimpleShop demo.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Key-value store configuration
    store_backend: Literal["sqlite", "json_file"] = Field(
        default="sqlite",
        description="Key-value store backend type",
    )
    store_sqlite_path: str = Field(
        default="./data/simpleshop.db",
        description="SQLite database file path",
    )
    store_json_path: str = Field(
        default="./data/storage.json",
        description="JSON store file path",
    )

    # Storage keys
    cart_key: str = Field(
        default="shop_cart",
        description="Storage key holding the cart",
    )
    session_key: str = Field(
        default="shop_user",
        description="Storage key holding the login session",
    )

    # Export configuration
    export_dir: str = Field(
        default="./exports",
        description="Directory receiving the cart.json download",
    )
    clipboard_command: str = Field(
        default="",
        description="Clipboard command line; empty to auto-detect",
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        description="Symbol shown in front of prices",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("cart_key", "session_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Ensure storage keys are non-empty."""
        if not v.strip():
            raise ValueError("storage keys must be non-empty")
        return v

    @field_validator("session_key")
    @classmethod
    def validate_distinct_keys(cls, v: str, info: ValidationInfo) -> str:
        """Ensure cart and session never share a key."""
        if v == info.data.get("cart_key"):
            raise ValueError("session_key must differ from cart_key")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
