"""Centralized configuration management using Pydantic Settings.

This module provides a single source of truth for all configuration values.
All settings can be overridden via environment variables.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables.
    For example, RATES_TABLE=freight_rates_staging will override the default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ========== Backend Configuration ==========
    supabase_url: str = Field(
        default="",
        description="Supabase project URL"
    )
    supabase_anon_key: str = Field(
        default="",
        description="Supabase anonymous (public) API key"
    )
    supabase_email: Optional[str] = Field(
        default=None,
        description="Optional email used to sign in on startup"
    )
    supabase_password: Optional[str] = Field(
        default=None,
        description="Optional password used to sign in on startup"
    )
    rates_table: str = Field(
        default="freight_rates",
        description="Backend table holding freight rates"
    )

    # ========== Rate Defaults ==========
    default_currency: str = Field(
        default="USD",
        description="Default currency code for new rates"
    )
    default_validity_days: int = Field(
        default=30,
        description="Days from today used to prefill the 'valid until' fields"
    )

    # ========== Server Configuration ==========
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address"
    )
    server_port: int = Field(
        default=7860,
        description="Server port number"
    )

    def has_backend_credentials(self) -> bool:
        """Check whether the backend URL and key are both configured.

        Returns:
            True if both supabase_url and supabase_anon_key are set
        """
        return bool(self.supabase_url and self.supabase_anon_key)


# Global settings instance
# This will be initialized when the module is imported
# Environment variables will be loaded automatically
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates and caches a Settings instance on first call.
    Subsequent calls return the cached instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
