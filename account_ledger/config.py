"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .currency import CURRENCY_CODE


class LedgerConfig(BaseSettings):
    """Account ledger configuration"""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8090

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    # Display configuration
    currency_code: str = CURRENCY_CODE  # single display currency
    timestamp_format: str = "%d %b %Y, %I:%M %p"
    display_timezone: Optional[str] = None  # IANA name; None = server local time

    @field_validator("currency_code")
    @classmethod
    def check_currency_code(cls, value: str) -> str:
        code = value.strip().upper()
        if code != CURRENCY_CODE:
            raise ValueError(f"Only {CURRENCY_CODE} is supported, got {value!r}")
        return code

    def display_tz(self) -> Optional[tzinfo]:
        """Timezone used when formatting timestamps for display"""
        if self.display_timezone:
            return ZoneInfo(self.display_timezone)
        return None


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
