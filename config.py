"""
Configuration module for the Telegram alarm bot.
Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.exceptions import ConfigurationError

# Load .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    bot_token: str

    # Timers
    max_timer_seconds: Optional[int] = None  # Operator ceiling, off when unset
    timezone: Optional[str] = None  # Scheduler timezone, local when unset

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: Optional[str] = "alarm_bot.log"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "development"  # development, staging, production

    # Webhook Configuration
    bot_webhook_url: Optional[str] = (
        None  # Base URL for webhook mode (e.g., https://yourdomain.com)
    )
    webhook_path: str = "/webhook/telegram"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def webhook_url(self) -> Optional[str]:
        """Full webhook URL, or None in polling mode."""
        if not self.bot_webhook_url:
            return None
        return f"{self.bot_webhook_url.rstrip('/')}{self.webhook_path}"

    def validate_all_required(self) -> None:
        """
        Validate that all required settings are present.

        Raises:
            ConfigurationError: If required fields are missing or invalid
        """
        required_fields = ["bot_token"]

        missing = []
        for field in required_fields:
            value = getattr(self, field, None)

            if not value or not str(value).strip():
                missing.append(field)
                continue

            # Placeholder values copied from an example .env
            if str(value).lower().startswith("your_"):
                missing.append(field)

        if missing:
            raise ConfigurationError(
                f"Missing or invalid required configuration: "
                f"{', '.join(missing)}. "
                f"Please check your .env file and ensure all required "
                f"values are set."
            )

        if self.max_timer_seconds is not None and self.max_timer_seconds <= 0:
            raise ConfigurationError(
                f"max_timer_seconds must be positive, got {self.max_timer_seconds}"
            )


def load_settings() -> Settings:
    """
    Load and validate settings.

    Raises:
        ConfigurationError: If settings cannot be loaded or are invalid
    """
    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    settings.validate_all_required()
    return settings
