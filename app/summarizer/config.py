"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import StartupError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI (required at startup, see require_credentials)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_base_url: str | None = None

    # Server binding
    host: str = "0.0.0.0"
    port: int = 3001

    # Limits
    max_request_bytes: int = 10 * 1024 * 1024
    max_document_bytes: int = 25 * 1024 * 1024
    max_document_chars: int = 15_000

    # Outbound timeouts (seconds)
    fetch_timeout_seconds: float = 30.0
    generation_timeout_seconds: float = 60.0

    # Logging / debug flags
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the package directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
        frozen=True,
    )

    def require_credentials(self) -> None:
        """
        Refuse to operate without an OpenAI API key.

        Raises:
            StartupError: If OPENAI_API_KEY is missing or blank.
        """
        if not self.openai_api_key or not self.openai_api_key.strip():
            raise StartupError(
                "OPENAI_API_KEY is missing. Set it in the environment or .env file."
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
