"""Application configuration via Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# Resolve .env from the project root regardless of CWD
_ENV_FILE = Path(__file__).resolve().parents[3] / ".env"


class Settings(BaseSettings):
    """Central configuration loaded from environment variables / .env file."""

    # AI providers
    openai_api_key: str = ""
    gemini_api_key: str = ""
    anthropic_api_key: str = ""

    openai_model: str = "gpt-4o"
    openai_fallback_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-2.5-flash"
    gemini_fallback_model: str = "gemini-2.0-flash"
    claude_model: str = "claude-sonnet-4-20250514"
    claude_fallback_model: str = "claude-3-5-haiku-latest"

    # 2 min hard limit per provider call
    ai_timeout_seconds: float = 120.0

    # External data
    census_api_key: str = ""
    census_timeout_seconds: float = 15.0

    # Progress sessions
    session_grace_seconds: float = 120.0
    session_max_age_seconds: float = 30 * 60
    session_sweep_interval_seconds: float = 30 * 60

    # CORS
    cors_origins: str = "http://localhost:3000"

    # General
    debug: bool = True

    model_config = {"env_file": str(_ENV_FILE), "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list.

        In debug mode, returns ["*"] to allow any origin.
        """
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
