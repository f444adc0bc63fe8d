"""
NutriPlanner - Configuration and settings.

Settings are read from the environment (and .env) by pydantic-settings.
Nothing here touches the environment at import time; use get_settings()
or the lazy `settings` proxy.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Only the LLM client needs `openai_api_key`; the flow orchestrator
    itself runs without any configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = ""

    # Application
    nutriplanner_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    default_locale: str = "en"

    # Generation layer owns timeouts; the orchestrator never imposes one
    generation_timeout_seconds: float = 60.0

    # Prompt logging
    # NUTRIPLANNER_LOG_PROMPTS=1 - log to local files (dev only)
    nutriplanner_log_prompts: bool = False

    @property
    def is_development(self) -> bool:
        return self.nutriplanner_env == "development"

    @property
    def is_production(self) -> bool:
        return self.nutriplanner_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
