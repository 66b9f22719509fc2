# config.py
"""Configuration settings for the Biglio writing assistant.
Uses Pydantic BaseSettings for automatic environment variable loading.
"""

from __future__ import annotations

import structlog
from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

logger = structlog.get_logger()

CONTEXT_MODES = ("chapter", "book", "full")


class BiglioSettings(BaseSettings):
    """Full configuration for the Biglio assistant."""

    # API and Model Configuration
    ANTHROPIC_API_BASE: str = "https://api.anthropic.com"
    ANTHROPIC_VERSION: str = "2023-06-01"
    BOOK_ANTHROPIC_API: str = ""

    CHAT_MODEL: str = "claude-3-5-sonnet-20241022"
    OUTLINE_MODEL: str | None = None
    SUMMARY_MODEL: str | None = None

    # Temperature Settings
    TEMPERATURE_CHAT: float = 0.7
    TEMPERATURE_OUTLINE: float = 0.8
    TEMPERATURE_SUMMARY: float = 0.3

    # Max output tokens per task
    MAX_TOKENS_CHAT: int = 4000
    MAX_TOKENS_OUTLINE: int = 4000
    MAX_TOKENS_SUMMARY: int = 1000

    # LLM Call Settings
    LLM_RETRY_ATTEMPTS: int = 3
    LLM_RETRY_DELAY_SECONDS: float = 3.0
    HTTPX_TIMEOUT: float = 120.0
    MAX_CONCURRENT_LLM_CALLS: int = 4

    # Context budgeting
    APPROX_TOKEN_LIMIT: int = 12000
    CHARS_PER_TOKEN: int = 4
    CHAPTER_CONTENT_PREVIEW_CHARS: int = 500
    OPTIMIZED_CONTENT_PREVIEW_WORDS: int = 150
    PROMPT_CONTENT_PREVIEW_CHARS: int = 200
    DEFAULT_CONTEXT_MODE: str = "chapter"

    # Outline and summary generation
    DEFAULT_OUTLINE_CHAPTER_COUNT: int = 10
    MIN_SUMMARY_CONTENT_CHARS: int = 100

    # Logging
    LOG_LEVEL_STR: str = Field("INFO", alias="BIGLIO_LOG_LEVEL")
    LOG_FORMAT: str = (
        "%(asctime)s - %(levelname)s - [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
    )
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    LOG_FILE: str | None = "biglio_assistant.log"
    BASE_OUTPUT_DIR: str = "assistant_output"
    ENABLE_RICH_LOGGING: bool = True

    @field_validator("DEFAULT_CONTEXT_MODE")
    @classmethod
    def check_context_mode(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in CONTEXT_MODES:
            raise ValueError(
                f"DEFAULT_CONTEXT_MODE must be one of {', '.join(CONTEXT_MODES)}"
            )
        return normalized

    @model_validator(mode="after")
    def set_dynamic_model_defaults(self) -> BiglioSettings:
        if self.OUTLINE_MODEL is None:
            self.OUTLINE_MODEL = self.CHAT_MODEL
        if self.SUMMARY_MODEL is None:
            self.SUMMARY_MODEL = self.CHAT_MODEL
        if not self.BOOK_ANTHROPIC_API:
            logger.warning(
                "BOOK_ANTHROPIC_API is not set; AI requests will be skipped."
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", extra="ignore", populate_by_name=True
    )


settings = BiglioSettings()
