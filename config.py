"""
Centralized configuration for CRO Vision Analyzer
All environment variables and settings are defined here
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Provides centralized configuration with validation and defaults.
    """

    # ======================
    # Vision Provider Configuration
    # ======================
    VISION_PROVIDER: str = Field(
        default="openai",
        description="Hosted vision model provider (openai or anthropic)"
    )
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")
    OPENAI_VISION_MODEL: str = Field(
        default="gpt-5",
        description="OpenAI model used for above-the-fold analysis"
    )
    OPENAI_REASONING_EFFORT: str = Field(
        default="minimal",
        description="Reasoning effort passed to the Responses API"
    )
    OPENAI_TEXT_VERBOSITY: str = Field(
        default="low",
        description="Text verbosity passed to the Responses API"
    )
    ANTHROPIC_API_KEY: str = Field(default="", description="Anthropic API key")
    ANTHROPIC_VISION_MODEL: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model used when VISION_PROVIDER=anthropic"
    )
    VISION_MAX_OUTPUT_TOKENS: int = Field(
        default=1500,
        description="Output token cap per vision call (bounds worst-case cost)"
    )

    # ======================
    # Retry Configuration
    # ======================
    VISION_MAX_ATTEMPTS: int = Field(
        default=3,
        description="Total attempts per vision call when rate limited"
    )
    VISION_RETRY_BASE_DELAY: float = Field(
        default=1.0,
        description="Backoff base delay in seconds (doubles per attempt)"
    )

    # ======================
    # Pricing Configuration
    # ======================
    VISION_INPUT_PRICE_PER_1K: float = Field(
        default=0.01,
        description="Estimated USD per 1K input tokens"
    )
    VISION_OUTPUT_PRICE_PER_1K: float = Field(
        default=0.03,
        description="Estimated USD per 1K output tokens"
    )

    # ======================
    # HTTP Configuration
    # ======================
    VISION_REQUEST_TIMEOUT: float = Field(
        default=60.0,
        description="Wall-clock limit in seconds for one /vision request"
    )

    # ======================
    # Redis / Celery Configuration
    # ======================
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )
    CELERY_BROKER_URL: Optional[str] = Field(
        default=None,
        description="Celery broker URL (defaults to REDIS_URL if not set)"
    )
    CELERY_RESULT_BACKEND: str = Field(
        default="redis://localhost:6379/1",
        description="Celery result backend URL"
    )
    CELERY_RESULT_EXPIRES: int = Field(
        default=259200,  # 72 hours (3 days)
        description="Time in seconds before task results expire"
    )
    TASK_TIME_LIMIT: int = Field(
        default=180,
        description="Hard time limit for tasks in seconds"
    )
    TASK_SOFT_TIME_LIMIT: int = Field(
        default=150,
        description="Soft time limit for tasks in seconds"
    )
    WORKER_PREFETCH_MULTIPLIER: int = Field(
        default=1,
        description="Tasks to prefetch per worker"
    )
    WORKER_MAX_TASKS_PER_CHILD: int = Field(
        default=50,
        description="Max tasks before worker restart"
    )

    # ======================
    # Logging Configuration
    # ======================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    @property
    def celery_broker(self) -> str:
        """Get Celery broker URL, defaulting to REDIS_URL if not set"""
        return self.CELERY_BROKER_URL or self.REDIS_URL

    @property
    def provider_api_key(self) -> str:
        """API key for the configured vision provider"""
        if self.VISION_PROVIDER.lower().strip() == "anthropic":
            return self.ANTHROPIC_API_KEY
        return self.OPENAI_API_KEY

    @property
    def provider_api_key_name(self) -> str:
        if self.VISION_PROVIDER.lower().strip() == "anthropic":
            return "ANTHROPIC_API_KEY"
        return "OPENAI_API_KEY"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Allow extra env vars in .env file


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Call ``get_settings.cache_clear()`` after changing env vars."""
    return Settings()
