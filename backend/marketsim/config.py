"""Configuration settings for the application."""
import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent
ROOT_DIR = BASE_DIR.parent.parent

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=str((ROOT_DIR / ".env").resolve()),
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI configuration; requests may also carry their own key
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_request_timeout: int = Field(
        default=120,
        ge=10,
        le=600,
        description="Seconds allowed for a single generation call"
    )

    # Retry configuration
    llm_max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum attempts for rate-limited or failing generation requests"
    )
    llm_initial_wait: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Initial wait time in seconds before first retry"
    )
    llm_max_wait: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Maximum wait time in seconds between retries"
    )

    # Report shaping
    max_solutions: int = Field(default=3, ge=1, le=10)

    # CORS configuration
    cors_origins: List[str] = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())
    cors_allow_all: bool = Field(default=False)

    # API configuration
    api_version: str = "v1"
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Local server (BACKEND_HOST / BACKEND_PORT / BACKEND_RELOAD)
    backend_host: str = "0.0.0.0"
    backend_port: int = Field(default=8000, ge=1, le=65535)
    backend_reload: bool = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
