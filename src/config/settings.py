from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized configuration loaded from environment variables or .env."""

    openrouter_api_key: str = Field(..., alias="OPENROUTER_API_KEY")
    openrouter_model: str = Field("openai/gpt-4o-mini", alias="OPENROUTER_MODEL")
    openrouter_api_url: str = Field(
        "https://openrouter.ai/api/v1/chat/completions", alias="OPENROUTER_API_URL"
    )
    openrouter_referer: str = Field("http://localhost:3000", alias="OPENROUTER_REFERER")
    openrouter_title: str = Field("AI Multi-Question App", alias="OPENROUTER_TITLE")
    request_timeout: float = Field(60.0, alias="OPENROUTER_TIMEOUT")

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(5000, alias="PORT")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("openrouter_api_key")
    @classmethod
    def reject_blank_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("OPENROUTER_API_KEY must not be empty")
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()  # type: ignore[arg-type]
