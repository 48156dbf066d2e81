"""Shared FastAPI dependencies."""
from functools import lru_cache

from fastapi import Depends

from src.config.settings import Settings, get_settings
from src.llm.openrouter_client import OpenRouterClient


@lru_cache()
def get_app_settings() -> Settings:
    """Return cached settings instance for FastAPI dependency injection."""
    return get_settings()


def get_llm_client(settings: Settings = Depends(get_app_settings)) -> OpenRouterClient:
    """Upstream client built from settings; overridden in tests."""
    return OpenRouterClient.from_settings(settings)
