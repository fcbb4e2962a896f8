"""
Configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Mapbox (geocoding + directions)
    mapbox_access_token: str = ""
    mapbox_base_url: str = "https://api.mapbox.com"
    mapbox_timeout_seconds: float = 10.0
    max_router_stops: int = Field(25, ge=2)  # Directions API limit, origin and destination included

    # LLM Configuration (OpenAI-compatible endpoint, e.g. Gemini's)
    llm_base_url: Optional[str] = None  # If None, uses OpenAI default
    llm_api_key: str = ""
    llm_chat_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 800

    # Segmentation settings
    default_segment_hours: float = 5.0

    # CORS
    cors_allow_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
