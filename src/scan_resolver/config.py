"""Application configuration."""

import os
import re

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
DEFAULT_HISTORY_SLOT = "scan-resolver-history"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    off_base_url: str = "https://world.openfoodfacts.org/api/v0"
    off_user_agent: str = "scan-resolver/1.0 (product analysis)"
    catalog_timeout_seconds: float = 8.0
    inference_timeout_seconds: float = 30.0
    cache_max_entries: int = 500
    cache_ttl_seconds: float = 86400
    negative_cache_ttl_seconds: float | None = None
    ocr_confidence_threshold: float = 70.0
    history_backend: str = "file"
    history_path: str = "~/.scan_resolver/history.json"
    history_slot: str = DEFAULT_HISTORY_SLOT
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_slot_name(raw: str | None) -> str:
    """Normalize a persistence slot key, falling back to the default slot."""
    if raw is None:
        return DEFAULT_HISTORY_SLOT
    cleaned = re.sub(r"[^a-z0-9._-]+", "-", raw.strip().lower()).strip("-")
    return cleaned or DEFAULT_HISTORY_SLOT
