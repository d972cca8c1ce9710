"""Tests for container wiring."""

import asyncio

import pytest

from scan_resolver.adapters.file_history_repository import FileHistoryRepository
from scan_resolver.config import Settings
from scan_resolver.containers import build_container
from scan_resolver.services.text_extraction import UnavailableTextExtractor


def test_build_container_creates_services(settings: Settings, tmp_path) -> None:
    settings.history_path = str(tmp_path / "history.json")
    settings.catalog_timeout_seconds = 3.5
    container = build_container(settings)

    assert container.resolution_service.catalog is container.catalog_service
    assert container.catalog_service.timeout_seconds == 3.5
    assert container.catalog_service.cache is container.product_cache
    assert isinstance(container.preference_store.repository, FileHistoryRepository)
    asyncio.run(container.close_resources())


def test_build_container_without_openai_key(tmp_path) -> None:
    settings = Settings(openai_api_key=None, history_path=str(tmp_path / "h.json"))
    container = build_container(settings)

    assert isinstance(
        container.resolution_service.text_extractor, UnavailableTextExtractor
    )
    asyncio.run(container.close_resources())


def test_supabase_backend_requires_credentials() -> None:
    settings = Settings(history_backend="supabase", supabase_url=None)

    with pytest.raises(ValueError):
        build_container(settings)
