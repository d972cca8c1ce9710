"""Dependency container wiring for the resolver."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from scan_resolver.adapters.file_history_repository import FileHistoryRepository
from scan_resolver.adapters.local_catalog import InMemoryLocalCatalog
from scan_resolver.adapters.off_client import HttpxOffClient
from scan_resolver.adapters.openai_clients import (
    OpenAIInferenceClient,
    OpenAIVisionClient,
)
from scan_resolver.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from scan_resolver.config import Settings, parse_slot_name
from scan_resolver.services.cache import ProductCache
from scan_resolver.services.catalog import CatalogService
from scan_resolver.services.inference import InferenceService
from scan_resolver.services.intent import IntentInferenceEngine
from scan_resolver.services.local_analysis import LocalAnalyzer
from scan_resolver.services.preferences import HistoryRepository, PreferenceStore
from scan_resolver.services.resolution import ResolutionService
from scan_resolver.services.text_extraction import (
    TextExtractor,
    UnavailableTextExtractor,
    VisionTextExtractor,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    product_cache: ProductCache
    catalog_service: CatalogService
    preference_store: PreferenceStore
    intent_engine: IntentInferenceEngine
    resolution_service: ResolutionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    preference_store = PreferenceStore(_build_history_repository(resolved_settings))
    product_cache = ProductCache(
        max_entries=resolved_settings.cache_max_entries,
        default_ttl_seconds=resolved_settings.cache_ttl_seconds,
    )
    off_client = HttpxOffClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
        timeout_seconds=resolved_settings.catalog_timeout_seconds,
    )
    catalog_service = CatalogService(
        off_client=off_client,
        cache=product_cache,
        negative_ttl_seconds=resolved_settings.negative_cache_ttl_seconds,
        timeout_seconds=resolved_settings.catalog_timeout_seconds,
    )

    vision_client: OpenAIVisionClient | None = None
    inference_client: OpenAIInferenceClient | None = None
    text_extractor: TextExtractor = UnavailableTextExtractor()
    if resolved_settings.openai_api_key:
        vision_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
        inference_client = OpenAIInferenceClient.create(
            resolved_settings.openai_api_key,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
        text_extractor = VisionTextExtractor(
            client=vision_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    inference_service = InferenceService(
        client=inference_client,
        model=resolved_settings.openai_model,
        timeout_seconds=resolved_settings.inference_timeout_seconds,
    )

    intent_engine = IntentInferenceEngine(lexicon=preference_store.lexicon)
    resolution_service = ResolutionService(
        local_catalog=InMemoryLocalCatalog.default(),
        catalog=catalog_service,
        text_extractor=text_extractor,
        inference=inference_service,
        local_analyzer=LocalAnalyzer(),
        preference_store=preference_store,
        intent_engine=intent_engine,
        ocr_confidence_threshold=resolved_settings.ocr_confidence_threshold,
    )

    async def close_resources() -> None:
        await off_client.close()
        if vision_client is not None:
            await vision_client.close()
        if inference_client is not None:
            await inference_client.close()

    return AppContainer(
        settings=resolved_settings,
        product_cache=product_cache,
        catalog_service=catalog_service,
        preference_store=preference_store,
        intent_engine=intent_engine,
        resolution_service=resolution_service,
        close_resources=close_resources,
    )


def _build_history_repository(settings: Settings) -> HistoryRepository:
    slot = parse_slot_name(settings.history_slot)
    if settings.history_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase history backend requires URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseHistoryRepository(client=client, slot=slot)
    if settings.history_backend == "file":
        return FileHistoryRepository(Path(settings.history_path).expanduser())
    raise ValueError(f"Unknown history backend: {settings.history_backend}")
