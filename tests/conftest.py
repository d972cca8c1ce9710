"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from scan_resolver.adapters.local_catalog import InMemoryLocalCatalog
from scan_resolver.adapters.off_client import OffClient
from scan_resolver.config import Settings
from scan_resolver.domain.analysis import (
    AnalysisResult,
    ExtractedText,
    InferenceRequest,
    SafeResult,
)
from scan_resolver.domain.products import LocalProduct, NutritionFacts
from scan_resolver.services.cache import ProductCache
from scan_resolver.services.catalog import CatalogService
from scan_resolver.services.inference import Inference
from scan_resolver.services.intent import IntentInferenceEngine
from scan_resolver.services.local_analysis import LocalAnalyzer
from scan_resolver.services.preferences import HistoryRepository, PreferenceStore
from scan_resolver.services.resolution import ResolutionService
from scan_resolver.services.text_extraction import TextExtractor, VisionClient

START = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def off_payload(barcode: str = "3017620422003") -> dict[str, object]:
    return {
        "status": 1,
        "code": barcode,
        "product": {
            "code": barcode,
            "product_name": "Nutella",
            "brands": "Ferrero",
            "ingredients_text": "Sugar, palm oil, hazelnuts 13%, skimmed milk powder",
            "nutriments": {"sugars_100g": 56.3, "fat_100g": 30.9, "energy-kcal": 539},
            "nutriscore_grade": "E",
            "nova_group": 4,
            "allergens_tags": ["en:milk", "en:nuts"],
            "labels": "",
            "image_front_url": "https://images.test/nutella.jpg",
        },
    }


@dataclass
class CountingOffClient(OffClient):
    """Fake OFF client returning canned payloads and counting calls."""

    payloads: dict[str, object] = field(default_factory=dict)
    error: Exception | None = None
    delay_seconds: float = 0.0
    calls: list[str] = field(default_factory=list)

    async def get_product(self, barcode: str) -> object:
        self.calls.append(barcode)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return self.payloads.get(barcode, {"status": 0, "status_verbose": "not found"})


@dataclass
class FakeTextExtractor(TextExtractor):
    """Fake extractor returning a fixed transcription."""

    text: str = "Ingredients: sugar, palm oil, hazelnuts, skimmed milk powder"
    confidence: float = 85.0
    error: Exception | None = None
    calls: int = 0

    async def extract(self, image: bytes) -> ExtractedText:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return ExtractedText(text=self.text, confidence=self.confidence)


@dataclass
class FakeInference(Inference):
    """Fake inference service recording submitted requests."""

    result: AnalysisResult = field(
        default_factory=lambda: SafeResult(summary="Looks fine")
    )
    error: Exception | None = None
    requests: list[InferenceRequest] = field(default_factory=list)

    async def submit(self, request: InferenceRequest) -> AnalysisResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"text": "Ingredients: oats, honey", "confidence": 91.5}
    )
    last_schema_name: str | None = None

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.last_schema_name = schema_name
        return self.payload


@dataclass
class InMemoryHistoryRepository(HistoryRepository):
    """In-memory persistence slot for tests."""

    blob: str | None = None
    writes: int = 0

    def read(self) -> str | None:
        return self.blob

    def write(self, blob: str) -> None:
        self.writes += 1
        self.blob = blob

    def remove(self) -> None:
        self.blob = None


LOCAL_OATS = LocalProduct(
    barcode="0000000000017",
    name="Rolled Oats",
    brand="Test Mills",
    ingredients=("Whole Grain Oats",),
    ingredients_text="100% whole grain rolled oats",
    nutrition=NutritionFacts(379, 6.5, 1.1, 67.7, 1.0, 10.1, 13.2, 0),
    categories=("Breakfast cereals", "Oats"),
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def off_client() -> CountingOffClient:
    return CountingOffClient(payloads={"3017620422003": off_payload()})


@pytest.fixture
def catalog_service(off_client: CountingOffClient) -> CatalogService:
    return CatalogService(off_client=off_client, cache=ProductCache())


@pytest.fixture
def text_extractor() -> FakeTextExtractor:
    return FakeTextExtractor()


@pytest.fixture
def inference() -> FakeInference:
    return FakeInference()


@pytest.fixture
def history_repository() -> InMemoryHistoryRepository:
    return InMemoryHistoryRepository()


@pytest.fixture
def preference_store(
    history_repository: InMemoryHistoryRepository, clock: FakeClock
) -> PreferenceStore:
    return PreferenceStore(history_repository, clock=clock)


@pytest.fixture
def resolution_service(
    catalog_service: CatalogService,
    text_extractor: FakeTextExtractor,
    inference: FakeInference,
    preference_store: PreferenceStore,
) -> ResolutionService:
    return ResolutionService(
        local_catalog=InMemoryLocalCatalog.from_products([LOCAL_OATS]),
        catalog=catalog_service,
        text_extractor=text_extractor,
        inference=inference,
        local_analyzer=LocalAnalyzer(),
        preference_store=preference_store,
        intent_engine=IntentInferenceEngine(),
    )
