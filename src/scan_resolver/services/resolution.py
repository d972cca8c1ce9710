"""Ordered fallback chain that turns a scan into an analysis result.

Stages run strictly one after another: offline catalog, remote catalog,
label OCR, then the inference service. A stage never raises past this
module; failures become an uncertain result for the user.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from scan_resolver.domain.analysis import (
    AnalysisResult,
    ClarificationResult,
    InferenceRequest,
    Resolution,
    ResolutionSource,
    ScanRequest,
    UncertainResult,
)
from scan_resolver.domain.history import DietaryProfile, UserHistory
from scan_resolver.domain.intent import CaptureSignals, InferredIntent
from scan_resolver.domain.products import LocalProduct, NormalizedProduct
from scan_resolver.services.catalog import CatalogService
from scan_resolver.services.inference import Inference
from scan_resolver.services.intent import IntentInferenceEngine
from scan_resolver.services.local_analysis import LocalAnalyzer
from scan_resolver.services.preferences import PreferenceStore
from scan_resolver.services.prompts import system_prompt
from scan_resolver.services.text_extraction import TextExtractor

DEFAULT_OCR_CONFIDENCE_THRESHOLD = 70.0

_NO_IMAGE_MESSAGE = (
    "We couldn't find this product. Take a clear photo of the ingredients label "
    "to analyze it."
)
_EXTRACTION_FAILED_MESSAGE = (
    "We couldn't read the label. Please try again with a clear photo of the "
    "ingredients."
)
_LOW_CONFIDENCE_MESSAGE = (
    "The label text is too unclear to analyze safely (read confidence {confidence:.0f}%). "
    "Please retake the photo in good light, holding the camera steady."
)
_INFERENCE_FAILED_MESSAGE = (
    "We couldn't analyze this product right now. Please try again in a moment."
)
_PROFILE_QUESTION = "Which diet should we check this product against?"

_logger = logging.getLogger(__name__)


class LocalCatalog(Protocol):
    """Offline product dataset."""

    def lookup(self, barcode: str) -> LocalProduct | None:
        """Return the product for a barcode, if known."""


@dataclass
class ResolutionService:
    """Resolve scans through local, remote, OCR and inference stages."""

    local_catalog: LocalCatalog
    catalog: CatalogService
    text_extractor: TextExtractor
    inference: Inference
    local_analyzer: LocalAnalyzer
    preference_store: PreferenceStore | None = None
    intent_engine: IntentInferenceEngine | None = None
    ocr_confidence_threshold: float = DEFAULT_OCR_CONFIDENCE_THRESHOLD

    async def resolve(
        self, scan: ScanRequest, history: UserHistory | None = None
    ) -> Resolution:
        """Resolve a scan to an analysis result without raising."""
        intent = None
        if self.intent_engine is not None:
            intent = self.intent_engine.infer(
                CaptureSignals(scan.keywords, scan.signal_confidence), history
            )
        profile = _select_profile(scan, history, intent)
        if profile is None:
            return Resolution(
                result=ClarificationResult(
                    question=_PROFILE_QUESTION,
                    options=[entry.value for entry in DietaryProfile],
                    context="Not enough history to infer your diet yet.",
                ),
                source=ResolutionSource.NONE,
                intent=intent,
            )

        barcode = scan.barcode or None
        if barcode is not None:
            local_product = self.local_catalog.lookup(barcode)
            if local_product is not None:
                _logger.info("Resolved from local catalog: barcode=%s", barcode)
                return Resolution(
                    result=self.local_analyzer.analyze(local_product, profile),
                    source=ResolutionSource.LOCAL,
                    intent=intent,
                )
            product = await self.catalog.fetch(barcode)
            if product is not None:
                result = await self._infer(
                    describe_product(product), profile, history, barcode=barcode
                )
                return Resolution(result, ResolutionSource.REMOTE, intent)

        return Resolution(
            await self._resolve_from_image(scan, profile, history, barcode),
            ResolutionSource.OCR if scan.image is not None else ResolutionSource.NONE,
            intent,
        )

    async def _resolve_from_image(
        self,
        scan: ScanRequest,
        profile: DietaryProfile,
        history: UserHistory | None,
        barcode: str | None,
    ) -> AnalysisResult:
        if scan.image is None:
            return UncertainResult(text=_NO_IMAGE_MESSAGE)
        try:
            extracted = await self.text_extractor.extract(scan.image)
        except Exception:
            _logger.exception("Label text extraction failed")
            return UncertainResult(text=_EXTRACTION_FAILED_MESSAGE)

        if (
            extracted.confidence < self.ocr_confidence_threshold
            or not extracted.text.strip()
        ):
            _logger.info(
                "OCR confidence below threshold: confidence=%.1f threshold=%.1f",
                extracted.confidence,
                self.ocr_confidence_threshold,
            )
            return UncertainResult(
                text=_LOW_CONFIDENCE_MESSAGE.format(confidence=extracted.confidence)
            )
        return await self._infer(
            extracted.text,
            profile,
            history,
            barcode=barcode,
            confidence=extracted.confidence,
        )

    async def _infer(
        self,
        text: str,
        profile: DietaryProfile,
        history: UserHistory | None,
        *,
        barcode: str | None = None,
        confidence: float | None = None,
    ) -> AnalysisResult:
        prompt = system_prompt(profile)
        if self.preference_store is not None and history is not None:
            prompt = self.preference_store.adapt_prompt(prompt, history)
        request = InferenceRequest(
            text=text,
            profile=profile,
            system_prompt=prompt,
            barcode=barcode,
            confidence=confidence,
        )
        try:
            return await self.inference.submit(request)
        except Exception:
            _logger.exception("Inference submission failed")
            return UncertainResult(text=_INFERENCE_FAILED_MESSAGE)


def _select_profile(
    scan: ScanRequest, history: UserHistory | None, intent: InferredIntent | None
) -> DietaryProfile | None:
    if scan.profile is not None:
        return scan.profile
    if history is not None and history.preferences.dietary_profile is not None:
        return history.preferences.dietary_profile
    if intent is not None:
        return intent.suggested_profile
    return None


def describe_product(product: NormalizedProduct) -> str:
    """Render a catalog product as a text block for analysis."""
    lines = []
    if product.name:
        lines.append(f"Product: {product.name}")
    if product.brand:
        lines.append(f"Brand: {product.brand}")
    if product.ingredients_text:
        lines.append(f"Ingredients: {product.ingredients_text}")
    per_100g = [
        f"{key.removesuffix('_100g')}: {value}"
        for key, value in (product.nutriments or {}).items()
        if key.endswith("_100g")
    ]
    if per_100g:
        lines.append(f"Nutrition per 100g: {', '.join(per_100g)}")
    if product.allergens:
        lines.append(f"Allergens: {product.allergens}")
    if product.labels:
        lines.append(f"Labels: {product.labels}")
    if product.categories:
        lines.append(f"Categories: {product.categories}")
    if product.nutriscore_grade:
        lines.append(f"Nutri-Score: {product.nutriscore_grade.upper()}")
    if product.nova_group is not None:
        lines.append(f"NOVA group: {product.nova_group}")
    if product.ecoscore_grade:
        lines.append(f"Eco-Score: {product.ecoscore_grade.upper()}")
    return "\n".join(lines)
