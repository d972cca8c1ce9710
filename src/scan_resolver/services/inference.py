"""Submission of product text to the remote inference model."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from scan_resolver.domain.analysis import (
    ANALYSIS_RESULT_ADAPTER,
    AnalysisResult,
    InferenceRequest,
)
from scan_resolver.domain.errors import InferenceUnavailableError

_logger = logging.getLogger(__name__)


def _nullable(schema: dict[str, object]) -> dict[str, object]:
    return {"anyOf": [schema, {"type": "null"}]}


RESULT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "enum": ["SAFE", "RISK", "CLARIFICATION", "UNCERTAIN"]},
        "summary": _nullable({"type": "string"}),
        "headline": _nullable({"type": "string"}),
        "items": _nullable(
            {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "ingredient": {"type": "string"},
                        "severity": {"type": "string", "enum": ["high", "med"]},
                        "reason": {"type": "string"},
                    },
                    "required": ["ingredient", "severity", "reason"],
                    "additionalProperties": False,
                },
            }
        ),
        "question": _nullable({"type": "string"}),
        "options": _nullable({"type": "array", "items": {"type": "string"}}),
        "context": _nullable({"type": "string"}),
        "text": _nullable({"type": "string"}),
    },
    "required": [
        "type",
        "summary",
        "headline",
        "items",
        "question",
        "options",
        "context",
        "text",
    ],
    "additionalProperties": False,
}


class InferenceClient(Protocol):
    """Interface for the remote analysis model."""

    async def analyze(
        self,
        *,
        model: str,
        instructions: str,
        message: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return the raw structured analysis."""


class Inference(Protocol):
    """Turns product text into an analysis result."""

    async def submit(self, request: InferenceRequest) -> AnalysisResult:
        """Analyze product text for a dietary profile."""


@dataclass
class InferenceService(Inference):
    """Builds the analysis request and validates the model's answer.

    Raises InferenceUnavailableError when no client is configured, the call
    fails or times out, or the answer does not match a known result type.
    """

    client: InferenceClient | None
    model: str
    timeout_seconds: float = 30.0

    async def submit(self, request: InferenceRequest) -> AnalysisResult:
        """Submit product text and return the validated result."""
        if self.client is None:
            raise InferenceUnavailableError("Inference credentials are not configured")

        _logger.info(
            "Inference request: profile=%s text_length=%s has_barcode=%s confidence=%s",
            request.profile.value,
            len(request.text),
            request.barcode is not None,
            request.confidence,
        )
        try:
            raw = await asyncio.wait_for(
                self.client.analyze(
                    model=self.model,
                    instructions=request.system_prompt,
                    message=build_message(request),
                    schema=RESULT_SCHEMA,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise InferenceUnavailableError("Inference request timed out") from exc
        except Exception as exc:
            raise InferenceUnavailableError(f"Inference request failed: {exc}") from exc

        if not isinstance(raw, dict):
            raise InferenceUnavailableError("Inference returned a malformed response")
        present = {key: value for key, value in raw.items() if value is not None}
        try:
            result = ANALYSIS_RESULT_ADAPTER.validate_python(present)
        except ValidationError as exc:
            raise InferenceUnavailableError(
                "Inference returned a malformed response"
            ) from exc
        _logger.info("Inference completed: type=%s", result.type)
        return result


def build_message(request: InferenceRequest) -> str:
    """Format product text with its barcode and OCR confidence header."""
    header = []
    if request.barcode:
        header.append(f"Barcode: {request.barcode}")
    if request.confidence is not None:
        header.append(f"OCR Confidence: {request.confidence:.1f}%")
    lines = [
        "Product text:",
        *header,
        "---",
        request.text,
        "---",
        f"Analyze this product for a {request.profile.value} diet.",
    ]
    return "\n".join(lines)
