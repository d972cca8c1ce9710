"""Label text extraction from captured images."""

import base64
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from scan_resolver.domain.analysis import ExtractedText
from scan_resolver.domain.errors import TextExtractionError

TEXT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "text": {"type": "string"},
        "confidence": {"type": "number", "minimum": 0.0, "maximum": 100.0},
    },
    "required": ["text", "confidence"],
    "additionalProperties": False,
}

_PROMPT = (
    "Transcribe all printed text on this product label exactly as it appears, "
    "including product name, ingredients, nutrition facts and allergen warnings. "
    "Do not guess hidden or cut-off text. Report your confidence in the "
    "transcription as a number from 0 to 100."
)


class TextExtractor(Protocol):
    """Reads label text from an image."""

    async def extract(self, image: bytes) -> ExtractedText:
        """Return the extracted text and a confidence from 0 to 100."""


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

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
        """Return structured vision extraction data."""


@dataclass
class VisionTextExtractor(TextExtractor):
    """Text extractor that asks a vision model to transcribe the label."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def extract(self, image: bytes) -> ExtractedText:
        """Transcribe label text via the configured client."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image),
            schema_name="label_text",
            schema=TEXT_SCHEMA,
            prompt=_PROMPT,
        )
        try:
            return ExtractedText.model_validate(raw)
        except ValidationError as exc:
            raise TextExtractionError("Malformed text extraction result") from exc


@dataclass
class UnavailableTextExtractor(TextExtractor):
    """Extractor used when no vision credentials are configured."""

    reason: str = "Text recognition is not configured"

    async def extract(self, image: bytes) -> ExtractedText:
        raise TextExtractionError(self.reason)


_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def _to_data_url(image: bytes) -> str:
    encoded = base64.b64encode(image).decode("ascii")
    return f"data:{_detect_mime_type(image)};base64,{encoded}"


def _detect_mime_type(image: bytes) -> str:
    """Sniff the image type from its magic bytes, defaulting to JPEG."""
    if image[:4] == b"RIFF" and image[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _IMAGE_SIGNATURES:
        if image.startswith(signature):
            return mime_type
    return "image/jpeg"
