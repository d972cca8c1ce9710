"""Analysis results and resolution requests."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from scan_resolver.domain.history import DietaryProfile
from scan_resolver.domain.intent import InferredIntent


class RiskItem(BaseModel):
    """Single risky ingredient with its severity."""

    ingredient: str
    severity: Literal["high", "med"]
    reason: str


class SafeResult(BaseModel):
    """Product is safe for the selected diet."""

    type: Literal["SAFE"] = "SAFE"
    summary: str = ""


class RiskResult(BaseModel):
    """Product carries dietary risks."""

    type: Literal["RISK"] = "RISK"
    headline: str = ""
    items: list[RiskItem] = Field(default_factory=list)


class DecisionResult(BaseModel):
    """Verdict depends on how strictly the user follows their diet."""

    type: Literal["DECISION"] = "DECISION"
    question: str
    options: list[str]


class UncertainResult(BaseModel):
    """No verdict could be reached; ``text`` explains why to the user."""

    type: Literal["UNCERTAIN"] = "UNCERTAIN"
    text: str


class ClarificationResult(BaseModel):
    """The user must answer a question before analysis can continue."""

    type: Literal["CLARIFICATION"] = "CLARIFICATION"
    question: str
    options: list[str]
    context: str | None = None


AnalysisResult = Annotated[
    SafeResult | RiskResult | DecisionResult | UncertainResult | ClarificationResult,
    Field(discriminator="type"),
]

ANALYSIS_RESULT_ADAPTER: TypeAdapter[AnalysisResult] = TypeAdapter(AnalysisResult)


class ExtractedText(BaseModel):
    """Text read from a label image with the engine's confidence (0-100)."""

    text: str
    confidence: float = Field(ge=0.0, le=100.0)


@dataclass(frozen=True)
class InferenceRequest:
    """Payload submitted to the inference service."""

    text: str
    profile: DietaryProfile
    system_prompt: str
    barcode: str | None = None
    confidence: float | None = None


class ResolutionSource(str, Enum):
    """Which stage produced a resolution."""

    LOCAL = "LOCAL"
    REMOTE = "REMOTE"
    OCR = "OCR"
    NONE = "NONE"


@dataclass(frozen=True)
class ScanRequest:
    """A scanned product: barcode and/or captured label image."""

    image: bytes | None = None
    barcode: str | None = None
    profile: DietaryProfile | None = None
    keywords: tuple[str, ...] = ()
    signal_confidence: float = 0.5


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a scan."""

    result: AnalysisResult
    source: ResolutionSource
    intent: InferredIntent | None = None
