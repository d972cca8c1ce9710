"""Intent inference models."""

from dataclasses import dataclass

from scan_resolver.domain.history import DietaryProfile


@dataclass(frozen=True)
class CaptureSignals:
    """Weak signals detected on a capture by an upstream detector."""

    keywords: tuple[str, ...] = ()
    confidence: float = 0.5


@dataclass(frozen=True)
class InferredIntent:
    """Dietary intent inferred for a single resolution request."""

    dietary_restrictions: tuple[str, ...]
    health_goals: tuple[str, ...]
    confidence: float
    needs_clarification: bool
    suggested_profile: DietaryProfile | None = None
