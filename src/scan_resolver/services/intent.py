"""Dietary intent inference from capture signals and user history."""

from dataclasses import dataclass, field

from scan_resolver.domain.history import DietaryProfile, UserHistory
from scan_resolver.domain.intent import CaptureSignals, InferredIntent
from scan_resolver.domain.lexicon import DietaryLexicon, KeywordRule

CONFIDENT_THRESHOLD = 0.7
TAG_BOOST = 0.2
MAX_HISTORY_BOOST = 0.3
PROFILE_BOOST = 0.1
RECENT_DECISIONS = 10


@dataclass
class IntentInferenceEngine:
    """Decides whether there is enough signal to skip a clarifying question."""

    lexicon: DietaryLexicon = field(default_factory=DietaryLexicon)

    def infer(
        self, capture: CaptureSignals, history: UserHistory | None = None
    ) -> InferredIntent:
        """Combine capture keywords and history into an inferred intent."""
        restrictions: list[str] = []
        goals: list[str] = []
        _apply(self.lexicon.capture_rules, list(capture.keywords), restrictions, goals)

        if history is not None:
            preferences = history.preferences
            _apply(
                self.lexicon.avoided_rules,
                preferences.avoided_ingredients,
                restrictions,
                goals,
            )
            if preferences.dietary_profile is not None:
                restrictions.append(preferences.dietary_profile.value.lower())
            reasons = [
                decision.reason
                for decision in history.decisions[-RECENT_DECISIONS:]
                if decision.choice == "rejected" and decision.reason
            ]
            _apply(self.lexicon.rejection_rules, reasons, restrictions, goals)

        tags = _unique(restrictions)
        confidence = _confidence(capture.confidence, tags, history)
        return InferredIntent(
            dietary_restrictions=tags,
            health_goals=_unique(goals),
            confidence=confidence,
            needs_clarification=not tags or confidence < CONFIDENT_THRESHOLD,
            suggested_profile=self._suggest(tags, confidence),
        )

    def _suggest(
        self, tags: tuple[str, ...], confidence: float
    ) -> DietaryProfile | None:
        if confidence < CONFIDENT_THRESHOLD:
            return None
        lowered = [tag.lower() for tag in tags]
        for profile, markers in self.lexicon.suggestion_order:
            if any(marker in tag for tag in lowered for marker in markers):
                return profile
        return None


def _apply(
    rules: tuple[KeywordRule, ...],
    texts: list[str],
    restrictions: list[str],
    goals: list[str],
) -> None:
    for rule in rules:
        if any(rule.matches(text) for text in texts):
            restrictions.extend(rule.restrictions)
            goals.extend(rule.goals)


def _unique(values: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _confidence(
    base: float, tags: tuple[str, ...], history: UserHistory | None
) -> float:
    confidence = base
    if tags:
        confidence += TAG_BOOST
    if history is not None:
        confidence += min(history.scan_count / 10, MAX_HISTORY_BOOST)
        if history.preferences.dietary_profile is not None:
            confidence += PROFILE_BOOST
    return clamp01(confidence)


def clamp01(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(value, 1.0))
