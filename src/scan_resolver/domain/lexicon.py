"""Keyword tables used to learn preferences and infer intent.

Tables are plain data so callers can swap them for tests or other locales.
"""

from dataclasses import dataclass, field

from scan_resolver.domain.history import DietaryProfile


@dataclass(frozen=True)
class KeywordRule:
    """Maps any matching keyword to dietary tags and health goals."""

    keywords: tuple[str, ...]
    restrictions: tuple[str, ...] = ()
    goals: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        """Return True when any keyword occurs in the lowercased text."""
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)


DEFAULT_PROFILE_KEYWORDS: dict[DietaryProfile, tuple[str, ...]] = {
    DietaryProfile.VEGAN: ("vegan", "plant-based", "dairy", "meat", "egg"),
    DietaryProfile.DIABETIC: ("sugar", "carb", "glucose", "diabetic"),
    DietaryProfile.PALEO: ("paleo", "grain", "processed", "natural"),
}

DEFAULT_CAPTURE_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("protein", "whey"), goals=("fitness", "protein-focused")),
    KeywordRule(("gluten-free", "gluten free"), ("gluten-intolerant", "celiac")),
    KeywordRule(("vegan", "plant-based"), ("vegan", "plant-based")),
    KeywordRule(("paleo", "grain-free"), ("paleo", "grain-free")),
    KeywordRule(
        ("sugar-free", "low-sugar", "diabetic"),
        ("diabetic",),
        ("blood-sugar-control",),
    ),
    KeywordRule(("keto", "low-carb"), ("keto",), ("low-carb",)),
)

DEFAULT_AVOIDED_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("gluten", "wheat"), ("gluten-intolerant",)),
    KeywordRule(("dairy", "milk", "lactose"), ("lactose-intolerant",)),
    KeywordRule(("meat", "animal"), ("vegan",)),
    KeywordRule(("sugar",), ("diabetic",), ("reduce-sugar",)),
)

DEFAULT_REJECTION_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("high sugar", "too much sugar"), goals=("reduce-sugar",)),
    KeywordRule(("processed", "artificial"), goals=("clean-eating",)),
)

DEFAULT_SUGGESTION_ORDER: tuple[tuple[DietaryProfile, tuple[str, ...]], ...] = (
    (DietaryProfile.VEGAN, ("vegan", "plant-based")),
    (DietaryProfile.DIABETIC, ("diabetic", "blood-sugar")),
    (DietaryProfile.PALEO, ("paleo", "grain-free")),
)


@dataclass(frozen=True)
class DietaryLexicon:
    """Bundle of keyword tables and matching thresholds."""

    profile_keywords: dict[DietaryProfile, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_PROFILE_KEYWORDS)
    )
    capture_rules: tuple[KeywordRule, ...] = DEFAULT_CAPTURE_RULES
    avoided_rules: tuple[KeywordRule, ...] = DEFAULT_AVOIDED_RULES
    rejection_rules: tuple[KeywordRule, ...] = DEFAULT_REJECTION_RULES
    suggestion_order: tuple[tuple[DietaryProfile, tuple[str, ...]], ...] = (
        DEFAULT_SUGGESTION_ORDER
    )
    token_delimiters: str = ",;.!?"
    min_token_length: int = 3
    max_token_length: int = 29
    significant_word_length: int = 5
