"""Rule-based verdicts for products in the offline catalog."""

import re
from dataclasses import dataclass

from scan_resolver.domain.analysis import (
    AnalysisResult,
    DecisionResult,
    RiskItem,
    RiskResult,
    SafeResult,
)
from scan_resolver.domain.history import DietaryProfile
from scan_resolver.domain.products import LocalProduct

_SUGAR_INGREDIENT = re.compile(r"sugar|syrup|honey|fructose|glucose|dextrose|maltose", re.I)
_ANIMAL_INGREDIENT = re.compile(
    r"milk|cheese|butter|cream|whey|casein|lactose|egg|honey|gelatin|meat|fish"
    r"|chicken|beef|pork|bacon|lard",
    re.I,
)
_ANIMAL_ALLERGEN = re.compile(r"milk|egg|fish|shellfish", re.I)
_AMBIGUOUS_VEGAN = re.compile(
    r"natural flavor|artificial flavor|mono and diglycerides|lecithin|vitamin d", re.I
)
_PALEO_RULES: tuple[tuple[re.Pattern[str], str, str], ...] = (
    (
        re.compile(r"wheat|flour|rice|corn|oat|barley|rye|bread|pasta|cereal", re.I),
        "high",
        "Grains are not allowed on paleo diet",
    ),
    (
        re.compile(r"bean|lentil|peanut|soy|chickpea|pea protein", re.I),
        "high",
        "Legumes are not allowed on paleo diet",
    ),
    (
        re.compile(r"milk|cheese|butter|cream|whey|yogurt|lactose", re.I),
        "med",
        "Dairy is typically avoided on strict paleo diet",
    ),
    (
        re.compile(
            r"hydrogenated|msg|monosodium glutamate|high fructose corn syrup|artificial",
            re.I,
        ),
        "high",
        "Highly processed ingredients are not paleo-friendly",
    ),
)


@dataclass
class LocalAnalyzer:
    """Analyze offline catalog products without calling the inference service."""

    high_sugar_g: float = 10.0
    medium_sugar_g: float = 5.0
    high_carbs_g: float = 50.0

    def analyze(self, product: LocalProduct, profile: DietaryProfile) -> AnalysisResult:
        """Return a verdict for the product under the given diet."""
        if profile is DietaryProfile.DIABETIC:
            return self._diabetic(product)
        if profile is DietaryProfile.VEGAN:
            return _vegan(product)
        return _paleo(product)

    def _diabetic(self, product: LocalProduct) -> AnalysisResult:
        sugars = product.nutrition.sugars
        carbs = product.nutrition.carbohydrates
        if sugars >= self.high_sugar_g:
            items = [
                RiskItem(
                    ingredient=ingredient,
                    severity="high",
                    reason=(
                        f"Contains {sugars:g}g of sugar per 100g, which can cause "
                        "rapid blood sugar spikes"
                    ),
                )
                for ingredient in product.ingredients
                if _SUGAR_INGREDIENT.search(ingredient)
            ]
            if not items:
                items.append(
                    RiskItem(
                        ingredient="Sugar",
                        severity="high",
                        reason=f"Contains {sugars:g}g of sugar per 100g",
                    )
                )
            if carbs > self.high_carbs_g:
                items.append(
                    RiskItem(
                        ingredient="High Carbohydrate Content",
                        severity="med",
                        reason=(
                            f"{carbs:g}g of carbs per 100g can significantly impact "
                            "blood glucose levels"
                        ),
                    )
                )
            return RiskResult(
                headline=f"High Sugar Content Detected ({sugars:g}g per 100g)",
                items=items,
            )
        if sugars >= self.medium_sugar_g:
            return RiskResult(
                headline=f"Moderate Sugar Content ({sugars:g}g per 100g)",
                items=[
                    RiskItem(
                        ingredient="Sugar",
                        severity="med",
                        reason=(
                            f"Contains {sugars:g}g of sugar per 100g. Monitor portion "
                            "sizes to avoid blood sugar spikes"
                        ),
                    )
                ],
            )
        return SafeResult(
            summary=(
                f"{product.name} is diabetic-friendly with only {sugars:g}g of sugar "
                "per 100g."
            )
        )


def _vegan(product: LocalProduct) -> AnalysisResult:
    animal = [item for item in product.ingredients if _ANIMAL_INGREDIENT.search(item)]
    allergens = [item for item in product.allergens if _ANIMAL_ALLERGEN.search(item)]
    if animal or allergens:
        items = [
            RiskItem(
                ingredient=ingredient,
                severity="high",
                reason="Animal-derived ingredient not suitable for vegan diet",
            )
            for ingredient in animal
        ]
        for allergen in allergens:
            if not any(allergen.lower() in ingredient.lower() for ingredient in animal):
                items.append(
                    RiskItem(
                        ingredient=allergen,
                        severity="high",
                        reason="Contains animal-derived allergen",
                    )
                )
        return RiskResult(headline="Contains Animal Products", items=items)

    ambiguous = [item for item in product.ingredients if _AMBIGUOUS_VEGAN.search(item)]
    if ambiguous:
        return DecisionResult(
            question=(
                f'{product.name} contains "{ambiguous[0]}" which might be '
                "animal-derived. How strict is your vegan diet?"
            ),
            options=["Strict", "Flexible"],
        )
    return SafeResult(
        summary=f"{product.name} has no animal-derived ingredients. Safe for vegan diet."
    )


def _paleo(product: LocalProduct) -> AnalysisResult:
    items = [
        RiskItem(ingredient=ingredient, severity=severity, reason=reason)
        for pattern, severity, reason in _PALEO_RULES
        for ingredient in product.ingredients
        if pattern.search(ingredient)
    ]
    if items:
        return RiskResult(headline="Contains Non-Paleo Ingredients", items=items)
    return SafeResult(
        summary=f"{product.name} is paleo-friendly with only whole, unprocessed ingredients."
    )
