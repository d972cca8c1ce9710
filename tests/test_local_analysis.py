"""Tests for offline catalog lookups and rule-based verdicts."""

import pytest

from scan_resolver.adapters.local_catalog import InMemoryLocalCatalog
from scan_resolver.domain.analysis import DecisionResult, RiskResult, SafeResult
from scan_resolver.domain.history import DietaryProfile
from scan_resolver.domain.products import LocalProduct, NutritionFacts
from scan_resolver.services.local_analysis import LocalAnalyzer

COLA = "5449000000996"
FLAKES = "0003800001532"
YOGURT = "0007874220778"
CHEDDAR = "0002840005006"
BREAD = "0001820000012"
JUICE = "0001200000008"
TEA = "0007470000001"
CHOCOLATE = "0009300000006"


@pytest.fixture
def catalog() -> InMemoryLocalCatalog:
    return InMemoryLocalCatalog.default()


def _analyze(catalog: InMemoryLocalCatalog, barcode: str, profile: DietaryProfile):  # type: ignore[no-untyped-def]
    product = catalog.lookup(barcode)
    assert product is not None
    return LocalAnalyzer().analyze(product, profile)


def test_default_catalog_contains_seed_products(catalog: InMemoryLocalCatalog) -> None:
    assert len(catalog.all()) == 9
    assert catalog.lookup("0000000000000") is None


def test_search_matches_name_or_brand(catalog: InMemoryLocalCatalog) -> None:
    assert [product.barcode for product in catalog.search("coca")] == [COLA]
    assert [product.barcode for product in catalog.search("KRAFT")] == [CHEDDAR]
    assert [product.barcode for product in catalog.search("lindt")] == [CHOCOLATE]


def test_search_matches_substrings_across_names(
    catalog: InMemoryLocalCatalog,
) -> None:
    barcodes = {product.barcode for product in catalog.search("cola")}

    assert barcodes == {COLA, CHOCOLATE}


def test_by_category(catalog: InMemoryLocalCatalog) -> None:
    barcodes = {product.barcode for product in catalog.by_category("dairy")}

    assert barcodes == {YOGURT, CHEDDAR}


def test_diabetic_high_sugar_lists_sugar_ingredients(
    catalog: InMemoryLocalCatalog,
) -> None:
    result = _analyze(catalog, COLA, DietaryProfile.DIABETIC)

    assert isinstance(result, RiskResult)
    assert result.headline == "High Sugar Content Detected (10.6g per 100g)"
    assert [item.ingredient for item in result.items] == ["Sugar"]
    assert result.items[0].severity == "high"


def test_diabetic_high_carbs_adds_medium_item(catalog: InMemoryLocalCatalog) -> None:
    result = _analyze(catalog, FLAKES, DietaryProfile.DIABETIC)

    assert isinstance(result, RiskResult)
    assert [item.ingredient for item in result.items] == [
        "Sugar",
        "High Carbohydrate Content",
    ]
    assert result.items[1].severity == "med"


def test_diabetic_moderate_sugar(catalog: InMemoryLocalCatalog) -> None:
    result = _analyze(catalog, JUICE, DietaryProfile.DIABETIC)

    assert isinstance(result, RiskResult)
    assert result.headline == "Moderate Sugar Content (8.4g per 100g)"
    assert result.items[0].severity == "med"


def test_diabetic_low_sugar_is_safe(catalog: InMemoryLocalCatalog) -> None:
    result = _analyze(catalog, CHEDDAR, DietaryProfile.DIABETIC)

    assert isinstance(result, SafeResult)
    assert "Cheddar Cheese" in result.summary


def test_diabetic_high_sugar_without_named_sugar_gets_fallback_item() -> None:
    product = LocalProduct(
        barcode="0000000000024",
        name="Dried Dates",
        brand="Test Farms",
        ingredients=("Dates",),
        ingredients_text="Dates",
        nutrition=NutritionFacts(282, 0.4, 0, 75, 63, 8, 2.5, 0),
    )

    result = LocalAnalyzer().analyze(product, DietaryProfile.DIABETIC)

    assert isinstance(result, RiskResult)
    assert [item.ingredient for item in result.items] == [
        "Sugar",
        "High Carbohydrate Content",
    ]


def test_vegan_animal_ingredients_without_duplicate_allergens(
    catalog: InMemoryLocalCatalog,
) -> None:
    result = _analyze(catalog, CHEDDAR, DietaryProfile.VEGAN)

    assert isinstance(result, RiskResult)
    assert result.headline == "Contains Animal Products"
    assert [item.ingredient for item in result.items] == ["Milk", "Cheese Culture"]


def test_vegan_ambiguous_ingredient_asks_for_decision(
    catalog: InMemoryLocalCatalog,
) -> None:
    result = _analyze(catalog, COLA, DietaryProfile.VEGAN)

    assert isinstance(result, DecisionResult)
    assert '"Natural Flavors"' in result.question
    assert result.options == ["Strict", "Flexible"]


def test_vegan_plain_product_is_safe(catalog: InMemoryLocalCatalog) -> None:
    assert isinstance(_analyze(catalog, TEA, DietaryProfile.VEGAN), SafeResult)


def test_paleo_flags_grains_and_processed_ingredients(
    catalog: InMemoryLocalCatalog,
) -> None:
    result = _analyze(catalog, BREAD, DietaryProfile.PALEO)

    assert isinstance(result, RiskResult)
    assert result.headline == "Contains Non-Paleo Ingredients"
    assert result.items[0].ingredient == "Enriched Wheat Flour"
    assert result.items[0].reason == "Grains are not allowed on paleo diet"
    reasons = {item.reason for item in result.items}
    assert "Highly processed ingredients are not paleo-friendly" in reasons
    assert "Legumes are not allowed on paleo diet" in reasons


def test_paleo_whole_food_is_safe(catalog: InMemoryLocalCatalog) -> None:
    result = _analyze(catalog, TEA, DietaryProfile.PALEO)

    assert isinstance(result, SafeResult)
    assert result.summary.startswith("Green Tea is paleo-friendly")
