"""Product domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NormalizedProduct:
    """Product data from the remote catalog, every field optional."""

    barcode: str
    name: str | None = None
    brand: str | None = None
    ingredients_text: str | None = None
    nutriments: dict[str, float | str] | None = None
    nutriscore_grade: str | None = None
    nova_group: int | None = None
    ecoscore_grade: str | None = None
    image_url: str | None = None
    allergens: str | None = None
    labels: str | None = None
    categories: str | None = None


@dataclass(frozen=True)
class NutritionFacts:
    """Per-100g nutrition values for a locally known product."""

    energy_kcal: float
    fat: float
    saturated_fat: float
    carbohydrates: float
    sugars: float
    fiber: float
    proteins: float
    salt: float


@dataclass(frozen=True)
class LocalProduct:
    """Product record from the bundled offline catalog."""

    barcode: str
    name: str
    brand: str
    ingredients: tuple[str, ...]
    ingredients_text: str
    nutrition: NutritionFacts
    allergens: tuple[str, ...] = ()
    labels: tuple[str, ...] = ()
    categories: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CacheStats:
    """Cache size after sweeping expired entries."""

    size: int
    expired: int
