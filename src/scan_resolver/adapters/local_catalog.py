"""In-memory offline product catalog."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from scan_resolver.adapters.local_products import SEED_PRODUCTS
from scan_resolver.domain.products import LocalProduct
from scan_resolver.services.resolution import LocalCatalog


@dataclass
class InMemoryLocalCatalog(LocalCatalog):
    """Offline catalog keyed by barcode."""

    products: dict[str, LocalProduct] = field(default_factory=dict)

    @classmethod
    def from_products(cls, products: Iterable[LocalProduct]) -> "InMemoryLocalCatalog":
        """Build a catalog from product records."""
        return cls(products={product.barcode: product for product in products})

    @classmethod
    def default(cls) -> "InMemoryLocalCatalog":
        """Build the catalog from the bundled seed dataset."""
        return cls.from_products(SEED_PRODUCTS)

    def lookup(self, barcode: str) -> LocalProduct | None:
        """Return the product for a barcode, if known."""
        return self.products.get(barcode)

    def search(self, query: str) -> list[LocalProduct]:
        """Return products whose name or brand contains the query."""
        lowered = query.lower()
        return [
            product
            for product in self.products.values()
            if lowered in product.name.lower() or lowered in product.brand.lower()
        ]

    def by_category(self, category: str) -> list[LocalProduct]:
        """Return products with a category containing the given text."""
        lowered = category.lower()
        return [
            product
            for product in self.products.values()
            if any(lowered in entry.lower() for entry in product.categories)
        ]

    def all(self) -> list[LocalProduct]:
        """Return every product."""
        return list(self.products.values())
