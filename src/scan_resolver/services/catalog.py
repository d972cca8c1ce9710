"""Remote product catalog lookups backed by Open Food Facts."""

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from scan_resolver.adapters.off_client import OffClient
from scan_resolver.domain.products import CacheStats, NormalizedProduct
from scan_resolver.services.cache import ProductCache

_logger = logging.getLogger(__name__)

_NOT_FOUND = "not-found"


@dataclass
class CatalogService:
    """Cache-aware barcode lookups that never raise.

    Every failure (invalid barcode, not found, rate limit, HTTP error, timeout,
    network error, malformed payload) is logged and reported as ``None``.
    Confirmed misses are only remembered when ``negative_ttl_seconds`` is set.
    """

    off_client: OffClient
    cache: ProductCache
    negative_ttl_seconds: float | None = None
    timeout_seconds: float = 8.0
    negative_cache: ProductCache | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.negative_ttl_seconds is not None and self.negative_cache is None:
            self.negative_cache = ProductCache(
                max_entries=self.cache.max_entries,
                default_ttl_seconds=self.negative_ttl_seconds,
            )

    async def fetch(self, barcode: str) -> NormalizedProduct | None:
        """Return the normalized product for a barcode, or None."""
        if not is_valid_barcode(barcode):
            _logger.warning("Invalid barcode format: %r", barcode)
            return None

        cached = self.cache.get(barcode)
        if isinstance(cached, NormalizedProduct):
            _logger.debug("Catalog cache hit: barcode=%s", barcode)
            return cached
        if self.negative_cache is not None and self.negative_cache.has(barcode):
            _logger.debug("Catalog negative cache hit: barcode=%s", barcode)
            return None

        _logger.debug("Catalog cache miss, fetching: barcode=%s", barcode)
        try:
            payload = await asyncio.wait_for(
                self.off_client.get_product(barcode), timeout=self.timeout_seconds
            )
        except (TimeoutError, httpx.TimeoutException):
            _logger.error("Catalog request timed out: barcode=%s", barcode)
            return None
        except Exception as exc:  # noqa: BLE001
            self._log_failure(barcode, exc)
            return None

        if not isinstance(payload, dict):
            _logger.error("Catalog returned a malformed payload: barcode=%s", barcode)
            return None
        raw_product = payload.get("product")
        if payload.get("status") != 1 or not isinstance(raw_product, dict):
            _logger.info(
                "Product not found (status=%s): barcode=%s",
                payload.get("status"),
                barcode,
            )
            self._remember_miss(barcode)
            return None

        product = self.normalize(barcode, raw_product)
        self.cache.set(barcode, product)
        _logger.info("Fetched and cached product: barcode=%s", barcode)
        return product

    def normalize(self, barcode: str, raw: dict[str, object]) -> NormalizedProduct:
        """Map an upstream product object into a NormalizedProduct."""
        return NormalizedProduct(
            barcode=barcode,
            name=_text(raw.get("product_name")),
            brand=_text(raw.get("brands")),
            ingredients_text=_text(raw.get("ingredients_text")),
            nutriments=_nutriments(raw.get("nutriments")),
            nutriscore_grade=_grade(raw.get("nutriscore_grade")),
            nova_group=_int(raw.get("nova_group")),
            ecoscore_grade=_grade(raw.get("ecoscore_grade")),
            image_url=_text(raw.get("image_front_url")) or _text(raw.get("image_url")),
            allergens=_text_or_tags(raw, "allergens"),
            labels=_text_or_tags(raw, "labels"),
            categories=_text_or_tags(raw, "categories"),
        )

    def clear_cache(self) -> None:
        """Drop every cached lookup."""
        self.cache.clear()
        if self.negative_cache is not None:
            self.negative_cache.clear()
        _logger.info("Catalog cache cleared")

    def cache_stats(self) -> CacheStats:
        """Sweep expired entries and report the remaining cache size."""
        expired = self.cache.cleanup()
        return CacheStats(size=self.cache.size(), expired=expired)

    def _log_failure(self, barcode: str, exc: Exception) -> None:
        status_code = _status_code_from_exception(exc)
        if status_code == "404":
            _logger.info("Product not found (404): barcode=%s", barcode)
            self._remember_miss(barcode)
        elif status_code == "429":
            _logger.warning("Catalog rate limit exceeded (429): barcode=%s", barcode)
        else:
            _logger.error(
                "Catalog lookup failed (status=%s): barcode=%s: %s",
                status_code,
                barcode,
                exc,
            )

    def _remember_miss(self, barcode: str) -> None:
        if self.negative_cache is not None:
            self.negative_cache.set(barcode, _NOT_FOUND)


def is_valid_barcode(barcode: str | None) -> bool:
    """Return True for a non-empty string of ASCII digits."""
    return bool(barcode) and barcode.isascii() and barcode.isdigit()


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _grade(value: object) -> str | None:
    text = _text(value)
    return text.lower() if text else None


def _int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return int(value) or None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip()) or None
    return None


def _text_or_tags(raw: dict[str, object], name: str) -> str | None:
    text = _text(raw.get(name))
    if text:
        return text
    tags = raw.get(f"{name}_tags")
    if isinstance(tags, list):
        joined = ", ".join(str(tag) for tag in tags if tag)
        return joined or None
    return None


def _nutriments(value: object) -> dict[str, float | str] | None:
    if not isinstance(value, dict):
        return None
    nutriments = {
        str(key): amount
        for key, amount in value.items()
        if isinstance(amount, int | float | str) and not isinstance(amount, bool)
    }
    return nutriments or None
