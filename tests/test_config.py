"""Tests for settings and slot parsing."""

import pytest

from scan_resolver.config import DEFAULT_HISTORY_SLOT, Settings, parse_slot_name


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("HISTORY_BACKEND", raising=False)

    settings = Settings()

    assert settings.openai_api_key is None
    assert settings.off_base_url == "https://world.openfoodfacts.org/api/v0"
    assert settings.cache_max_entries == 500
    assert settings.cache_ttl_seconds == 86400
    assert settings.negative_cache_ttl_seconds is None
    assert settings.ocr_confidence_threshold == 70.0
    assert settings.history_backend == "file"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "25")
    monkeypatch.setenv("NEGATIVE_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("OCR_CONFIDENCE_THRESHOLD", "55.5")

    settings = Settings()

    assert settings.cache_max_entries == 25
    assert settings.negative_cache_ttl_seconds == 60
    assert settings.ocr_confidence_threshold == 55.5


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, DEFAULT_HISTORY_SLOT),
        ("", DEFAULT_HISTORY_SLOT),
        ("  Kitchen Tablet ", "kitchen-tablet"),
        ("user@example.com", "user-example.com"),
        ("!!!", DEFAULT_HISTORY_SLOT),
    ],
)
def test_parse_slot_name(raw: str | None, expected: str) -> None:
    assert parse_slot_name(raw) == expected
