"""Persisted decision history and learned dietary preferences."""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from scan_resolver.domain.errors import HistoryStorageError
from scan_resolver.domain.history import (
    Decision,
    DietaryProfile,
    ExperienceTier,
    Preferences,
    StoredHistory,
    UserHistory,
)
from scan_resolver.domain.lexicon import DietaryLexicon

SCHEMA_VERSION = "2"
LEGACY_SCHEMA_VERSION = "1.0.0"
PROFILE_MIN_DECISIONS = 5
PROFILE_MIN_RATIO = 0.8
PROMPT_LIST_LIMIT = 5

_logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """A single named persistence slot holding the serialized history blob."""

    def read(self) -> str | None:
        """Return the stored blob, or None when the slot is empty."""

    def write(self, blob: str) -> None:
        """Replace the stored blob."""

    def remove(self) -> None:
        """Empty the slot."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class PreferenceStore:
    """Learns from decisions and persists the resulting history."""

    repository: HistoryRepository
    lexicon: DietaryLexicon = field(default_factory=DietaryLexicon)
    clock: Callable[[], datetime] = _utcnow

    def load(self) -> UserHistory | None:
        """Return the stored history, or None when absent or unreadable."""
        try:
            blob = self.repository.read()
            if blob is None:
                return None
            payload = migrate_payload(json.loads(blob))
            return StoredHistory.model_validate(payload).history
        except (HistoryStorageError, ValueError) as exc:
            _logger.warning("Failed to load user history: %s", exc)
            return None

    def save(self, history: UserHistory) -> None:
        """Write the history to the slot with the current schema version."""
        stored = StoredHistory(
            history=history,
            last_sync=self.clock(),
            schema_version=SCHEMA_VERSION,
        )
        try:
            self.repository.write(stored.model_dump_json())
        except HistoryStorageError:
            _logger.exception("Failed to save user history")
            raise

    def clear(self) -> None:
        """Delete the stored history."""
        self.repository.remove()
        _logger.info("User history cleared")

    def new_history(self) -> UserHistory:
        """Return an empty history."""
        return UserHistory(last_scan_date=self.clock())

    def record_decision(self, history: UserHistory, decision: Decision) -> UserHistory:
        """Return a copy of the history updated with the decision."""
        updated = history.model_copy(deep=True)
        updated.decisions.append(decision)
        updated.scan_count += 1
        updated.last_scan_date = decision.timestamp

        preferences = updated.preferences
        if decision.choice == "rejected" and decision.reason:
            self._merge(preferences.avoided_ingredients, decision.reason)
        if decision.choice == "accepted":
            self._merge(preferences.preferred_ingredients, decision.product_type)

        if len(updated.decisions) >= PROFILE_MIN_DECISIONS:
            profile, ratio = infer_dietary_profile(updated.decisions, self.lexicon)
            if ratio > PROFILE_MIN_RATIO:
                preferences.dietary_profile = profile
        return updated

    def adapt_prompt(self, base: str, history: UserHistory) -> str:
        """Append the user's learned context to an analysis prompt."""
        preferences = history.preferences
        parts = [base]
        avoided = preferences.avoided_ingredients
        if avoided:
            line = f"User typically avoids: {', '.join(avoided[:PROMPT_LIST_LIMIT])}"
            if len(avoided) > PROMPT_LIST_LIMIT:
                line += f" and {len(avoided) - PROMPT_LIST_LIMIT} more ingredients"
            parts.append(line)
        preferred = preferences.preferred_ingredients
        if preferred:
            parts.append(
                f"User typically prefers: {', '.join(preferred[:PROMPT_LIST_LIMIT])}"
            )
        if preferences.dietary_profile is not None:
            parts.append(
                f"User appears to follow a {preferences.dietary_profile.value} diet "
                "based on their history."
            )
        if preferences.strictness == "strict":
            parts.append("User prefers strict adherence to their dietary preferences.")
        else:
            parts.append("User is flexible with their dietary preferences.")
        parts.append(_experience_statement(history))
        return "\n\n".join(parts)

    def _merge(self, existing: list[str], text: str) -> None:
        for ingredient in extract_ingredients(text, self.lexicon):
            if not any(are_similar(current, ingredient, self.lexicon) for current in existing):
                existing.append(ingredient)


def experience_tier(history: UserHistory) -> ExperienceTier:
    """Classify the user by number of scans."""
    if history.scan_count > 10:
        return ExperienceTier.EXPERT
    if history.scan_count > 3:
        return ExperienceTier.INTERMEDIATE
    return ExperienceTier.BEGINNER


def _experience_statement(history: UserHistory) -> str:
    tier = experience_tier(history)
    scans = history.scan_count
    if tier is ExperienceTier.EXPERT:
        return (
            f"User is experienced ({scans} scans). Use more technical language "
            "and denser information."
        )
    if tier is ExperienceTier.INTERMEDIATE:
        return (
            f"User has some experience ({scans} scans). Balance technical and "
            "simple language."
        )
    return f"User is new ({scans} scans). Use simple language and more explanations."


def extract_ingredients(text: str, lexicon: DietaryLexicon) -> list[str]:
    """Split free text into lowercase ingredient-sized tokens."""
    pattern = f"[{re.escape(lexicon.token_delimiters)}]"
    tokens = (token.strip() for token in re.split(pattern, text.lower()))
    return [
        token
        for token in tokens
        if lexicon.min_token_length <= len(token) <= lexicon.max_token_length
    ]


def are_similar(first: str, second: str, lexicon: DietaryLexicon) -> bool:
    """Return True when two ingredient tokens describe the same thing."""
    if first in second or second in first:
        return True
    first_words = [w for w in first.split() if len(w) >= lexicon.significant_word_length]
    second_words = [
        w for w in second.split() if len(w) >= lexicon.significant_word_length
    ]
    return any(a in b or b in a for a in first_words for b in second_words)


def infer_dietary_profile(
    decisions: list[Decision], lexicon: DietaryLexicon
) -> tuple[DietaryProfile, float]:
    """Return the dominant profile and its share of all decisions."""
    counts = dict.fromkeys(lexicon.profile_keywords, 0)
    for decision in decisions:
        text = f"{decision.product_type} {decision.reason or ''}".lower()
        for profile, keywords in lexicon.profile_keywords.items():
            if any(keyword in text for keyword in keywords):
                counts[profile] += 1
    dominant = max(counts, key=lambda profile: counts[profile])
    return dominant, counts[dominant] / len(decisions)


def migrate_payload(payload: object) -> dict[str, object]:
    """Upgrade a stored blob to the current schema.

    Raises ValueError for blobs that are not objects or carry an unknown version.
    """
    if not isinstance(payload, dict):
        raise ValueError("Stored history is not an object")
    version = payload.get("schema_version", payload.get("version"))
    if version == SCHEMA_VERSION:
        return _with_defaults(payload)
    if version == LEGACY_SCHEMA_VERSION:
        return _with_defaults(_from_legacy(payload))
    raise ValueError(f"Unknown history schema version: {version!r}")


def _from_legacy(payload: dict[str, object]) -> dict[str, object]:
    legacy = payload.get("userHistory")
    if not isinstance(legacy, dict):
        raise ValueError("Legacy history is missing userHistory")
    preferences = legacy.get("preferences") or {}
    if not isinstance(preferences, dict):
        raise ValueError("Legacy preferences are not an object")
    decisions = legacy.get("decisions") or []
    if not isinstance(decisions, list):
        raise ValueError("Legacy decisions are not a list")
    history: dict[str, object] = {
        "decisions": [
            {
                "product_type": decision.get("productType"),
                "choice": decision.get("choice"),
                "reason": decision.get("reason"),
                "timestamp": decision.get("timestamp"),
            }
            for decision in decisions
            if isinstance(decision, dict)
        ],
        "preferences": {
            "avoided_ingredients": preferences.get("avoidedIngredients") or [],
            "preferred_ingredients": preferences.get("preferredIngredients") or [],
            "dietary_profile": preferences.get("dietaryProfile"),
            "strictness": preferences.get("strictness") or "flexible",
        },
    }
    if "scanCount" in legacy:
        history["scan_count"] = legacy["scanCount"]
    if "lastScanDate" in legacy:
        history["last_scan_date"] = legacy["lastScanDate"]
    return {
        "history": history,
        "last_sync": payload.get("lastSync"),
        "schema_version": SCHEMA_VERSION,
    }


def _with_defaults(payload: dict[str, object]) -> dict[str, object]:
    migrated = dict(payload)
    history = migrated.get("history")
    if not isinstance(history, dict):
        raise ValueError("Stored history is missing its history object")
    history = dict(history)
    decisions = history.get("decisions")
    if not isinstance(decisions, list):
        decisions = []
        history["decisions"] = decisions
    if history.get("preferences") is None:
        history["preferences"] = Preferences().model_dump()
    stored_count = history.get("scan_count")
    if stored_count is not None and stored_count != len(decisions):
        _logger.warning(
            "Stored scan count %s disagrees with %s decisions; using decisions",
            stored_count,
            len(decisions),
        )
    history["scan_count"] = len(decisions)
    if migrated.get("last_sync") is None:
        migrated["last_sync"] = _utcnow().isoformat()
    if history.get("last_scan_date") is None:
        history["last_scan_date"] = (
            decisions[-1].get("timestamp")
            if decisions and isinstance(decisions[-1], dict)
            else migrated["last_sync"]
        )
    migrated["history"] = history
    migrated["schema_version"] = SCHEMA_VERSION
    return migrated
