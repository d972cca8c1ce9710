"""User decision history and learned preferences."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DietaryProfile(str, Enum):
    """Diet a product is checked against."""

    DIABETIC = "DIABETIC"
    VEGAN = "VEGAN"
    PALEO = "PALEO"


class ExperienceTier(str, Enum):
    """How familiar the user is with the scanner."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


Choice = Literal["accepted", "rejected"]
Strictness = Literal["strict", "flexible"]


class Decision(BaseModel):
    """A user's accept/reject decision about a scanned product."""

    model_config = ConfigDict(frozen=True)

    product_type: str
    choice: Choice
    reason: str | None = None
    timestamp: datetime


class Preferences(BaseModel):
    """Preferences learned from decisions."""

    avoided_ingredients: list[str] = Field(default_factory=list)
    preferred_ingredients: list[str] = Field(default_factory=list)
    dietary_profile: DietaryProfile | None = None
    strictness: Strictness = "flexible"


class UserHistory(BaseModel):
    """Decision history for a single user."""

    scan_count: int = Field(default=0, ge=0)
    decisions: list[Decision] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    last_scan_date: datetime


class StoredHistory(BaseModel):
    """Versioned blob written to the persistence slot."""

    history: UserHistory
    last_sync: datetime
    schema_version: str
