"""
Place model - Candidate place as supplied by the surrounding application.

Uses Pydantic v2 for validation. The engine only reads places; it never
mutates or persists them.
"""

from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field

from place_profiler.utils.constants import ACCESSIBILITY_TAGS, CROWD_LEVEL_VALUES


class PlaceCategory(str, Enum):
    """Place classification."""

    RESTAURANT = 'restaurant'
    HOSPITAL = 'hospital'
    BANK = 'bank'
    GOVERNMENT = 'government'
    SHOPPING = 'shopping'
    TRANSPORT = 'transport'
    EDUCATION = 'education'
    ENTERTAINMENT = 'entertainment'
    OTHER = 'other'


class CrowdLevel(str, Enum):
    """Ordinal congestion level."""

    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    VERY_HIGH = 'very_high'

    @property
    def numeric(self) -> Decimal:
        """Numeric value in 0.25 steps (LOW=0.25 .. VERY_HIGH=1.0)."""
        return CROWD_LEVEL_VALUES[self.value]


class AccessibilityInfo(BaseModel):
    """
    Accessibility capabilities of a place, or needs of a user.
    """

    wheelchair_accessible: bool = False
    has_elevator: bool = False
    has_ramp: bool = False
    has_accessible_parking: bool = False
    has_accessible_restroom: bool = False

    model_config = {"frozen": True}

    @property
    def tags(self) -> FrozenSet[str]:
        """Capability tags for every flag that is set."""
        return frozenset(
            tag for field_name, tag in ACCESSIBILITY_TAGS.items()
            if getattr(self, field_name)
        )


class Place(BaseModel):
    """
    Candidate place for ranking.

    wait_time is in minutes. It is not range-checked: callers sanitize
    domain values, and scores are clamped regardless.
    """

    id: str
    name: Optional[str] = None
    category: PlaceCategory
    crowd_level: CrowdLevel
    wait_time: Decimal = Decimal('0')
    accessibility: AccessibilityInfo = Field(default_factory=AccessibilityInfo)

    model_config = {"frozen": True}
