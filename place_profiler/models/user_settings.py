"""
UserSettings model - Explicit preferences a user configured.

Every preference field is optional; a missing field means "no explicit
preference" and never blocks profile construction.
"""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .place import AccessibilityInfo, CrowdLevel


GroupSize = Literal['small', 'medium', 'large', 'any']


class UserSettings(BaseModel):
    """User id plus explicit preference fields."""

    user_id: str
    preferred_crowd_level: Optional[CrowdLevel] = None
    max_wait_time: Optional[Decimal] = None        # minutes
    max_travel_distance: Optional[Decimal] = None  # km
    accessibility_needs: AccessibilityInfo = Field(default_factory=AccessibilityInfo)
    group_size: Optional[GroupSize] = None

    model_config = {"frozen": True}
