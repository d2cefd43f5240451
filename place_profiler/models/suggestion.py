"""
Suggestion model - A generated place/time recommendation.

Suggestions are produced outside the engine. The engine reads them to
predict acceptance and, when user_action is recorded, to measure the
historical acceptance rate.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .place import CrowdLevel, Place


UserAction = Literal['accepted', 'rejected', 'ignored']


class AlternativeOption(BaseModel):
    place: Place
    recommended_time: datetime
    wait_time: Decimal
    crowd_level: CrowdLevel

    model_config = {"frozen": True}


class Suggestion(BaseModel):
    """
    Generated recommendation of a place and a time.

    Attributes:
        place: Suggested place
        recommended_time: Suggested visit time
        estimated_crowd_level: Expected crowd level at that time
        estimated_wait_time: Expected wait in minutes
        alternative_options: Other place/time options offered alongside
        confidence: Generator's own confidence (0-1)
        user_action: Outcome, if the user responded
    """

    id: Optional[str] = None
    place: Place
    recommended_time: datetime
    estimated_crowd_level: CrowdLevel
    estimated_wait_time: Decimal
    alternative_options: List[AlternativeOption] = Field(default_factory=list)
    confidence: Decimal = Field(default=Decimal('0.5'), ge=0, le=1)
    user_action: Optional[UserAction] = None

    model_config = {"frozen": True}

    @property
    def has_outcome(self) -> bool:
        return self.user_action is not None

    @property
    def was_accepted(self) -> bool:
        return self.user_action == 'accepted'
