"""
UserProfile model - Complete user profiling snapshot.

Uses Pydantic v2 for validation. Frozen: a rebuild produces a new snapshot
that replaces the stored one, so readers never see a half-updated profile.
"""

import json
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field

from .behavior_profile import BehaviorProfile
from .pattern_profile import PatternProfile
from .preference_profile import PreferenceProfile


class UserProfile(BaseModel):
    """
    Aggregated preference, behavior and pattern summary for one user.
    """
    user_id: str
    preferences: PreferenceProfile
    behaviors: BehaviorProfile
    patterns: PatternProfile
    last_updated: datetime

    # Number of history records the snapshot was built from
    source_record_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize profile to a JSON-safe dictionary.

        Returns:
            Dictionary representation of the profile
        """
        return {
            'user_id': self.user_id,
            'preferences': self.preferences.to_dict(),
            'behaviors': self.behaviors.to_dict(),
            'patterns': self.patterns.to_dict(),
            'last_updated': self.last_updated.isoformat(),
            'source_record_count': self.source_record_count,
        }

    def to_json(self) -> str:
        """Canonical JSON encoding (sorted keys)."""
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserProfile':
        last_updated = data['last_updated']
        if isinstance(last_updated, str):
            last_updated = datetime.fromisoformat(last_updated)

        return cls(
            user_id=data['user_id'],
            preferences=PreferenceProfile.from_dict(data['preferences']),
            behaviors=BehaviorProfile.from_dict(data['behaviors']),
            patterns=PatternProfile.from_dict(data['patterns']),
            last_updated=last_updated,
            source_record_count=data.get('source_record_count', 0),
        )
