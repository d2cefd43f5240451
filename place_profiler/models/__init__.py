"""Data models for Place Profiler."""

from .place import PlaceCategory, CrowdLevel, AccessibilityInfo, Place
from .activity_record import ActivityRecord, RecordKind, ReportType
from .user_settings import UserSettings
from .suggestion import Suggestion, AlternativeOption
from .preference_profile import TimeSlot, AvoidanceFactor, PreferenceProfile
from .behavior_profile import ReportingActivity, BehaviorProfile
from .pattern_profile import (
    RoutinePattern,
    SeasonalPreference,
    SocialPattern,
    MobilityPattern,
    PatternProfile,
)
from .user_profile import UserProfile

__all__ = [
    'PlaceCategory',
    'CrowdLevel',
    'AccessibilityInfo',
    'Place',
    'ActivityRecord',
    'RecordKind',
    'ReportType',
    'UserSettings',
    'Suggestion',
    'AlternativeOption',
    'TimeSlot',
    'AvoidanceFactor',
    'PreferenceProfile',
    'ReportingActivity',
    'BehaviorProfile',
    'RoutinePattern',
    'SeasonalPreference',
    'SocialPattern',
    'MobilityPattern',
    'PatternProfile',
    'UserProfile',
]
