"""
PatternProfile model - Coarse recurring patterns in a user's activity.

These summaries are lower-confidence than preferences and behaviors: the
routine and seasonal parts are mined from history, while the social and
mobility parts lean on explicit settings and documented constants.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Any, Tuple

from place_profiler.utils.constants import (
    DEFAULT_GROUP_SIZE,
    DEFAULT_SOCIAL_FREQUENCY,
    DEFAULT_TRANSPORT_MODES,
    DEFAULT_TRAVEL_DISTANCE,
    DEFAULT_MAX_TRAVEL_DISTANCE,
    SOCIAL_CATEGORIES,
    VALID_SEASONS,
)
from .place import PlaceCategory
from .preference_profile import TimeSlot


@dataclass(frozen=True)
class RoutinePattern:
    """
    A recurring (category, day type, hour) habit.

    Attributes:
        name: Short identifier, e.g. "weekday_restaurant_12"
        description: Human-readable summary
        frequency: Occurrences per week
        time_pattern: One-hour slot the routine happens in
        place_categories: Categories involved
        confidence: 0-1, share of the category's activity this routine covers
    """

    name: str
    description: str
    frequency: Decimal
    time_pattern: TimeSlot
    place_categories: Tuple[PlaceCategory, ...]
    confidence: Decimal

    def __post_init__(self) -> None:
        if self.confidence < Decimal('0') or self.confidence > Decimal('1'):
            raise ValueError(
                f"confidence must be between 0 and 1, got: {self.confidence}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'frequency': str(self.frequency),
            'time_pattern': self.time_pattern.to_dict(),
            'place_categories': [c.value for c in self.place_categories],
            'confidence': str(self.confidence),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RoutinePattern':
        return cls(
            name=data['name'],
            description=data['description'],
            frequency=Decimal(str(data['frequency'])),
            time_pattern=TimeSlot.from_dict(data['time_pattern']),
            place_categories=tuple(PlaceCategory(c) for c in data['place_categories']),
            confidence=Decimal(str(data['confidence'])),
        )


@dataclass(frozen=True)
class SeasonalPreference:
    season: str
    preferred_categories: Tuple[PlaceCategory, ...]
    activity_level: Decimal

    def __post_init__(self) -> None:
        if self.season not in VALID_SEASONS:
            raise ValueError(
                f"Invalid season '{self.season}'. Must be one of: {VALID_SEASONS}"
            )
        if self.activity_level < Decimal('0') or self.activity_level > Decimal('1'):
            raise ValueError(
                f"activity_level must be between 0 and 1, got: {self.activity_level}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'preferred_categories': [c.value for c in self.preferred_categories],
            'activity_level': str(self.activity_level),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SeasonalPreference':
        return cls(
            season=data['season'],
            preferred_categories=tuple(
                PlaceCategory(c) for c in data['preferred_categories']
            ),
            activity_level=Decimal(str(data['activity_level'])),
        )


@dataclass(frozen=True)
class SocialPattern:
    preferred_group_size: int = DEFAULT_GROUP_SIZE
    social_activity_frequency: Decimal = DEFAULT_SOCIAL_FREQUENCY
    preferred_social_categories: Tuple[PlaceCategory, ...] = tuple(
        PlaceCategory(c) for c in SOCIAL_CATEGORIES
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'preferred_group_size': self.preferred_group_size,
            'social_activity_frequency': str(self.social_activity_frequency),
            'preferred_social_categories': [
                c.value for c in self.preferred_social_categories
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SocialPattern':
        return cls(
            preferred_group_size=data['preferred_group_size'],
            social_activity_frequency=Decimal(str(data['social_activity_frequency'])),
            preferred_social_categories=tuple(
                PlaceCategory(c) for c in data['preferred_social_categories']
            ),
        )


@dataclass(frozen=True)
class MobilityPattern:
    average_travel_distance: Decimal = DEFAULT_TRAVEL_DISTANCE
    preferred_transport_modes: Tuple[str, ...] = tuple(DEFAULT_TRANSPORT_MODES)
    mobility_radius: Decimal = DEFAULT_MAX_TRAVEL_DISTANCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'average_travel_distance': str(self.average_travel_distance),
            'preferred_transport_modes': list(self.preferred_transport_modes),
            'mobility_radius': str(self.mobility_radius),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MobilityPattern':
        return cls(
            average_travel_distance=Decimal(str(data['average_travel_distance'])),
            preferred_transport_modes=tuple(data['preferred_transport_modes']),
            mobility_radius=Decimal(str(data['mobility_radius'])),
        )


@dataclass(frozen=True)
class PatternProfile:
    """
    Recurring patterns mined from activity history.

    Attributes:
        routine_patterns: Recurring habits, most frequent first
        seasonal_preferences: One entry per season with activity
        social_patterns: Group size and social-category habits
        mobility_patterns: Travel distance and transport habits
    """

    routine_patterns: Tuple[RoutinePattern, ...] = ()
    seasonal_preferences: Tuple[SeasonalPreference, ...] = ()
    social_patterns: SocialPattern = field(default_factory=SocialPattern)
    mobility_patterns: MobilityPattern = field(default_factory=MobilityPattern)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'routine_patterns': [p.to_dict() for p in self.routine_patterns],
            'seasonal_preferences': [p.to_dict() for p in self.seasonal_preferences],
            'social_patterns': self.social_patterns.to_dict(),
            'mobility_patterns': self.mobility_patterns.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PatternProfile':
        return cls(
            routine_patterns=tuple(
                RoutinePattern.from_dict(p) for p in data['routine_patterns']
            ),
            seasonal_preferences=tuple(
                SeasonalPreference.from_dict(p) for p in data['seasonal_preferences']
            ),
            social_patterns=SocialPattern.from_dict(data['social_patterns']),
            mobility_patterns=MobilityPattern.from_dict(data['mobility_patterns']),
        )

    @classmethod
    def empty(cls) -> 'PatternProfile':
        return cls()
