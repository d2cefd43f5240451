"""
PreferenceProfile model - What a user prefers and avoids.

Derived from activity history plus explicit settings. Immutable; the
profile builder produces a new instance on every rebuild.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Any, FrozenSet, Tuple

from place_profiler.utils.constants import (
    DEFAULT_MAX_TRAVEL_DISTANCE,
    DEFAULT_MAX_WAIT_TIME,
    DEFAULT_TIME_PREFERENCE,
    MAX_PREFERRED_CATEGORIES,
    MAX_PREFERRED_CROWD_LEVELS,
)
from place_profiler.utils.date_parser import format_hour, parse_hour
from .place import CrowdLevel, PlaceCategory


AVOIDANCE_TYPES = {'crowd', 'noise', 'wait_time', 'distance', 'accessibility'}


def _check_unit_range(name: str, value: Decimal) -> None:
    if value < Decimal('0') or value > Decimal('1'):
        raise ValueError(f"{name} must be between 0 and 1, got: {value}")


@dataclass(frozen=True)
class TimeSlot:
    """
    Contiguous hour-of-day range with a preference weight.

    start and end are "HH:00" strings; end is exclusive and may be "24:00".
    """

    start: str
    end: str
    weight: Decimal

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"Invalid time slot {self.start}-{self.end}"
            )
        _check_unit_range('weight', self.weight)

    @property
    def start_hour(self) -> int:
        return parse_hour(self.start)

    @property
    def end_hour(self) -> int:
        return parse_hour(self.end)

    def contains(self, hour: int) -> bool:
        """True if hour falls in [start, end)."""
        return self.start_hour <= hour < self.end_hour

    @classmethod
    def from_hours(cls, start_hour: int, end_hour: int, weight: Decimal) -> 'TimeSlot':
        return cls(start=format_hour(start_hour), end=format_hour(end_hour), weight=weight)

    def to_dict(self) -> Dict[str, str]:
        return {'start': self.start, 'end': self.end, 'weight': str(self.weight)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TimeSlot':
        return cls(
            start=data['start'],
            end=data['end'],
            weight=Decimal(str(data['weight'])),
        )


@dataclass(frozen=True)
class AvoidanceFactor:
    """Something the user wants to avoid above a threshold."""

    type: str
    threshold: Decimal
    importance: Decimal

    def __post_init__(self) -> None:
        if self.type not in AVOIDANCE_TYPES:
            raise ValueError(
                f"Invalid avoidance type '{self.type}'. Must be one of: {sorted(AVOIDANCE_TYPES)}"
            )
        _check_unit_range('importance', self.importance)

    def to_dict(self) -> Dict[str, str]:
        return {
            'type': self.type,
            'threshold': str(self.threshold),
            'importance': str(self.importance),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AvoidanceFactor':
        return cls(
            type=data['type'],
            threshold=Decimal(str(data['threshold'])),
            importance=Decimal(str(data['importance'])),
        )


@dataclass(frozen=True)
class PreferenceProfile:
    """
    User preferences derived from history and explicit settings.

    Attributes:
        preferred_categories: Up to 5 categories, most frequent first
        preferred_crowd_levels: Up to 2 crowd levels, most frequent first
        preferred_time_slots: Non-overlapping slots sorted by start
        avoidance_factors: Factors from explicit settings
        accessibility_requirements: Capability tags the user needs
        max_travel_distance: km
        max_wait_time: minutes
    """

    preferred_categories: Tuple[PlaceCategory, ...] = ()
    preferred_crowd_levels: Tuple[CrowdLevel, ...] = ()
    preferred_time_slots: Tuple[TimeSlot, ...] = ()
    avoidance_factors: Tuple[AvoidanceFactor, ...] = ()
    accessibility_requirements: FrozenSet[str] = field(default_factory=frozenset)
    max_travel_distance: Decimal = DEFAULT_MAX_TRAVEL_DISTANCE
    max_wait_time: Decimal = DEFAULT_MAX_WAIT_TIME

    def __post_init__(self) -> None:
        """
        Validate list limits and time-slot ordering.

        Raises:
            ValueError: If a limit is exceeded or slots overlap
        """
        object.__setattr__(self, 'preferred_categories', tuple(self.preferred_categories))
        object.__setattr__(self, 'preferred_crowd_levels', tuple(self.preferred_crowd_levels))
        object.__setattr__(self, 'preferred_time_slots', tuple(self.preferred_time_slots))
        object.__setattr__(self, 'avoidance_factors', tuple(self.avoidance_factors))
        object.__setattr__(
            self, 'accessibility_requirements', frozenset(self.accessibility_requirements)
        )

        if len(self.preferred_categories) > MAX_PREFERRED_CATEGORIES:
            raise ValueError(
                f"At most {MAX_PREFERRED_CATEGORIES} preferred categories, "
                f"got: {len(self.preferred_categories)}"
            )
        if len(self.preferred_crowd_levels) > MAX_PREFERRED_CROWD_LEVELS:
            raise ValueError(
                f"At most {MAX_PREFERRED_CROWD_LEVELS} preferred crowd levels, "
                f"got: {len(self.preferred_crowd_levels)}"
            )

        for previous, current in zip(self.preferred_time_slots, self.preferred_time_slots[1:]):
            if current.start_hour < previous.end_hour:
                raise ValueError(
                    f"Time slots must be sorted and non-overlapping: "
                    f"{previous.start}-{previous.end} and {current.start}-{current.end}"
                )

    def time_preference(self, hour: int) -> Decimal:
        """
        Weight of the slot containing hour.

        Returns DEFAULT_TIME_PREFERENCE (0.3) if no slot matches.
        """
        for slot in self.preferred_time_slots:
            if slot.contains(hour):
                return slot.weight
        return DEFAULT_TIME_PREFERENCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'preferred_categories': [c.value for c in self.preferred_categories],
            'preferred_crowd_levels': [c.value for c in self.preferred_crowd_levels],
            'preferred_time_slots': [s.to_dict() for s in self.preferred_time_slots],
            'avoidance_factors': [f.to_dict() for f in self.avoidance_factors],
            'accessibility_requirements': sorted(self.accessibility_requirements),
            'max_travel_distance': str(self.max_travel_distance),
            'max_wait_time': str(self.max_wait_time),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PreferenceProfile':
        return cls(
            preferred_categories=tuple(PlaceCategory(c) for c in data['preferred_categories']),
            preferred_crowd_levels=tuple(CrowdLevel(c) for c in data['preferred_crowd_levels']),
            preferred_time_slots=tuple(
                TimeSlot.from_dict(s) for s in data['preferred_time_slots']
            ),
            avoidance_factors=tuple(
                AvoidanceFactor.from_dict(f) for f in data['avoidance_factors']
            ),
            accessibility_requirements=frozenset(data['accessibility_requirements']),
            max_travel_distance=Decimal(str(data['max_travel_distance'])),
            max_wait_time=Decimal(str(data['max_wait_time'])),
        )

    @classmethod
    def empty(cls) -> 'PreferenceProfile':
        """Preferences with no history and no explicit settings."""
        return cls()
