"""
BehaviorProfile model - How a user actually behaves.

Captures visit frequency per category, reporting reliability, suggestion
acceptance and activity-time statistics. All ratios are Decimal in the
0.0-1.0 range.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional, Tuple

from place_profiler.utils.constants import (
    DEFAULT_ACCEPTANCE_RATE,
    MAX_ACTIVE_HOURS,
    MAX_PREFERRED_DAYS,
)
from .activity_record import ReportType
from .place import PlaceCategory


@dataclass(frozen=True)
class ReportingActivity:
    """
    Reporting statistics.

    Attributes:
        total_reports: Number of history records
        accuracy_score: verified / total (0 if none)
        report_frequency: Reports per week over a 4-week window
        preferred_report_types: Distinct report types, first seen first
    """

    total_reports: int = 0
    accuracy_score: Decimal = Decimal('0')
    report_frequency: Decimal = Decimal('0')
    preferred_report_types: Tuple[ReportType, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'preferred_report_types', tuple(self.preferred_report_types))
        if self.total_reports < 0:
            raise ValueError(
                f"total_reports cannot be negative: {self.total_reports}"
            )
        if self.accuracy_score < Decimal('0') or self.accuracy_score > Decimal('1'):
            raise ValueError(
                f"accuracy_score must be between 0 and 1, got: {self.accuracy_score}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_reports': self.total_reports,
            'accuracy_score': str(self.accuracy_score),
            'report_frequency': str(self.report_frequency),
            'preferred_report_types': [t.value for t in self.preferred_report_types],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportingActivity':
        return cls(
            total_reports=data['total_reports'],
            accuracy_score=Decimal(str(data['accuracy_score'])),
            report_frequency=Decimal(str(data['report_frequency'])),
            preferred_report_types=tuple(
                ReportType(t) for t in data['preferred_report_types']
            ),
        )


@dataclass(frozen=True)
class BehaviorProfile:
    """
    Behavioral statistics calculated from a user's activity history.

    Frequency Metrics:
        visit_frequency: Category -> share of history (sums to 1, or empty)
        average_visit_duration: Category -> minutes (static table)

    Reporting Metrics:
        reporting_activity: See ReportingActivity

    Response Metrics:
        suggestion_acceptance_rate: Share of answered suggestions accepted

    Temporal Patterns:
        peak_activity_hours: Up to 6 hours, most active first
        preferred_days: Up to 4 weekdays (Monday=0), most active first
    """

    visit_frequency: Mapping[PlaceCategory, Decimal] = field(default_factory=dict)
    average_visit_duration: Mapping[PlaceCategory, Decimal] = field(default_factory=dict)
    reporting_activity: ReportingActivity = field(default_factory=ReportingActivity)
    suggestion_acceptance_rate: Decimal = DEFAULT_ACCEPTANCE_RATE
    peak_activity_hours: Tuple[int, ...] = ()
    preferred_days: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Freeze containers and validate ranges after initialization."""
        # Read-only views over private copies
        object.__setattr__(self, 'visit_frequency', MappingProxyType(dict(self.visit_frequency)))
        object.__setattr__(
            self, 'average_visit_duration', MappingProxyType(dict(self.average_visit_duration))
        )
        object.__setattr__(self, 'peak_activity_hours', tuple(self.peak_activity_hours))
        object.__setattr__(self, 'preferred_days', tuple(self.preferred_days))

        rate = self.suggestion_acceptance_rate
        if rate < Decimal('0') or rate > Decimal('1'):
            raise ValueError(
                f"suggestion_acceptance_rate must be between 0 and 1, got: {rate}"
            )

        if len(self.peak_activity_hours) > MAX_ACTIVE_HOURS:
            raise ValueError(
                f"At most {MAX_ACTIVE_HOURS} peak hours, got: {len(self.peak_activity_hours)}"
            )
        if any(not 0 <= h <= 23 for h in self.peak_activity_hours):
            raise ValueError(f"Peak hours must be 0-23: {self.peak_activity_hours}")

        if len(self.preferred_days) > MAX_PREFERRED_DAYS:
            raise ValueError(
                f"At most {MAX_PREFERRED_DAYS} preferred days, got: {len(self.preferred_days)}"
            )
        if any(not 0 <= d <= 6 for d in self.preferred_days):
            raise ValueError(f"Preferred days must be 0-6: {self.preferred_days}")

    @property
    def primary_category(self) -> Optional[PlaceCategory]:
        """Most frequently visited category, or None without history."""
        if not self.visit_frequency:
            return None
        return max(self.visit_frequency, key=self.visit_frequency.get)

    @property
    def total_observations(self) -> int:
        return self.reporting_activity.total_reports

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-safe dictionary.

        Decimal values become strings; category keys become their values.
        """
        return {
            'visit_frequency': {
                c.value: str(v) for c, v in self.visit_frequency.items()
            },
            'average_visit_duration': {
                c.value: str(v) for c, v in self.average_visit_duration.items()
            },
            'reporting_activity': self.reporting_activity.to_dict(),
            'suggestion_acceptance_rate': str(self.suggestion_acceptance_rate),
            'peak_activity_hours': list(self.peak_activity_hours),
            'preferred_days': list(self.preferred_days),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BehaviorProfile':
        return cls(
            visit_frequency={
                PlaceCategory(c): Decimal(str(v))
                for c, v in data['visit_frequency'].items()
            },
            average_visit_duration={
                PlaceCategory(c): Decimal(str(v))
                for c, v in data['average_visit_duration'].items()
            },
            reporting_activity=ReportingActivity.from_dict(data['reporting_activity']),
            suggestion_acceptance_rate=Decimal(str(data['suggestion_acceptance_rate'])),
            peak_activity_hours=tuple(data['peak_activity_hours']),
            preferred_days=tuple(data['preferred_days']),
        )

    @classmethod
    def empty(cls) -> 'BehaviorProfile':
        """Behavior with no history: zero frequencies, default acceptance."""
        return cls()
