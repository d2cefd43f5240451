"""
Behavior analyzer for calculating statistics from activity history.

Calculates visit frequency, reporting reliability, suggestion acceptance
and activity-time statistics.
"""

from decimal import Decimal
from typing import Dict, List, Sequence

from place_profiler.models.activity_record import ActivityRecord, ReportType
from place_profiler.models.behavior_profile import BehaviorProfile, ReportingActivity
from place_profiler.models.place import PlaceCategory
from place_profiler.models.suggestion import Suggestion
from place_profiler.utils.constants import (
    DEFAULT_ACCEPTANCE_RATE,
    DEFAULT_VISIT_DURATIONS,
    MAX_ACTIVE_HOURS,
    MAX_PREFERRED_DAYS,
    REPORTING_WINDOW_WEEKS,
)
from place_profiler.utils.ranking import count_first_seen, top_keys


class BehaviorAnalyzer:
    """
    Calculator for behavioral statistics.

    Example usage:
        analyzer = BehaviorAnalyzer()
        behaviors = analyzer.analyze(history, suggestion_history)
    """

    def analyze(
        self,
        history: Sequence[ActivityRecord],
        suggestion_history: Sequence[Suggestion] = (),
    ) -> BehaviorProfile:
        """
        Calculate all behavioral statistics.

        Args:
            history: Activity records
            suggestion_history: Suggestions previously shown to the user

        Returns:
            BehaviorProfile with all fields populated
        """
        return BehaviorProfile(
            visit_frequency=self._visit_frequency(history),
            average_visit_duration=self._average_visit_duration(),
            reporting_activity=self._reporting_activity(history),
            suggestion_acceptance_rate=self._acceptance_rate(suggestion_history),
            peak_activity_hours=tuple(self._peak_activity_hours(history)),
            preferred_days=tuple(self._preferred_days(history)),
        )

    def _visit_frequency(self, history: Sequence[ActivityRecord]) -> Dict[PlaceCategory, Decimal]:
        """
        Relative frequency per category.

        Formula: count(category) / len(history). Empty for empty history.
        """
        if not history:
            return {}

        total = Decimal(len(history))
        counts = count_first_seen(r.category for r in history)
        return {
            category: Decimal(count) / total
            for category, count in counts.items()
        }

    def _average_visit_duration(self) -> Dict[PlaceCategory, Decimal]:
        """
        Average minutes per category.

        Static table: history carries no visit durations yet.
        """
        return {
            PlaceCategory(category): minutes
            for category, minutes in DEFAULT_VISIT_DURATIONS.items()
        }

    def _reporting_activity(self, history: Sequence[ActivityRecord]) -> ReportingActivity:
        """
        Reporting statistics.

        report_frequency assumes the history spans REPORTING_WINDOW_WEEKS
        (4) weeks; it is not derived from timestamps.
        """
        total = len(history)
        verified = sum(1 for r in history if r.verified)
        accuracy = Decimal(verified) / Decimal(total) if total else Decimal('0')

        report_types: List[ReportType] = list(dict.fromkeys(
            r.report_type for r in history if r.report_type is not None
        ))

        return ReportingActivity(
            total_reports=total,
            accuracy_score=accuracy,
            report_frequency=Decimal(total) / Decimal(REPORTING_WINDOW_WEEKS),
            preferred_report_types=tuple(report_types),
        )

    def _acceptance_rate(self, suggestion_history: Sequence[Suggestion]) -> Decimal:
        """
        Share of answered suggestions that were accepted.

        Falls back to DEFAULT_ACCEPTANCE_RATE (0.7) when no suggestion has a
        recorded outcome. That value is a placeholder, not a measurement.
        """
        answered = [s for s in suggestion_history if s.has_outcome]
        if not answered:
            return DEFAULT_ACCEPTANCE_RATE

        accepted = sum(1 for s in answered if s.was_accepted)
        return Decimal(accepted) / Decimal(len(answered))

    def _peak_activity_hours(self, history: Sequence[ActivityRecord]) -> List[int]:
        """Top 6 hours of day, most active first."""
        return top_keys(count_first_seen(r.hour for r in history), MAX_ACTIVE_HOURS)

    def _preferred_days(self, history: Sequence[ActivityRecord]) -> List[int]:
        """Top 4 weekdays (Monday=0), most active first."""
        return top_keys(count_first_seen(r.weekday for r in history), MAX_PREFERRED_DAYS)


def analyze_behavior(
    history: Sequence[ActivityRecord],
    suggestion_history: Sequence[Suggestion] = (),
) -> BehaviorProfile:
    """
    Calculate behavioral statistics from history.

    Convenience function using default analyzer.
    """
    analyzer = BehaviorAnalyzer()
    return analyzer.analyze(history, suggestion_history)
