"""
Preference analyzer for deriving user preferences from activity history.

Combines history-derived signals (categories, crowd levels, active hours)
with explicit settings (avoidance factors, accessibility, limits).
"""

from decimal import Decimal
from typing import FrozenSet, List, Sequence

from place_profiler.models.activity_record import ActivityRecord
from place_profiler.models.place import CrowdLevel, PlaceCategory
from place_profiler.models.preference_profile import (
    AvoidanceFactor,
    PreferenceProfile,
    TimeSlot,
)
from place_profiler.models.user_settings import UserSettings
from place_profiler.utils.constants import (
    CROWD_AVOIDANCE_IMPORTANCE,
    DEFAULT_MAX_TRAVEL_DISTANCE,
    DEFAULT_MAX_WAIT_TIME,
    DEFAULT_TIME_SLOT_WEIGHT,
    MAX_ACTIVE_HOURS,
    MAX_PREFERRED_CATEGORIES,
    MAX_PREFERRED_CROWD_LEVELS,
    WAIT_TIME_AVOIDANCE_IMPORTANCE,
)
from place_profiler.utils.ranking import count_first_seen, top_keys


class PreferenceAnalyzer:
    """
    Analyzer for category, crowd-level and time preferences.

    Example usage:
        analyzer = PreferenceAnalyzer()
        preferences = analyzer.analyze(settings, history)
    """

    def analyze(
        self,
        settings: UserSettings,
        history: Sequence[ActivityRecord],
    ) -> PreferenceProfile:
        """
        Build the preference profile.

        Args:
            settings: Explicit user settings (may be mostly empty)
            history: Activity records, in the order they were fetched

        Returns:
            PreferenceProfile; defaults throughout when history is empty
        """
        return PreferenceProfile(
            preferred_categories=tuple(self._preferred_categories(history)),
            preferred_crowd_levels=tuple(self._preferred_crowd_levels(history)),
            preferred_time_slots=tuple(self._preferred_time_slots(history)),
            avoidance_factors=tuple(self._avoidance_factors(settings)),
            accessibility_requirements=self._accessibility_requirements(settings),
            max_travel_distance=(
                settings.max_travel_distance
                if settings.max_travel_distance is not None
                else DEFAULT_MAX_TRAVEL_DISTANCE
            ),
            max_wait_time=(
                settings.max_wait_time
                if settings.max_wait_time is not None
                else DEFAULT_MAX_WAIT_TIME
            ),
        )

    def _preferred_categories(self, history: Sequence[ActivityRecord]) -> List[PlaceCategory]:
        """Top 5 categories by count, ties in first-seen order."""
        counts = count_first_seen(r.category for r in history)
        return top_keys(counts, MAX_PREFERRED_CATEGORIES)

    def _preferred_crowd_levels(self, history: Sequence[ActivityRecord]) -> List[CrowdLevel]:
        """Top 2 reported crowd levels by count."""
        counts = count_first_seen(
            r.crowd_level for r in history if r.crowd_level is not None
        )
        return top_keys(counts, MAX_PREFERRED_CROWD_LEVELS)

    def _preferred_time_slots(self, history: Sequence[ActivityRecord]) -> List[TimeSlot]:
        """
        Mine preferred time slots from the hour-of-day histogram.

        The 6 most active hours are sorted ascending and merged into
        maximal runs (h joins the current run iff h == run end + 1).
        Each run becomes one slot [start, last + 1) with the default weight.
        """
        counts = count_first_seen(r.hour for r in history)
        active_hours = sorted(top_keys(counts, MAX_ACTIVE_HOURS))

        slots: List[TimeSlot] = []
        run_start = run_end = None

        for hour in active_hours:
            if run_start is None:
                run_start = run_end = hour
            elif hour == run_end + 1:
                run_end = hour
            else:
                slots.append(TimeSlot.from_hours(run_start, run_end + 1, DEFAULT_TIME_SLOT_WEIGHT))
                run_start = run_end = hour

        if run_start is not None:
            slots.append(TimeSlot.from_hours(run_start, run_end + 1, DEFAULT_TIME_SLOT_WEIGHT))

        return slots

    def _avoidance_factors(self, settings: UserSettings) -> List[AvoidanceFactor]:
        """
        Build avoidance factors from explicit settings only.

        History does not contribute yet.
        """
        factors = []

        if settings.preferred_crowd_level is not None:
            factors.append(AvoidanceFactor(
                type='crowd',
                threshold=settings.preferred_crowd_level.numeric,
                importance=CROWD_AVOIDANCE_IMPORTANCE,
            ))

        # An explicit 0 is a real limit, not an unset one
        if settings.max_wait_time is not None:
            factors.append(AvoidanceFactor(
                type='wait_time',
                threshold=Decimal(settings.max_wait_time),
                importance=WAIT_TIME_AVOIDANCE_IMPORTANCE,
            ))

        return factors

    def _accessibility_requirements(self, settings: UserSettings) -> FrozenSet[str]:
        """Capability tags explicitly requested in settings."""
        return settings.accessibility_needs.tags


def analyze_preferences(
    settings: UserSettings,
    history: Sequence[ActivityRecord],
) -> PreferenceProfile:
    """
    Derive preferences from settings and history.

    Convenience function using default analyzer.
    """
    analyzer = PreferenceAnalyzer()
    return analyzer.analyze(settings, history)
