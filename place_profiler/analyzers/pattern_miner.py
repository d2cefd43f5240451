"""
Pattern miner for coarse recurring patterns in activity history.

Routine and seasonal patterns are mined from timestamps. Social and
mobility patterns are mostly driven by explicit settings and constants:
history carries no companion or location data to mine them from.
"""

from collections import OrderedDict
from decimal import Decimal
from typing import List, Sequence, Tuple

from place_profiler.models.activity_record import ActivityRecord
from place_profiler.models.pattern_profile import (
    MobilityPattern,
    PatternProfile,
    RoutinePattern,
    SeasonalPreference,
    SocialPattern,
)
from place_profiler.models.place import PlaceCategory
from place_profiler.models.preference_profile import TimeSlot
from place_profiler.models.user_settings import UserSettings
from place_profiler.utils.constants import (
    DEFAULT_GROUP_SIZE,
    DEFAULT_MAX_TRAVEL_DISTANCE,
    DEFAULT_TRANSPORT_MODES,
    DEFAULT_TRAVEL_DISTANCE,
    GROUP_SIZES,
    MAX_ROUTINE_PATTERNS,
    MIN_ROUTINE_OCCURRENCES,
    REPORTING_WINDOW_WEEKS,
    ROUTINE_SLOT_WEIGHT,
    SEASONS_BY_MONTH,
    SOCIAL_CATEGORIES,
)
from place_profiler.utils.ranking import count_first_seen, top_keys


SOCIAL_CATEGORY_SET = frozenset(PlaceCategory(c) for c in SOCIAL_CATEGORIES)


class PatternMiner:
    """
    Miner for routine, seasonal, social and mobility patterns.

    Example usage:
        miner = PatternMiner()
        patterns = miner.mine(settings, history)
    """

    def mine(
        self,
        settings: UserSettings,
        history: Sequence[ActivityRecord],
    ) -> PatternProfile:
        """
        Mine all pattern families.

        Args:
            settings: Explicit user settings
            history: Activity records

        Returns:
            PatternProfile (no routines or seasons for empty history)
        """
        return PatternProfile(
            routine_patterns=tuple(self._routine_patterns(history)),
            seasonal_preferences=tuple(self._seasonal_preferences(history)),
            social_patterns=self._social_patterns(settings, history),
            mobility_patterns=self._mobility_patterns(settings),
        )

    def _routine_patterns(self, history: Sequence[ActivityRecord]) -> List[RoutinePattern]:
        """
        Find recurring (category, day type, hour) combinations.

        A combination seen at least MIN_ROUTINE_OCCURRENCES times becomes a
        routine. frequency is per week over the assumed 4-week window;
        confidence is the routine's share of that category's activity.
        """
        if not history:
            return []

        category_counts = count_first_seen(r.category for r in history)
        slot_counts = count_first_seen(
            (r.category, self._day_type(r), r.hour) for r in history
        )

        recurring = OrderedDict(
            (key, count) for key, count in slot_counts.items()
            if count >= MIN_ROUTINE_OCCURRENCES
        )

        patterns = []
        for key in top_keys(recurring, MAX_ROUTINE_PATTERNS):
            category, day_type, hour = key
            count = recurring[key]
            confidence = min(
                Decimal(count) / Decimal(category_counts[category]),
                Decimal('1'),
            )
            patterns.append(RoutinePattern(
                name=f"{day_type}_{category.value}_{hour:02d}",
                description=f"{day_type.capitalize()} {category.value} around {hour:02d}:00",
                frequency=Decimal(count) / Decimal(REPORTING_WINDOW_WEEKS),
                time_pattern=TimeSlot.from_hours(hour, hour + 1, ROUTINE_SLOT_WEIGHT),
                place_categories=(category,),
                confidence=confidence,
            ))

        return patterns

    def _seasonal_preferences(self, history: Sequence[ActivityRecord]) -> List[SeasonalPreference]:
        """
        Bucket activity by season.

        Seasons appear in first-seen order; categories are distinct and
        first-seen within each season.
        """
        if not history:
            return []

        by_season: "OrderedDict[str, List[PlaceCategory]]" = OrderedDict()
        for record in history:
            season = SEASONS_BY_MONTH[record.timestamp.month]
            by_season.setdefault(season, []).append(record.category)

        total = Decimal(len(history))
        return [
            SeasonalPreference(
                season=season,
                preferred_categories=tuple(dict.fromkeys(categories)),
                activity_level=Decimal(len(categories)) / total,
            )
            for season, categories in by_season.items()
        ]

    def _social_patterns(
        self,
        settings: UserSettings,
        history: Sequence[ActivityRecord],
    ) -> SocialPattern:
        """
        Social habits.

        Group size comes from settings; frequency is the share of activity
        at social categories (restaurant, entertainment, shopping).
        """
        group_size = GROUP_SIZES.get(settings.group_size, DEFAULT_GROUP_SIZE)

        if not history:
            return SocialPattern(preferred_group_size=group_size)

        social = [r.category for r in history if r.category in SOCIAL_CATEGORY_SET]
        frequency = Decimal(len(social)) / Decimal(len(history))

        observed: Tuple[PlaceCategory, ...] = tuple(
            top_keys(count_first_seen(social), len(SOCIAL_CATEGORY_SET))
        )
        if not observed:
            return SocialPattern(
                preferred_group_size=group_size,
                social_activity_frequency=frequency,
            )

        return SocialPattern(
            preferred_group_size=group_size,
            social_activity_frequency=frequency,
            preferred_social_categories=observed,
        )

    def _mobility_patterns(self, settings: UserSettings) -> MobilityPattern:
        """
        Mobility habits.

        History has no coordinates, so distance and transport modes are
        constants; the radius follows the user's travel limit.
        """
        radius = (
            settings.max_travel_distance
            if settings.max_travel_distance is not None
            else DEFAULT_MAX_TRAVEL_DISTANCE
        )
        return MobilityPattern(
            average_travel_distance=DEFAULT_TRAVEL_DISTANCE,
            preferred_transport_modes=tuple(DEFAULT_TRANSPORT_MODES),
            mobility_radius=radius,
        )

    @staticmethod
    def _day_type(record: ActivityRecord) -> str:
        return 'weekend' if record.weekday >= 5 else 'weekday'


def mine_patterns(
    settings: UserSettings,
    history: Sequence[ActivityRecord],
) -> PatternProfile:
    """
    Mine patterns from settings and history.

    Convenience function using default miner.
    """
    miner = PatternMiner()
    return miner.mine(settings, history)
