"""
Recommendation scorer for ranking candidate places against a profile.

Additive heuristic: a base score plus bonuses for matching category,
crowd level, time of day, wait time and accessibility, clamped to [0, 1].
"""

from datetime import datetime
from decimal import Decimal
from typing import FrozenSet, List, Sequence, Tuple

from place_profiler.models.place import Place
from place_profiler.models.user_profile import UserProfile
from place_profiler.utils.constants import (
    DEFAULT_TOP_K,
    SCORE_ACCESSIBILITY_WEIGHT,
    SCORE_BASE,
    SCORE_CATEGORY_MATCH,
    SCORE_CROWD_MATCH,
    SCORE_TIME_WEIGHT,
    SCORE_WAIT_EXCEEDED,
    SCORE_WAIT_OK,
)
from .score_breakdown import ScoreBreakdown


def accessibility_match(place: Place, requirements: FrozenSet[str]) -> Decimal:
    """
    Fraction of required capabilities the place offers.

    Returns 1 when nothing is required.
    """
    if not requirements:
        return Decimal('1')
    offered = place.accessibility.tags
    matches = sum(1 for tag in requirements if tag in offered)
    return Decimal(matches) / Decimal(len(requirements))


class RecommendationScorer:
    """
    Scorer for candidate places.

    Ranking cost is linear in the number of candidates; callers with a
    deadline should bound the candidate list.

    Example usage:
        scorer = RecommendationScorer()
        top = scorer.rank_places(places, profile, datetime.now())
    """

    def score_breakdown(
        self,
        place: Place,
        profile: UserProfile,
        now: datetime,
    ) -> ScoreBreakdown:
        """
        Calculate each factor's contribution.

        Factors:
        - base: 0.5
        - category: +0.3 if among preferred categories
        - crowd_level: +0.2 if among preferred crowd levels
        - time_of_day: time_preference(now.hour) * 0.2
        - wait_time: +0.1 if within max wait, else -0.2
        - accessibility: match fraction * 0.15, only when the user has
          accessibility requirements
        """
        preferences = profile.preferences

        category = (
            SCORE_CATEGORY_MATCH
            if place.category in preferences.preferred_categories
            else Decimal('0')
        )
        crowd_level = (
            SCORE_CROWD_MATCH
            if place.crowd_level in preferences.preferred_crowd_levels
            else Decimal('0')
        )
        time_of_day = preferences.time_preference(now.hour) * SCORE_TIME_WEIGHT
        wait_time = (
            SCORE_WAIT_OK
            if place.wait_time <= preferences.max_wait_time
            else SCORE_WAIT_EXCEEDED
        )

        accessibility = Decimal('0')
        if preferences.accessibility_requirements:
            accessibility = accessibility_match(
                place, preferences.accessibility_requirements
            ) * SCORE_ACCESSIBILITY_WEIGHT

        return ScoreBreakdown(
            base=SCORE_BASE,
            category=category,
            crowd_level=crowd_level,
            time_of_day=time_of_day,
            wait_time=wait_time,
            accessibility=accessibility,
        )

    def score_place(self, place: Place, profile: UserProfile, now: datetime) -> Decimal:
        """
        Score a place for a user at a point in time.

        Returns:
            Score clamped to [0, 1]
        """
        return self.score_breakdown(place, profile, now).score

    def rank_with_scores(
        self,
        places: Sequence[Place],
        profile: UserProfile,
        now: datetime,
        k: int = DEFAULT_TOP_K,
    ) -> List[Tuple[Place, Decimal]]:
        """
        Rank places by score, highest first.

        The sort is stable: equal scores keep input order.

        Returns:
            Up to k (place, score) tuples
        """
        scored = [(place, self.score_place(place, profile, now)) for place in places]
        ranked = sorted(scored, key=lambda x: x[1], reverse=True)
        return ranked[:k]

    def rank_places(
        self,
        places: Sequence[Place],
        profile: UserProfile,
        now: datetime,
        k: int = DEFAULT_TOP_K,
    ) -> List[Place]:
        """Top k places, highest score first."""
        return [place for place, _ in self.rank_with_scores(places, profile, now, k)]


def score_place(place: Place, profile: UserProfile, now: datetime) -> Decimal:
    """
    Score a single place.

    Convenience function using default scorer.
    """
    scorer = RecommendationScorer()
    return scorer.score_place(place, profile, now)


def rank_places(
    places: Sequence[Place],
    profile: UserProfile,
    now: datetime,
    k: int = DEFAULT_TOP_K,
) -> List[Place]:
    """
    Rank places for a profile.

    Convenience function using default scorer.
    """
    scorer = RecommendationScorer()
    return scorer.rank_places(places, profile, now, k)
