"""
Acceptance predictor for generated suggestions.

Starts from the user's historical acceptance rate and adjusts it for how
well the suggestion matches the profile. Deterministic unless jitter is
explicitly configured, and jitter is always seedable.
"""

import random
from decimal import Decimal
from typing import Optional

from place_profiler.models.suggestion import Suggestion
from place_profiler.models.user_profile import UserProfile
from place_profiler.utils.constants import (
    ACCEPT_CATEGORY_MATCH,
    ACCEPT_CROWD_MATCH,
    ACCEPT_TIME_WEIGHT,
    ACCEPT_WAIT_EXCEEDED,
    ACCEPT_WAIT_OK,
)
from .score_breakdown import ScoreBreakdown, clamp


class AcceptancePredictor:
    """
    Predictor for suggestion acceptance probability.

    Example usage:
        predictor = AcceptancePredictor()
        probability = predictor.predict_acceptance(suggestion, profile)

        # reproducible variance for simulations
        predictor = AcceptancePredictor(jitter=Decimal('0.05'), seed=42)
    """

    def __init__(self, jitter: Decimal = Decimal('0'), seed: Optional[int] = None) -> None:
        """
        Initialize predictor.

        Args:
            jitter: Half-width of uniform noise added before clamping.
                    Zero (the default) disables noise entirely.
            seed: Seed for the noise generator
        """
        if jitter < Decimal('0'):
            raise ValueError(f"jitter cannot be negative: {jitter}")
        self.jitter = Decimal(jitter)
        self._rng = random.Random(seed)

    def breakdown(self, suggestion: Suggestion, profile: UserProfile) -> ScoreBreakdown:
        """
        Calculate each factor's contribution.

        Factors:
        - base: historical suggestion acceptance rate
        - category: +0.2 if the place category is preferred
        - crowd_level: +0.15 if the estimated crowd level is preferred
        - time_of_day: time_preference(recommended hour) * 0.2
        - wait_time: +0.1 if within max wait, else -0.2
        """
        preferences = profile.preferences

        category = (
            ACCEPT_CATEGORY_MATCH
            if suggestion.place.category in preferences.preferred_categories
            else Decimal('0')
        )
        crowd_level = (
            ACCEPT_CROWD_MATCH
            if suggestion.estimated_crowd_level in preferences.preferred_crowd_levels
            else Decimal('0')
        )
        time_of_day = (
            preferences.time_preference(suggestion.recommended_time.hour)
            * ACCEPT_TIME_WEIGHT
        )
        wait_time = (
            ACCEPT_WAIT_OK
            if suggestion.estimated_wait_time <= preferences.max_wait_time
            else ACCEPT_WAIT_EXCEEDED
        )

        return ScoreBreakdown(
            base=profile.behaviors.suggestion_acceptance_rate,
            category=category,
            crowd_level=crowd_level,
            time_of_day=time_of_day,
            wait_time=wait_time,
        )

    def predict_acceptance(self, suggestion: Suggestion, profile: UserProfile) -> Decimal:
        """
        Estimate the probability the user accepts the suggestion.

        Returns:
            Probability clamped to [0, 1]
        """
        raw = self.breakdown(suggestion, profile).raw_total
        if self.jitter:
            noise = Decimal(str(self._rng.uniform(-1.0, 1.0))) * self.jitter
            raw += noise
        return clamp(raw)


def predict_acceptance(suggestion: Suggestion, profile: UserProfile) -> Decimal:
    """
    Predict acceptance without jitter.

    Convenience function using default predictor.
    """
    predictor = AcceptancePredictor()
    return predictor.predict_acceptance(suggestion, profile)
