"""
Profiling engine - Entry point for callers of the profiling core.

Wires a ProfileRepository, ProfileBuilder, RecommendationScorer and
AcceptancePredictor together. Every dependency is injectable so tests and
workers can run isolated engines.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from place_profiler.models.activity_record import ActivityRecord
from place_profiler.models.place import Place
from place_profiler.models.suggestion import Suggestion
from place_profiler.models.user_profile import UserProfile
from place_profiler.models.user_settings import UserSettings
from place_profiler.profiling.profile_builder import ProfileBuilder
from place_profiler.scoring.acceptance_predictor import AcceptancePredictor
from place_profiler.scoring.recommendation_scorer import RecommendationScorer
from place_profiler.storage.profile_repository import ProfileRepository
from place_profiler.utils.constants import DEFAULT_ACCEPTANCE_PROBABILITY, DEFAULT_TOP_K


ProfileRef = Union[str, UserProfile]


class ProfilingEngine:
    """
    Facade over profile building, place ranking and acceptance prediction.

    Example usage:
        engine = ProfilingEngine()
        engine.build_profile(settings, history, suggestions)
        top = engine.rank_places(settings.user_id, places, datetime.now())
    """

    def __init__(
        self,
        repository: Optional[ProfileRepository] = None,
        builder: Optional[ProfileBuilder] = None,
        scorer: Optional[RecommendationScorer] = None,
        predictor: Optional[AcceptancePredictor] = None,
    ) -> None:
        if builder is not None and repository is not None and builder.repository is not repository:
            raise ValueError("builder must write to the engine's repository")

        if builder is not None:
            repository = builder.repository
        self.repository = repository if repository is not None else ProfileRepository()
        self.builder = builder or ProfileBuilder(self.repository)
        self.scorer = scorer or RecommendationScorer()
        self.predictor = predictor or AcceptancePredictor()

    def build_profile(
        self,
        settings: UserSettings,
        history: Sequence[ActivityRecord] = (),
        suggestion_history: Sequence[Suggestion] = (),
        reference_date: Optional[datetime] = None,
    ) -> UserProfile:
        """
        Build and register a fresh snapshot for settings.user_id.

        last_updated is reference_date if given, else the builder's
        reference_date, else the latest history timestamp.
        """
        return self.builder.build_user_profile(
            settings, history, suggestion_history, reference_date,
        )

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self.repository.get(user_id)

    def _resolve(self, profile_ref: ProfileRef) -> Optional[UserProfile]:
        if isinstance(profile_ref, UserProfile):
            return profile_ref
        return self.repository.get(profile_ref)

    def rank_places(
        self,
        profile_ref: ProfileRef,
        places: Sequence[Place],
        now: Optional[datetime] = None,
        k: int = DEFAULT_TOP_K,
    ) -> List[Place]:
        """
        Rank candidate places for a user.

        Args:
            profile_ref: User id or UserProfile
            places: Candidate places
            now: Point in time to score for (defaults to datetime.now())
            k: Maximum number of places to return

        Returns:
            Up to k places, best first; empty if the user has no profile
        """
        profile = self._resolve(profile_ref)
        if profile is None:
            return []
        return self.scorer.rank_places(places, profile, now or datetime.now(), k)

    def predict_acceptance(self, suggestion: Suggestion, profile_ref: ProfileRef) -> Decimal:
        """
        Predict acceptance probability of a suggestion.

        Returns DEFAULT_ACCEPTANCE_PROBABILITY (0.5) if the user has no
        profile.
        """
        profile = self._resolve(profile_ref)
        if profile is None:
            return DEFAULT_ACCEPTANCE_PROBABILITY
        return self.predictor.predict_acceptance(suggestion, profile)

    def is_stale(
        self,
        user_id: str,
        now: Optional[datetime] = None,
        history_size: Optional[int] = None,
    ) -> bool:
        """See ProfileRepository.is_stale."""
        return self.repository.is_stale(user_id, now, history_size)


_default_engine: Optional[ProfilingEngine] = None


def get_default_engine() -> ProfilingEngine:
    """Lazily created engine shared by the module-level functions."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ProfilingEngine()
    return _default_engine


def build_profile(
    settings: UserSettings,
    history: Sequence[ActivityRecord] = (),
    suggestion_history: Sequence[Suggestion] = (),
    reference_date: Optional[datetime] = None,
) -> UserProfile:
    """
    Build and register a profile.

    Convenience function using the default engine.
    """
    return get_default_engine().build_profile(
        settings, history, suggestion_history, reference_date,
    )


def rank_places(
    profile_ref: ProfileRef,
    places: Sequence[Place],
    now: Optional[datetime] = None,
    k: int = DEFAULT_TOP_K,
) -> List[Place]:
    """
    Rank places for a user id or profile.

    Convenience function using the default engine.
    """
    return get_default_engine().rank_places(profile_ref, places, now, k)


def predict_acceptance(suggestion: Suggestion, profile_ref: ProfileRef) -> Decimal:
    """
    Predict acceptance for a user id or profile.

    Convenience function using the default engine.
    """
    return get_default_engine().predict_acceptance(suggestion, profile_ref)
