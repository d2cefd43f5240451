"""
Profile builder that orchestrates the analyzers into a UserProfile.

Runs preference, behavior and pattern analysis over the same inputs,
assembles one immutable snapshot and registers it in a ProfileRepository.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from place_profiler.analyzers.behavior_analyzer import BehaviorAnalyzer
from place_profiler.analyzers.pattern_miner import PatternMiner
from place_profiler.analyzers.preference_analyzer import PreferenceAnalyzer
from place_profiler.models.activity_record import ActivityRecord
from place_profiler.models.suggestion import Suggestion
from place_profiler.models.user_profile import UserProfile
from place_profiler.models.user_settings import UserSettings
from place_profiler.storage.profile_repository import ProfileRepository
from place_profiler.utils.constants import PROFILE_EPOCH


logger = logging.getLogger(__name__)


class ProfileBuilder:
    """
    Builder for UserProfile snapshots.

    Deterministic: the same inputs, in the same order, always produce an
    identical profile. last_updated is the reference date when one is
    given, otherwise the latest history timestamp.

    Example usage:
        builder = ProfileBuilder(repository)
        profile = builder.build_user_profile(settings, history, suggestions)
    """

    def __init__(
        self,
        repository: Optional[ProfileRepository] = None,
        reference_date: Optional[datetime] = None,
        preference_analyzer: Optional[PreferenceAnalyzer] = None,
        behavior_analyzer: Optional[BehaviorAnalyzer] = None,
        pattern_miner: Optional[PatternMiner] = None,
    ) -> None:
        """
        Initialize builder.

        Args:
            repository: Registry the built profiles are stored in.
                        Defaults to a fresh in-memory repository.
            reference_date: Timestamp stamped on built profiles.
                          Defaults to the latest history timestamp, or
                          PROFILE_EPOCH for an empty history.
        """
        self.repository = repository if repository is not None else ProfileRepository()
        self.reference_date = reference_date
        self.preference_analyzer = preference_analyzer or PreferenceAnalyzer()
        self.behavior_analyzer = behavior_analyzer or BehaviorAnalyzer()
        self.pattern_miner = pattern_miner or PatternMiner()

    def build_user_profile(
        self,
        settings: UserSettings,
        history: Sequence[ActivityRecord] = (),
        suggestion_history: Sequence[Suggestion] = (),
        reference_date: Optional[datetime] = None,
    ) -> UserProfile:
        """
        Build a profile and register it, replacing any prior snapshot.

        Never fails on empty history: every derived field falls back to its
        default.

        Args:
            settings: User id plus explicit preferences
            history: Activity records (reports and visits)
            suggestion_history: Suggestions previously shown to the user
            reference_date: Overrides the builder's reference_date

        Returns:
            The newly registered UserProfile
        """
        history = list(history)
        suggestion_history = list(suggestion_history)

        logger.debug(
            "Building profile for user %s from %d records and %d suggestions",
            settings.user_id, len(history), len(suggestion_history),
        )

        profile = UserProfile(
            user_id=settings.user_id,
            preferences=self.preference_analyzer.analyze(settings, history),
            behaviors=self.behavior_analyzer.analyze(history, suggestion_history),
            patterns=self.pattern_miner.mine(settings, history),
            last_updated=self._as_of(history, reference_date),
            source_record_count=len(history),
        )

        return self.repository.save(profile)

    def _as_of(
        self,
        history: Sequence[ActivityRecord],
        reference_date: Optional[datetime],
    ) -> datetime:
        if reference_date is not None:
            return reference_date
        if self.reference_date is not None:
            return self.reference_date
        if history:
            return max(r.timestamp for r in history)
        return PROFILE_EPOCH

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Return the registered profile for user_id, or None."""
        return self.repository.get(user_id)


def build_user_profile(
    settings: UserSettings,
    history: Sequence[ActivityRecord] = (),
    suggestion_history: Sequence[Suggestion] = (),
    reference_date: Optional[datetime] = None,
) -> UserProfile:
    """
    Build a profile with a throwaway in-memory registry.

    Convenience function using default builder.
    """
    builder = ProfileBuilder()
    return builder.build_user_profile(settings, history, suggestion_history, reference_date)
