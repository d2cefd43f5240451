"""
End-to-end integration tests.

Tests the complete pipeline from history CSV to ranked places and
acceptance predictions.
"""

import json
import pytest
from pathlib import Path
from decimal import Decimal
from datetime import datetime, timedelta

from place_profiler import ProfilingEngine
from place_profiler.models import (
    AccessibilityInfo,
    CrowdLevel,
    Place,
    PlaceCategory,
    ReportType,
    Suggestion,
    UserProfile,
    UserSettings,
)
from place_profiler.parsers import HistoryParser
from place_profiler.profiling import ProfileBuilder
from place_profiler.storage import ProfileRepository


REFERENCE_DATE = datetime(2024, 10, 7, 8, 0)
MONDAY_LUNCH = datetime(2024, 10, 7, 12, 30)


class TestEndToEnd:
    """End-to-end tests for the complete pipeline."""

    @pytest.fixture
    def fixtures_path(self):
        """Get path to test fixtures."""
        return Path(__file__).parent.parent / "fixtures"

    @pytest.fixture
    def history(self, fixtures_path):
        return HistoryParser().parse(fixtures_path / "sample_history.csv")

    @pytest.fixture
    def settings(self):
        return UserSettings(
            user_id="commuter-42",
            preferred_crowd_level=CrowdLevel.LOW,
            max_wait_time=Decimal('20'),
            accessibility_needs=AccessibilityInfo(has_ramp=True),
            group_size='small',
        )

    @pytest.fixture
    def engine(self):
        repository = ProfileRepository()
        builder = ProfileBuilder(repository, reference_date=REFERENCE_DATE)
        return ProfilingEngine(repository=repository, builder=builder)

    @pytest.fixture
    def places(self):
        return [
            Place(id="mall", name="Central Mall", category=PlaceCategory.SHOPPING,
                  crowd_level=CrowdLevel.VERY_HIGH, wait_time=Decimal('45')),
            Place(id="bank", name="City Bank", category=PlaceCategory.BANK,
                  crowd_level=CrowdLevel.HIGH, wait_time=Decimal('35'),
                  accessibility=AccessibilityInfo(has_ramp=True)),
            Place(id="bistro", name="Noodle Bar", category=PlaceCategory.RESTAURANT,
                  crowd_level=CrowdLevel.LOW, wait_time=Decimal('10'),
                  accessibility=AccessibilityInfo(has_ramp=True)),
            Place(id="museum", name="Art Museum", category=PlaceCategory.ENTERTAINMENT,
                  crowd_level=CrowdLevel.HIGH, wait_time=Decimal('25')),
        ]

    def test_complete_pipeline(self, engine, settings, history, places):
        """Test complete pipeline: CSV -> profile -> ranking -> prediction."""
        # Step 1: Parse CSV
        assert len(history) == 11

        # Step 2: Build profile
        profile = engine.build_profile(settings, history)

        prefs = profile.preferences
        assert prefs.preferred_categories == (
            PlaceCategory.RESTAURANT, PlaceCategory.BANK,
            PlaceCategory.SHOPPING, PlaceCategory.HOSPITAL,
        )
        assert prefs.preferred_crowd_levels == (CrowdLevel.LOW, CrowdLevel.MEDIUM)
        assert [(s.start, s.end) for s in prefs.preferred_time_slots] == [
            ("09:00", "11:00"), ("12:00", "14:00"), ("18:00", "19:00"),
        ]
        assert prefs.accessibility_requirements == frozenset({'ramp_access'})

        behaviors = profile.behaviors
        assert behaviors.reporting_activity.total_reports == 11
        assert behaviors.reporting_activity.accuracy_score == Decimal(3) / Decimal(11)
        assert behaviors.reporting_activity.preferred_report_types == (
            ReportType.CROWD_LEVEL, ReportType.WAIT_TIME, ReportType.QUICK, ReportType.DETAILED,
        )
        assert behaviors.peak_activity_hours[0] == 12

        patterns = profile.patterns
        assert [r.name for r in patterns.routine_patterns] == ["weekday_restaurant_12"]
        assert [s.season for s in patterns.seasonal_preferences] == ["autumn"]
        assert patterns.social_patterns.preferred_group_size == 2

        # Step 3: Rank places
        ranked = engine.rank_places("commuter-42", places, MONDAY_LUNCH)
        assert ranked[0].id == "bistro"
        assert ranked[-1].id == "museum"

        # Step 4: Predict acceptance
        good = Suggestion(
            id="s-1",
            place=places[2],
            recommended_time=MONDAY_LUNCH,
            estimated_crowd_level=CrowdLevel.LOW,
            estimated_wait_time=Decimal('10'),
        )
        poor = Suggestion(
            id="s-2",
            place=places[3],
            recommended_time=MONDAY_LUNCH.replace(hour=21),
            estimated_crowd_level=CrowdLevel.HIGH,
            estimated_wait_time=Decimal('25'),
        )
        assert engine.predict_acceptance(good, "commuter-42") == Decimal('1')
        assert engine.predict_acceptance(poor, "commuter-42") < Decimal('0.6')

    def test_scores_bounded(self, engine, settings, history, places):
        """Test every score of the pipeline is within [0, 1]."""
        profile = engine.build_profile(settings, history)

        for hour in range(24):
            for place, score in engine.scorer.rank_with_scores(
                places, profile, MONDAY_LUNCH.replace(hour=hour),
            ):
                assert Decimal('0') <= score <= Decimal('1')

    def test_profile_json_is_stable(self, engine, settings, history):
        """Test rebuilding from the same inputs yields byte-identical JSON."""
        first = engine.build_profile(settings, history).to_json()
        second = engine.build_profile(settings, history).to_json()

        assert first == second
        assert UserProfile.from_dict(json.loads(first)).to_json() == first

    def test_rebuild_after_new_activity(self, engine, settings, history):
        """Test staleness drives rebuilds once enough new records arrive."""
        engine.build_profile(settings, history)
        now = REFERENCE_DATE + timedelta(hours=1)

        assert not engine.is_stale("commuter-42", now=now, history_size=len(history) + 9)
        assert engine.is_stale("commuter-42", now=now, history_size=len(history) + 10)

        profile = engine.build_profile(settings, history + history[:10])
        assert profile.source_record_count == 21
        assert not engine.is_stale("commuter-42", now=now, history_size=21)

    def test_users_are_isolated(self, engine, settings, history, places):
        """Test two users keep independent snapshots."""
        engine.build_profile(settings, history)
        other = UserSettings(user_id="newcomer")
        engine.build_profile(other)

        assert engine.get_user_profile("newcomer").preferences.preferred_categories == ()
        assert engine.get_user_profile("commuter-42").source_record_count == 11
        assert sorted(engine.repository.user_ids()) == ["commuter-42", "newcomer"]
