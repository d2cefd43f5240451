"""
Unit tests for scoring module.

Tests cover:
- Recommendation scoring: factor breakdown, clamping, accessibility
- Ranking: order, top-k, stability
- Acceptance prediction: factors, determinism, seeded jitter
- Score bounds over a grid of inputs
"""

import itertools
import pytest
from datetime import datetime
from decimal import Decimal

from place_profiler.models import (
    AccessibilityInfo,
    BehaviorProfile,
    CrowdLevel,
    PatternProfile,
    Place,
    PlaceCategory,
    PreferenceProfile,
    Suggestion,
    TimeSlot,
    UserProfile,
)
from place_profiler.scoring import (
    AcceptancePredictor,
    RecommendationScorer,
    ScoreBreakdown,
    accessibility_match,
    clamp,
    predict_acceptance,
    rank_places,
    score_place,
)


NOON = datetime(2024, 10, 7, 12, 30)
EARLY = datetime(2024, 10, 7, 6, 0)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_profile(slot_weight=Decimal('0.8'), accessibility=frozenset(), acceptance_rate=None):
    """Profile preferring LOW restaurants and banks around lunch."""
    behaviors = BehaviorProfile.empty()
    if acceptance_rate is not None:
        behaviors = BehaviorProfile(suggestion_acceptance_rate=acceptance_rate)

    return UserProfile(
        user_id="user-1",
        preferences=PreferenceProfile(
            preferred_categories=(PlaceCategory.RESTAURANT, PlaceCategory.BANK),
            preferred_crowd_levels=(CrowdLevel.LOW,),
            preferred_time_slots=(TimeSlot.from_hours(12, 14, slot_weight),),
            accessibility_requirements=accessibility,
            max_wait_time=Decimal('20'),
        ),
        behaviors=behaviors,
        patterns=PatternProfile.empty(),
        last_updated=datetime(2024, 10, 1),
    )


def make_place(place_id="p-1", category=PlaceCategory.RESTAURANT,
               crowd_level=CrowdLevel.LOW, wait_time='10', **kwargs):
    return Place(
        id=place_id,
        category=category,
        crowd_level=crowd_level,
        wait_time=Decimal(wait_time),
        **kwargs,
    )


@pytest.fixture
def profile():
    return make_profile()


# =============================================================================
# RecommendationScorer Tests
# =============================================================================

class TestRecommendationScorer:
    """Tests for place scoring."""

    def test_full_match_scores_one(self):
        """Test a perfect match in a weight-1.0 slot is clamped to 1."""
        profile = make_profile(slot_weight=Decimal('1.0'))
        scorer = RecommendationScorer()
        breakdown = scorer.score_breakdown(make_place(), profile, NOON)

        # 0.5 + 0.3 + 0.2 + 0.2 + 0.1
        assert breakdown.raw_total == Decimal('1.3')
        assert scorer.score_place(make_place(), profile, NOON) == Decimal('1')

    def test_exceeded_wait_drops_raw_score(self):
        """Test that exceeding max wait swaps +0.1 for -0.2."""
        profile = make_profile(slot_weight=Decimal('1.0'))
        scorer = RecommendationScorer()

        within = scorer.score_breakdown(make_place(wait_time='20'), profile, NOON)
        exceeded = scorer.score_breakdown(make_place(wait_time='21'), profile, NOON)

        assert within.raw_total - exceeded.raw_total == Decimal('0.3')
        assert exceeded.wait_time == Decimal('-0.2')

    def test_no_match_outside_slots(self, profile):
        """Test base plus default time preference and wait penalty."""
        place = make_place(category=PlaceCategory.SHOPPING,
                           crowd_level=CrowdLevel.HIGH, wait_time='45')
        score = score_place(place, profile, EARLY)

        # 0.5 + 0.3 * 0.2 - 0.2
        assert score == Decimal('0.36')

    def test_breakdown_fields(self, profile):
        """Test individual factor contributions."""
        breakdown = RecommendationScorer().score_breakdown(make_place(), profile, NOON)

        assert breakdown.base == Decimal('0.5')
        assert breakdown.category == Decimal('0.3')
        assert breakdown.crowd_level == Decimal('0.2')
        assert breakdown.time_of_day == Decimal('0.16')
        assert breakdown.wait_time == Decimal('0.1')
        assert breakdown.accessibility == Decimal('0')

    def test_accessibility_term_only_with_requirements(self):
        """Test partial accessibility match adds its share of 0.15."""
        profile = make_profile(accessibility=frozenset({'wheelchair_accessible', 'elevator_access'}))
        place = make_place(
            category=PlaceCategory.HOSPITAL,
            accessibility=AccessibilityInfo(wheelchair_accessible=True),
        )
        breakdown = RecommendationScorer().score_breakdown(place, profile, EARLY)

        assert breakdown.accessibility == Decimal('0.075')

    def test_accessibility_match(self):
        """Test match fraction helper."""
        place = make_place(accessibility=AccessibilityInfo(has_ramp=True))

        assert accessibility_match(place, frozenset()) == Decimal('1')
        assert accessibility_match(place, frozenset({'ramp_access'})) == Decimal('1')
        assert accessibility_match(place, frozenset({'elevator_access'})) == Decimal('0')

    def test_score_uses_hour_of_now(self, profile):
        """Test the time factor depends on the scoring time."""
        scorer = RecommendationScorer()
        place = make_place()

        assert scorer.score_place(place, profile, NOON) > scorer.score_place(place, profile, EARLY)


class TestRanking:
    """Tests for place ranking."""

    def test_rank_order(self, profile):
        """Test places come back best first."""
        places = [
            make_place("busy-mall", PlaceCategory.SHOPPING, CrowdLevel.VERY_HIGH, '60'),
            make_place("quiet-bistro"),
            make_place("bank", PlaceCategory.BANK, CrowdLevel.MEDIUM, '5'),
        ]
        ranked = rank_places(places, profile, NOON)

        assert [p.id for p in ranked] == ["quiet-bistro", "bank", "busy-mall"]

    def test_rank_top_k(self, profile):
        """Test that at most k places are returned."""
        places = [make_place(f"p-{i}") for i in range(15)]

        assert len(RecommendationScorer().rank_places(places, profile, NOON)) == 10
        assert len(RecommendationScorer().rank_places(places, profile, NOON, k=3)) == 3

    def test_rank_is_stable(self, profile):
        """Test equal scores keep input order."""
        places = [make_place(f"p-{i}") for i in range(5)]
        ranked = rank_places(places, profile, NOON)

        assert [p.id for p in ranked] == [f"p-{i}" for i in range(5)]

    def test_rank_empty(self, profile):
        """Test ranking no candidates."""
        assert rank_places([], profile, NOON) == []

    def test_rank_with_scores(self, profile):
        """Test scores accompany ranked places."""
        places = [make_place("a", PlaceCategory.OTHER), make_place("b")]
        ranked = RecommendationScorer().rank_with_scores(places, profile, NOON)

        assert [p.id for p, _ in ranked] == ["b", "a"]
        assert ranked[0][1] >= ranked[1][1]


class TestScoreBreakdown:
    """Tests for ScoreBreakdown and clamp."""

    def test_clamp(self):
        assert clamp(Decimal('-0.4')) == Decimal('0')
        assert clamp(Decimal('1.3')) == Decimal('1')
        assert clamp(Decimal('0.42')) == Decimal('0.42')

    def test_to_dict(self):
        """Test breakdown serialization."""
        breakdown = ScoreBreakdown(
            base=Decimal('0.5'),
            category=Decimal('0.3'),
            crowd_level=Decimal('0'),
            time_of_day=Decimal('0.06'),
            wait_time=Decimal('0.1'),
        )
        data = breakdown.to_dict()

        assert data['raw_total'] == '0.96'
        assert data['score'] == '0.96'


# =============================================================================
# AcceptancePredictor Tests
# =============================================================================

def make_suggestion(category=PlaceCategory.RESTAURANT, crowd_level=CrowdLevel.LOW,
                    wait_time='10', when=NOON):
    return Suggestion(
        id="s-1",
        place=make_place(category=category, crowd_level=crowd_level, wait_time=wait_time),
        recommended_time=when,
        estimated_crowd_level=crowd_level,
        estimated_wait_time=Decimal(wait_time),
    )


class TestAcceptancePredictor:
    """Tests for acceptance prediction."""

    def test_matching_suggestion(self, profile):
        """Test a well-matched suggestion is clamped to 1."""
        predictor = AcceptancePredictor()
        breakdown = predictor.breakdown(make_suggestion(), profile)

        # 0.7 + 0.2 + 0.15 + 0.8 * 0.2 + 0.1
        assert breakdown.raw_total == Decimal('1.31')
        assert predictor.predict_acceptance(make_suggestion(), profile) == Decimal('1')

    def test_poor_suggestion(self, profile):
        """Test unmatched suggestion at an unpreferred hour."""
        suggestion = make_suggestion(PlaceCategory.OTHER, CrowdLevel.HIGH, '45', EARLY)

        # 0.7 + 0.3 * 0.2 - 0.2
        assert predict_acceptance(suggestion, profile) == Decimal('0.56')

    def test_base_is_acceptance_rate(self):
        """Test the historical rate is the starting point."""
        profile = make_profile(acceptance_rate=Decimal('0.1'))
        suggestion = make_suggestion(PlaceCategory.OTHER, CrowdLevel.HIGH, '45', EARLY)

        # 0.1 + 0.06 - 0.2 clamps to 0
        assert predict_acceptance(suggestion, profile) == Decimal('0')

    def test_deterministic_without_jitter(self, profile):
        """Test repeated calls agree when jitter is off."""
        predictor = AcceptancePredictor()
        suggestion = make_suggestion(PlaceCategory.BANK, CrowdLevel.MEDIUM, '15', EARLY)

        results = {predictor.predict_acceptance(suggestion, profile) for _ in range(5)}
        assert len(results) == 1

    def test_seeded_jitter_reproducible(self, profile):
        """Test same seed yields the same noisy sequence."""
        suggestion = make_suggestion(PlaceCategory.OTHER, CrowdLevel.HIGH, '15', EARLY)
        first = AcceptancePredictor(jitter=Decimal('0.1'), seed=42)
        second = AcceptancePredictor(jitter=Decimal('0.1'), seed=42)

        run_a = [first.predict_acceptance(suggestion, profile) for _ in range(5)]
        run_b = [second.predict_acceptance(suggestion, profile) for _ in range(5)]

        assert run_a == run_b
        assert len(set(run_a)) > 1

    def test_jitter_bounded(self, profile):
        """Test noise stays within the jitter half-width."""
        suggestion = make_suggestion(PlaceCategory.OTHER, CrowdLevel.HIGH, '15', EARLY)
        exact = AcceptancePredictor().predict_acceptance(suggestion, profile)
        assert exact == Decimal('0.86')
        noisy = AcceptancePredictor(jitter=Decimal('0.05'), seed=7)

        for _ in range(20):
            value = noisy.predict_acceptance(suggestion, profile)
            assert abs(value - exact) <= Decimal('0.05')

    def test_negative_jitter_raises(self):
        """Test jitter must not be negative."""
        with pytest.raises(ValueError, match="jitter"):
            AcceptancePredictor(jitter=Decimal('-0.1'))


# =============================================================================
# Bounds Grid
# =============================================================================

WAIT_TIMES = ['0', '20', '21', '1000', '-5']
HOURS = [0, 6, 12, 13, 23]


class TestScoreBounds:
    """Scores and probabilities stay within [0, 1] across input combinations."""

    @pytest.mark.parametrize(
        "category,crowd_level",
        list(itertools.product(PlaceCategory, CrowdLevel)),
    )
    def test_scores_within_bounds(self, category, crowd_level):
        scorer = RecommendationScorer()
        predictor = AcceptancePredictor(jitter=Decimal('0.5'), seed=1)
        profiles = [
            make_profile(),
            make_profile(slot_weight=Decimal('1.0'), acceptance_rate=Decimal('1')),
            make_profile(accessibility=frozenset({'ramp_access'}), acceptance_rate=Decimal('0')),
        ]

        for profile, wait_time, hour in itertools.product(profiles, WAIT_TIMES, HOURS):
            when = NOON.replace(hour=hour)
            place = make_place(category=category, crowd_level=crowd_level, wait_time=wait_time)
            suggestion = make_suggestion(category, crowd_level, wait_time, when)

            assert Decimal('0') <= scorer.score_place(place, profile, when) <= Decimal('1')
            assert Decimal('0') <= predictor.predict_acceptance(suggestion, profile) <= Decimal('1')
