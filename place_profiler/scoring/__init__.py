"""Place ranking and suggestion acceptance prediction."""

from .score_breakdown import ScoreBreakdown, clamp
from .recommendation_scorer import (
    RecommendationScorer,
    accessibility_match,
    rank_places,
    score_place,
)
from .acceptance_predictor import AcceptancePredictor, predict_acceptance

__all__ = [
    'ScoreBreakdown',
    'clamp',
    'RecommendationScorer',
    'accessibility_match',
    'rank_places',
    'score_place',
    'AcceptancePredictor',
    'predict_acceptance',
]
