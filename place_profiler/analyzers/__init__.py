"""Analyzers that turn activity history into profile parts."""

from .preference_analyzer import PreferenceAnalyzer, analyze_preferences
from .behavior_analyzer import BehaviorAnalyzer, analyze_behavior
from .pattern_miner import PatternMiner, mine_patterns

__all__ = [
    'PreferenceAnalyzer',
    'analyze_preferences',
    'BehaviorAnalyzer',
    'analyze_behavior',
    'PatternMiner',
    'mine_patterns',
]
