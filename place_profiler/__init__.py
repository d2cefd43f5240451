"""
Place Profiler - user profiling and place recommendation scoring.

Turns a user's activity history into an immutable profile, ranks candidate
places against it and predicts whether generated suggestions get accepted.
"""

from .engine import (
    ProfilingEngine,
    build_profile,
    get_default_engine,
    predict_acceptance,
    rank_places,
)

__version__ = "1.0.0"

__all__ = [
    'ProfilingEngine',
    'build_profile',
    'get_default_engine',
    'predict_acceptance',
    'rank_places',
]
