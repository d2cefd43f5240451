"""
Constants for Place Profiler.

This module contains all magic numbers, string identifiers, and configuration
values used throughout the engine. Centralizing these makes the heuristics
easier to tune and keeps placeholder values visible in one place.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Tuple


# =============================================================================
# PROFILE LIMITS
# =============================================================================

MAX_PREFERRED_CATEGORIES = 5
MAX_PREFERRED_CROWD_LEVELS = 2
MAX_ACTIVE_HOURS = 6        # Hours kept for time-slot mining / peak hours
MAX_PREFERRED_DAYS = 4
MAX_ROUTINE_PATTERNS = 5


# =============================================================================
# PREFERENCE DEFAULTS
# =============================================================================

# Weight assigned to every mined time slot
DEFAULT_TIME_SLOT_WEIGHT = Decimal('0.8')

# Returned by time_preference() when no slot contains the hour
DEFAULT_TIME_PREFERENCE = Decimal('0.3')

DEFAULT_MAX_WAIT_TIME = Decimal('30')        # minutes
DEFAULT_MAX_TRAVEL_DISTANCE = Decimal('10')  # km

# Avoidance factor importance, by source setting
CROWD_AVOIDANCE_IMPORTANCE = Decimal('0.8')
WAIT_TIME_AVOIDANCE_IMPORTANCE = Decimal('0.7')

# Crowd level -> numeric threshold for avoidance factors
CROWD_LEVEL_VALUES: Dict[str, Decimal] = {
    'low': Decimal('0.25'),
    'medium': Decimal('0.5'),
    'high': Decimal('0.75'),
    'very_high': Decimal('1.0'),
}

# AccessibilityInfo field -> capability tag
ACCESSIBILITY_TAGS: Dict[str, str] = {
    'wheelchair_accessible': 'wheelchair_accessible',
    'has_elevator': 'elevator_access',
    'has_ramp': 'ramp_access',
    'has_accessible_parking': 'accessible_parking',
    'has_accessible_restroom': 'accessible_restroom',
}


# =============================================================================
# BEHAVIOR PLACEHOLDERS
# =============================================================================
# Not derived from data. Replace with real aggregation once visit durations
# and suggestion outcomes are tracked upstream.

# Average minutes spent per category
DEFAULT_VISIT_DURATIONS: Dict[str, Decimal] = {
    'restaurant': Decimal('60'),
    'shopping': Decimal('90'),
    'hospital': Decimal('45'),
    'bank': Decimal('20'),
}

# Used when no suggestion in the history has a recorded outcome
DEFAULT_ACCEPTANCE_RATE = Decimal('0.7')

# report_frequency = total_reports / REPORTING_WINDOW_WEEKS
# History is assumed to cover roughly the last 4 weeks.
REPORTING_WINDOW_WEEKS = 4


# =============================================================================
# PATTERN MINING
# =============================================================================

# Month (1-12) -> season
SEASONS_BY_MONTH: Dict[int, str] = {
    3: 'spring', 4: 'spring', 5: 'spring',
    6: 'summer', 7: 'summer', 8: 'summer',
    9: 'autumn', 10: 'autumn', 11: 'autumn',
    12: 'winter', 1: 'winter', 2: 'winter',
}

VALID_SEASONS = ('spring', 'summer', 'autumn', 'winter')

# Minimum occurrences of (category, day type, hour) to call it a routine
MIN_ROUTINE_OCCURRENCES = 3
ROUTINE_SLOT_WEIGHT = Decimal('0.9')

SOCIAL_CATEGORIES: List[str] = ['restaurant', 'entertainment', 'shopping']
DEFAULT_SOCIAL_FREQUENCY = Decimal('0.6')

GROUP_SIZES: Dict[str, int] = {
    'small': 2,
    'medium': 4,
}
DEFAULT_GROUP_SIZE = 8

DEFAULT_TRAVEL_DISTANCE = Decimal('5')  # km
DEFAULT_TRANSPORT_MODES: List[str] = ['walking', 'public_transport']


# =============================================================================
# RECOMMENDATION SCORING
# =============================================================================

SCORE_BASE = Decimal('0.5')
SCORE_CATEGORY_MATCH = Decimal('0.3')
SCORE_CROWD_MATCH = Decimal('0.2')
SCORE_TIME_WEIGHT = Decimal('0.2')
SCORE_WAIT_OK = Decimal('0.1')
SCORE_WAIT_EXCEEDED = Decimal('-0.2')
SCORE_ACCESSIBILITY_WEIGHT = Decimal('0.15')

DEFAULT_TOP_K = 10


# =============================================================================
# ACCEPTANCE PREDICTION
# =============================================================================

ACCEPT_CATEGORY_MATCH = Decimal('0.2')
ACCEPT_CROWD_MATCH = Decimal('0.15')
ACCEPT_TIME_WEIGHT = Decimal('0.2')
ACCEPT_WAIT_OK = Decimal('0.1')
ACCEPT_WAIT_EXCEEDED = Decimal('-0.2')

# Returned when no profile exists for the user
DEFAULT_ACCEPTANCE_PROBABILITY = Decimal('0.5')


# =============================================================================
# STALENESS POLICY
# =============================================================================

PROFILE_TTL_HOURS = 24
STALE_AFTER_NEW_RECORDS = 10

# Stamped on profiles built without a reference date from an empty history
PROFILE_EPOCH = datetime(1970, 1, 1)


# =============================================================================
# HISTORY CSV COLUMNS
# =============================================================================

COLUMN_KIND = "kind"
COLUMN_PLACE_ID = "place_id"
COLUMN_CATEGORY = "category"
COLUMN_TIMESTAMP = "timestamp"
COLUMN_CROWD_LEVEL = "crowd_level"
COLUMN_VERIFIED = "verified"
COLUMN_REPORT_TYPE = "report_type"
COLUMN_WAIT_TIME = "wait_time"

REQUIRED_HISTORY_COLUMNS = (COLUMN_KIND, COLUMN_CATEGORY, COLUMN_TIMESTAMP)

# Aliases map to canonical category values
CATEGORY_ALIASES: Dict[str, str] = {
    'food': 'restaurant',
    'dining': 'restaurant',
    'cafe': 'restaurant',
    'mall': 'shopping',
    'store': 'shopping',
    'clinic': 'hospital',
    'atm': 'bank',
    'school': 'education',
    'station': 'transport',
    'cinema': 'entertainment',
}

CROWD_LEVEL_ALIASES: Dict[str, str] = {
    'very high': 'very_high',
    'veryhigh': 'very_high',
    'busy': 'high',
    'quiet': 'low',
}

TRUTHY_STRINGS: Tuple[str, ...] = ('true', '1', 'yes', 'y', 't')


# =============================================================================
# DATE FORMAT PATTERNS
# =============================================================================

# Common timestamp formats encountered in history exports
DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",       # 2024-09-15 13:00:00
    "%Y-%m-%dT%H:%M:%S",       # 2024-09-15T13:00:00
    "%Y-%m-%d %H:%M",          # 2024-09-15 13:00
    "%Y-%m-%d",                # 2024-09-15
    "%m/%d/%Y %I:%M %p",       # 09/15/2024 1:00 PM
    "%m/%d/%Y %H:%M",          # 09/15/2024 13:00
    "%m/%d/%Y",                # 09/15/2024
    "%b %d, %Y %I:%M %p",      # Sep 15, 2024 1:00 PM
]
