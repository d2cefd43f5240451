"""
ScoreBreakdown model - Per-factor contributions to an additive score.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict


def clamp(value: Decimal, low: Decimal = Decimal('0'), high: Decimal = Decimal('1')) -> Decimal:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Contributions of each scoring factor.

    raw_total is the unclamped sum; score is raw_total clamped to [0, 1].
    """

    base: Decimal
    category: Decimal
    crowd_level: Decimal
    time_of_day: Decimal
    wait_time: Decimal
    accessibility: Decimal = Decimal('0')

    @property
    def raw_total(self) -> Decimal:
        return (
            self.base + self.category + self.crowd_level
            + self.time_of_day + self.wait_time + self.accessibility
        )

    @property
    def score(self) -> Decimal:
        return clamp(self.raw_total)

    def to_dict(self) -> Dict[str, str]:
        return {
            'base': str(self.base),
            'category': str(self.category),
            'crowd_level': str(self.crowd_level),
            'time_of_day': str(self.time_of_day),
            'wait_time': str(self.wait_time),
            'accessibility': str(self.accessibility),
            'raw_total': str(self.raw_total),
            'score': str(self.score),
        }
