"""
ActivityRecord model - One entry of a user's raw activity history.

A record is either a crowd-level report or a plain visit. Both carry the
place category and a timestamp; only reports carry crowd level, report type
and verification status.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .place import CrowdLevel, PlaceCategory


class ReportType(str, Enum):
    """Kind of observation a report carries."""

    QUICK = 'quick'
    DETAILED = 'detailed'
    WAIT_TIME = 'wait_time'
    CROWD_LEVEL = 'crowd_level'
    NOISE_LEVEL = 'noise_level'
    ACCESSIBILITY = 'accessibility'
    HOURS = 'hours'
    SERVICE_QUALITY = 'service_quality'
    SPECIAL_STATUS = 'special_status'
    OTHER = 'other'


class RecordKind(str, Enum):
    REPORT = 'report'
    VISIT = 'visit'


class ActivityRecord(BaseModel):
    """
    Normalized activity history entry.

    Attributes:
        kind: REPORT or VISIT
        category: Category of the place the activity happened at
        timestamp: When the activity happened (local time)
        place_id: Identifier of the place, when known
        crowd_level: Reported crowd level (reports only)
        verified: Whether the report was verified by others
        report_type: Kind of report (reports only)
        wait_time: Reported wait time in minutes (reports only)
    """

    kind: RecordKind = RecordKind.REPORT
    category: PlaceCategory
    timestamp: datetime
    place_id: Optional[str] = None
    crowd_level: Optional[CrowdLevel] = None
    verified: bool = False
    report_type: Optional[ReportType] = None
    wait_time: Optional[Decimal] = None

    model_config = {"frozen": True}

    @property
    def is_report(self) -> bool:
        return self.kind == RecordKind.REPORT

    @property
    def hour(self) -> int:
        return self.timestamp.hour

    @property
    def weekday(self) -> int:
        """Day of week, Monday=0 .. Sunday=6."""
        return self.timestamp.weekday()

    @classmethod
    def report(
        cls,
        category: PlaceCategory,
        timestamp: datetime,
        crowd_level: Optional[CrowdLevel] = None,
        verified: bool = False,
        report_type: Optional[ReportType] = ReportType.CROWD_LEVEL,
        **kwargs,
    ) -> 'ActivityRecord':
        """Shortcut for building a report record."""
        return cls(
            kind=RecordKind.REPORT,
            category=category,
            timestamp=timestamp,
            crowd_level=crowd_level,
            verified=verified,
            report_type=report_type,
            **kwargs,
        )

    @classmethod
    def visit(
        cls,
        category: PlaceCategory,
        timestamp: datetime,
        **kwargs,
    ) -> 'ActivityRecord':
        """Shortcut for building a visit record."""
        return cls(
            kind=RecordKind.VISIT,
            category=category,
            timestamp=timestamp,
            **kwargs,
        )
