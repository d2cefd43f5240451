"""
History parser for activity history exports.

Loads report/visit history from CSV (or an existing DataFrame) into
ActivityRecord objects, skipping malformed rows with a warning. This is an
adapter for callers; the profiling core itself performs no I/O.
"""

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from io import StringIO
from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd

from place_profiler.models.activity_record import ActivityRecord, RecordKind, ReportType
from place_profiler.models.place import CrowdLevel, PlaceCategory
from place_profiler.utils.constants import (
    CATEGORY_ALIASES,
    COLUMN_CATEGORY,
    COLUMN_CROWD_LEVEL,
    COLUMN_KIND,
    COLUMN_PLACE_ID,
    COLUMN_REPORT_TYPE,
    COLUMN_TIMESTAMP,
    COLUMN_VERIFIED,
    COLUMN_WAIT_TIME,
    CROWD_LEVEL_ALIASES,
    REQUIRED_HISTORY_COLUMNS,
    TRUTHY_STRINGS,
)
from place_profiler.utils.date_parser import parse_date


logger = logging.getLogger(__name__)


class HistoryParser:
    """
    Parser for activity history CSV exports.

    Required columns: kind, category, timestamp
    Optional columns: place_id, crowd_level, verified, report_type, wait_time

    Example usage:
        parser = HistoryParser()
        history = parser.parse("history.csv")
        if parser.warnings:
            ...
    """

    def __init__(self) -> None:
        """Initialize parser with empty warning list."""
        self.warnings: List[str] = []

    def parse(self, source: Union[str, Path, StringIO]) -> List[ActivityRecord]:
        """
        Parse a CSV file into ActivityRecord objects.

        Args:
            source: File path or StringIO containing CSV data

        Returns:
            List of validated ActivityRecord objects, in file order

        Raises:
            ValueError: If required columns are missing
            FileNotFoundError: If file path doesn't exist
        """
        return self.parse_dataframe(self._read_csv(source))

    def parse_dataframe(self, df: pd.DataFrame) -> List[ActivityRecord]:
        """
        Parse an already-loaded DataFrame.

        Raises:
            ValueError: If required columns are missing
        """
        self.warnings = []  # Reset warnings
        self._validate_columns(df)
        return self._parse_rows(df)

    def _read_csv(self, source: Union[str, Path, StringIO]) -> pd.DataFrame:
        """
        Read CSV into DataFrame.

        All columns are read as strings; cleaning happens per row.
        """
        if isinstance(source, StringIO):
            source.seek(0)
            return pd.read_csv(source, dtype=str, keep_default_na=True)

        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")

        return pd.read_csv(path, encoding='utf-8-sig', dtype=str, keep_default_na=True)

    def _validate_columns(self, df: pd.DataFrame) -> None:
        """
        Validate that required columns are present.

        Raises:
            ValueError: If required columns are missing
        """
        missing = set(REQUIRED_HISTORY_COLUMNS) - set(df.columns)
        if missing:
            raise ValueError(
                f"Missing required history columns: {sorted(missing)}"
            )

    def _parse_rows(self, df: pd.DataFrame) -> List[ActivityRecord]:
        """
        Parse each row into ActivityRecord, skipping malformed rows.
        """
        records = []

        for idx, row in df.iterrows():
            try:
                records.append(self._parse_single_row(row))
            except Exception as e:
                warning = f"Row {idx}: Skipping due to error - {e}"
                self.warnings.append(warning)
                logger.warning(warning)

        return records

    def _parse_single_row(self, row: pd.Series) -> ActivityRecord:
        """
        Parse a single row into ActivityRecord.

        Raises:
            ValueError: If kind, category or timestamp is unusable
        """
        kind = RecordKind(str(row[COLUMN_KIND]).strip().lower())
        category = self._normalize_category(row[COLUMN_CATEGORY])
        timestamp = self._parse_timestamp(row[COLUMN_TIMESTAMP])

        place_id = self._optional_str(row.get(COLUMN_PLACE_ID))

        if kind == RecordKind.VISIT:
            return ActivityRecord.visit(
                category=category,
                timestamp=timestamp,
                place_id=place_id,
            )

        report_type = self._optional_str(row.get(COLUMN_REPORT_TYPE))
        return ActivityRecord.report(
            category=category,
            timestamp=timestamp,
            crowd_level=self._normalize_crowd_level(row.get(COLUMN_CROWD_LEVEL)),
            verified=self._clean_bool(row.get(COLUMN_VERIFIED)),
            report_type=ReportType(report_type.lower()) if report_type else None,
            place_id=place_id,
            wait_time=self._clean_wait_time(row.get(COLUMN_WAIT_TIME)),
        )

    @staticmethod
    def _optional_str(value: Any) -> Optional[str]:
        if value is None or pd.isna(value):
            return None
        value_str = str(value).strip()
        return value_str or None

    @staticmethod
    def _canonical_key(value: str) -> str:
        """Lower-case and turn spaces/hyphens into underscores."""
        return re.sub(r'[\s\-]+', '_', value.strip().lower())

    @classmethod
    def _normalize_category(cls, value: Any) -> PlaceCategory:
        """
        Normalize category name to a PlaceCategory.

        Raises:
            ValueError: If the value is empty or unknown
        """
        if value is None or pd.isna(value) or not str(value).strip():
            raise ValueError("Category cannot be empty")

        raw = str(value).strip().lower()
        if raw in CATEGORY_ALIASES:
            return PlaceCategory(CATEGORY_ALIASES[raw])
        return PlaceCategory(cls._canonical_key(raw))

    @classmethod
    def _normalize_crowd_level(cls, value: Any) -> Optional[CrowdLevel]:
        """Normalize crowd level; empty means not reported."""
        if value is None or pd.isna(value) or not str(value).strip():
            return None

        raw = str(value).strip().lower()
        if raw in CROWD_LEVEL_ALIASES:
            return CrowdLevel(CROWD_LEVEL_ALIASES[raw])
        return CrowdLevel(cls._canonical_key(raw))

    @staticmethod
    def _parse_timestamp(value: Any) -> datetime:
        if value is None or pd.isna(value):
            raise ValueError("Timestamp cannot be empty")
        return parse_date(str(value))

    @staticmethod
    def _clean_bool(value: Any) -> bool:
        if value is None or pd.isna(value):
            return False
        return str(value).strip().lower() in TRUTHY_STRINGS

    @staticmethod
    def _clean_wait_time(value: Any) -> Optional[Decimal]:
        """
        Clean wait time (minutes) to Decimal.

        Handles "15", "15 min", "-" (not reported).
        """
        if value is None or pd.isna(value):
            return None

        value_str = re.sub(r'\s*(min|mins|minutes)$', '', str(value).strip().lower())
        if not value_str or value_str == '-':
            return None

        try:
            return Decimal(value_str)
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to wait time")


def load_history(source: Union[str, Path, StringIO]) -> List[ActivityRecord]:
    """
    Load activity history from CSV.

    Convenience function using default parser.
    """
    parser = HistoryParser()
    return parser.parse(source)
