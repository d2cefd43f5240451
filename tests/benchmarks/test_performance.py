"""
Performance benchmarks for Place Profiler.

Performance targets:
- CSV parsing: <2s for 1000 rows
- Profile build: <1s for 5000 records
- Ranking: <500ms for 1000 places
- End-to-end pipeline: <3s
"""

import pytest
import time
from io import StringIO
from datetime import datetime, timedelta
from decimal import Decimal

from place_profiler import ProfilingEngine
from place_profiler.models import (
    ActivityRecord,
    CrowdLevel,
    Place,
    PlaceCategory,
    UserSettings,
)
from place_profiler.parsers import HistoryParser
from place_profiler.profiling import ProfileBuilder
from place_profiler.scoring import RecommendationScorer


CATEGORIES = list(PlaceCategory)
CROWD_LEVELS = list(CrowdLevel)


def generate_history(count: int) -> list:
    """Generate sample ActivityRecord objects for benchmarking."""
    base_date = datetime(2024, 1, 1, 6)

    records = []
    for i in range(count):
        records.append(ActivityRecord.report(
            CATEGORIES[i % len(CATEGORIES)],
            base_date + timedelta(days=i % 365, hours=i % 16),
            crowd_level=CROWD_LEVELS[i % len(CROWD_LEVELS)],
            verified=i % 3 == 0,
            wait_time=Decimal(str(i % 60)),
        ))
    return records


def generate_places(count: int) -> list:
    """Generate sample Place objects for benchmarking."""
    return [
        Place(
            id=f"p-{i}",
            category=CATEGORIES[i % len(CATEGORIES)],
            crowd_level=CROWD_LEVELS[i % len(CROWD_LEVELS)],
            wait_time=Decimal(str(i % 60)),
        )
        for i in range(count)
    ]


def generate_csv_string(count: int) -> StringIO:
    """Generate sample CSV data for benchmarking."""
    header = "kind,place_id,category,timestamp,crowd_level,verified,report_type,wait_time\n"
    rows = []

    for i in range(count):
        category = CATEGORIES[i % len(CATEGORIES)].value
        crowd = CROWD_LEVELS[i % len(CROWD_LEVELS)].value
        date = f"2024-{(i % 12) + 1:02d}-{(i % 28) + 1:02d} {6 + i % 16:02d}:15:00"
        rows.append(f"report,p-{i},{category},{date},{crowd},{i % 2 == 0},crowd_level,{i % 60}\n")

    return StringIO(header + "".join(rows))


@pytest.fixture
def settings():
    return UserSettings(user_id="bench", max_wait_time=Decimal('20'))


class TestParsingPerformance:
    """Benchmarks for CSV parsing."""

    def test_parse_1000_rows(self):
        csv_data = generate_csv_string(1000)
        parser = HistoryParser()

        start = time.perf_counter()
        records = parser.parse(csv_data)
        elapsed = time.perf_counter() - start

        assert len(records) == 1000
        assert elapsed < 2.0, f"Parsing took {elapsed:.3f}s (target: <2s)"


class TestProfilingPerformance:
    """Benchmarks for profile building."""

    def test_build_5000_records(self, settings):
        history = generate_history(5000)
        builder = ProfileBuilder()

        start = time.perf_counter()
        profile = builder.build_user_profile(settings, history)
        elapsed = time.perf_counter() - start

        assert profile.source_record_count == 5000
        assert elapsed < 1.0, f"Profile build took {elapsed:.3f}s (target: <1s)"


class TestRankingPerformance:
    """Benchmarks for place ranking."""

    def test_rank_1000_places(self, settings):
        profile = ProfileBuilder().build_user_profile(settings, generate_history(500))
        places = generate_places(1000)
        scorer = RecommendationScorer()

        start = time.perf_counter()
        ranked = scorer.rank_places(places, profile, datetime(2024, 10, 7, 12, 30))
        elapsed = time.perf_counter() - start

        assert len(ranked) == 10
        assert elapsed < 0.5, f"Ranking took {elapsed:.3f}s (target: <500ms)"


class TestEndToEndPerformance:
    """Benchmark for the full pipeline."""

    def test_full_pipeline(self, settings):
        csv_data = generate_csv_string(1000)
        places = generate_places(500)

        start = time.perf_counter()
        history = HistoryParser().parse(csv_data)
        engine = ProfilingEngine()
        engine.build_profile(settings, history)
        ranked = engine.rank_places("bench", places, datetime(2024, 10, 7, 12, 30))
        elapsed = time.perf_counter() - start

        assert len(ranked) == 10
        assert elapsed < 3.0, f"Pipeline took {elapsed:.3f}s (target: <3s)"
