#!/usr/bin/env python3
"""
Place Profiler Demo

Demonstrates the complete pipeline:
1. Load activity history CSV
2. Build a user profile
3. Rank candidate places
4. Predict acceptance of a suggestion

Usage:
    python demo.py [csv_file]
    python demo.py  # Uses sample history file
"""

import json
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from place_profiler import ProfilingEngine
from place_profiler.models import (
    AccessibilityInfo,
    CrowdLevel,
    Place,
    PlaceCategory,
    Suggestion,
    UserSettings,
)
from place_profiler.parsers import HistoryParser


SAMPLE_PLACES = [
    Place(id="p-001", name="Noodle Bar", category=PlaceCategory.RESTAURANT,
          crowd_level=CrowdLevel.LOW, wait_time=Decimal('10')),
    Place(id="p-007", name="Central Mall", category=PlaceCategory.SHOPPING,
          crowd_level=CrowdLevel.VERY_HIGH, wait_time=Decimal('5')),
    Place(id="p-003", name="City Bank", category=PlaceCategory.BANK,
          crowd_level=CrowdLevel.MEDIUM, wait_time=Decimal('35')),
    Place(id="p-008", name="Riverside Clinic", category=PlaceCategory.HOSPITAL,
          crowd_level=CrowdLevel.LOW, wait_time=Decimal('15'),
          accessibility=AccessibilityInfo(wheelchair_accessible=True, has_ramp=True)),
]


def main(csv_path: str = None):
    """Run the demo pipeline."""
    print("=" * 50)
    print("Place Profiler Demo")
    print("=" * 50)
    print()

    # Use sample file if none provided
    if csv_path is None:
        csv_path = Path(__file__).parent / "tests" / "fixtures" / "sample_history.csv"
        print(f"Using sample file: {csv_path.name}")
    else:
        csv_path = Path(csv_path)

    if not csv_path.exists():
        print(f"Error: File not found: {csv_path}")
        return 1

    # =========================================================================
    # Step 1: Load history
    # =========================================================================
    print()
    print("[1] Loading history...")

    parser = HistoryParser()
    try:
        history = parser.parse(csv_path)
    except ValueError as e:
        print(f"    Error loading CSV: {e}")
        return 1

    print(f"    -> Loaded {len(history)} records")
    if parser.warnings:
        print(f"    -> Skipped rows: {len(parser.warnings)}")

    # =========================================================================
    # Step 2: Build profile
    # =========================================================================
    print()
    print("[2] Building profile...")

    engine = ProfilingEngine()
    settings = UserSettings(
        user_id="demo-user",
        preferred_crowd_level=CrowdLevel.LOW,
        max_wait_time=Decimal('20'),
    )
    profile = engine.build_profile(settings, history)

    preferences = profile.preferences
    print(f"    -> Categories: {', '.join(c.value for c in preferences.preferred_categories)}")
    print(f"    -> Crowd levels: {', '.join(c.value for c in preferences.preferred_crowd_levels)}")
    for slot in preferences.preferred_time_slots:
        print(f"    -> Time slot: {slot.start}-{slot.end} (weight {slot.weight})")
    for routine in profile.patterns.routine_patterns:
        print(f"    -> Routine: {routine.description} ({float(routine.confidence):.2f})")

    # =========================================================================
    # Step 3: Rank places
    # =========================================================================
    print()
    print("[3] Ranking places...")

    now = datetime(2024, 10, 7, 12, 30)
    for place, score in engine.scorer.rank_with_scores(SAMPLE_PLACES, profile, now):
        print(f"    -> {place.name}: {float(score):.2f}")

    # =========================================================================
    # Step 4: Predict acceptance
    # =========================================================================
    print()
    print("[4] Predicting acceptance...")

    suggestion = Suggestion(
        id="s-1",
        place=SAMPLE_PLACES[0],
        recommended_time=now,
        estimated_crowd_level=CrowdLevel.LOW,
        estimated_wait_time=Decimal('10'),
    )
    probability = engine.predict_acceptance(suggestion, profile.user_id)
    print(f"    -> {suggestion.place.name} at {now:%H:%M}: {float(probability):.2f}")

    # =========================================================================
    # Summary
    # =========================================================================
    print()
    print("Profile Summary (JSON):")
    print("-" * 30)
    print(json.dumps(profile.to_dict(), indent=2))

    return 0


if __name__ == "__main__":
    csv_file = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(main(csv_file))
