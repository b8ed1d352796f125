"""Tests for activity and time window validation."""

import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import pytz

from dayplanner.types import TimeWindow, ValidationError
from dayplanner.validation import validate_activities, validate_activity
from helpers import at, make_activity


class TestTimeWindow:
    """Tests for TimeWindow construction."""

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must be after"):
            TimeWindow(start=at("10:00"), end=at("09:00"))

    def test_zero_length_rejected(self) -> None:
        """End equal to start is not a window."""
        with pytest.raises(ValidationError):
            TimeWindow(start=at("10:00"), end=at("10:00"))

    def test_mixed_naive_and_aware_rejected(self) -> None:
        aware_end = pytz.UTC.localize(datetime(2025, 6, 1, 11, 0))
        with pytest.raises(ValidationError, match="naive"):
            TimeWindow(start=at("10:00"), end=aware_end)

    def test_duration_is_derived(self) -> None:
        window = TimeWindow(start=at("09:15"), end=at("11:00"))
        assert window.duration_minutes == 105

    def test_touching_windows_dont_overlap(self) -> None:
        first = TimeWindow(start=at("09:00"), end=at("10:00"))
        second = TimeWindow(start=at("10:00"), end=at("11:00"))
        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_shifted_preserves_duration(self) -> None:
        window = TimeWindow(start=at("09:00"), end=at("10:30"))
        moved = window.shifted(at("12:00") - at("09:00"))
        assert moved.start == at("12:00")
        assert moved.duration_minutes == 90


class TestValidateActivity:
    """Tests for single-activity rules."""

    def test_valid_activity_passes(self) -> None:
        validate_activity(make_activity("a"))

    def test_too_short_rejected(self) -> None:
        """Activities shorter than 15 minutes are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_activity(make_activity("a", "09:00", "09:10"))
        assert exc_info.value.activity_id == "a"
        assert exc_info.value.field == "time_window"

    def test_minimum_duration_allowed(self) -> None:
        validate_activity(make_activity("a", "09:00", "09:15"))

    def test_too_long_rejected(self) -> None:
        """Activities longer than 12 hours are rejected."""
        with pytest.raises(ValidationError, match="12 hours"):
            validate_activity(make_activity("a", "08:00", "20:30"))

    def test_custom_bounds(self) -> None:
        validate_activity(make_activity("a", "09:00", "09:05"), min_duration_minutes=5)

    def test_unknown_category_rejected(self) -> None:
        activity = replace(make_activity("a"), category="nightclub")
        with pytest.raises(ValidationError) as exc_info:
            validate_activity(activity)
        assert exc_info.value.field == "category"

    def test_negative_cost_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Cost"):
            validate_activity(make_activity("a", cost=-5))

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_activity(make_activity("", title="Untitled"))


class TestValidateActivities:
    """Tests for list-level rules."""

    def test_duplicate_ids_rejected(self) -> None:
        activities = [make_activity("a", "09:00", "10:00"), make_activity("a", "11:00", "12:00")]
        with pytest.raises(ValidationError, match="Duplicate") as exc_info:
            validate_activities(activities)
        assert exc_info.value.activity_id == "a"

    def test_mixed_naive_and_aware_activities_rejected(self) -> None:
        aware = replace(
            make_activity("b"),
            time_window=TimeWindow(
                start=pytz.UTC.localize(datetime(2025, 6, 1, 12, 0)),
                end=pytz.UTC.localize(datetime(2025, 6, 1, 13, 0)),
            ),
        )
        with pytest.raises(ValidationError, match="mix"):
            validate_activities([make_activity("a"), aware])

    def test_empty_list_is_valid(self) -> None:
        validate_activities([])

    def test_inverted_bounds_rejected(self) -> None:
        with pytest.raises(ValueError, match="exceeds"):
            validate_activities([], min_duration_minutes=60, max_duration_minutes=30)

    def test_error_message_names_activity_and_field(self) -> None:
        with pytest.raises(ValidationError, match=r"activity=short, field=time_window"):
            validate_activities([make_activity("short", "09:00", "09:05")])
