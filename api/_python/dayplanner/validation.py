"""
Input validation for activity lists.

Validation failures raise ValidationError immediately. Scheduling
problems (overlaps, tight travel) are not validation failures; those are
reported as conflicts.
"""

from collections.abc import Sequence

from .types import ACTIVITY_CATEGORIES, TRAVEL_MODES, Activity, ValidationError

# Duration bounds for a single activity (minutes)
DEFAULT_MIN_DURATION_MINUTES = 15
DEFAULT_MAX_DURATION_MINUTES = 12 * 60


def validate_mode(mode: str) -> None:
    """Reject travel modes without a known average speed."""
    if mode not in TRAVEL_MODES:
        raise ValidationError(
            f"Unknown travel mode '{mode}', expected one of: {', '.join(TRAVEL_MODES)}",
            field="mode",
        )


def validate_activity(
    activity: Activity,
    min_duration_minutes: float = DEFAULT_MIN_DURATION_MINUTES,
    max_duration_minutes: float = DEFAULT_MAX_DURATION_MINUTES,
) -> None:
    """
    Check a single activity against category and duration rules.

    TimeWindow already rejects end <= start on construction.
    """
    if not activity.id:
        raise ValidationError("Activity id must not be empty", field="id")

    if activity.category not in ACTIVITY_CATEGORIES:
        raise ValidationError(
            f"Unknown category '{activity.category}'",
            activity_id=activity.id,
            field="category",
        )

    duration = activity.time_window.duration_minutes
    if duration < min_duration_minutes:
        raise ValidationError(
            f"Duration must be at least {min_duration_minutes:g} minutes, got {duration:g}",
            activity_id=activity.id,
            field="time_window",
        )
    if duration > max_duration_minutes:
        raise ValidationError(
            f"Duration cannot exceed {max_duration_minutes / 60:g} hours, got {duration / 60:.1f}",
            activity_id=activity.id,
            field="time_window",
        )

    if activity.cost is not None and activity.cost < 0:
        raise ValidationError(
            f"Cost must be non-negative, got {activity.cost}",
            activity_id=activity.id,
            field="cost",
        )


def validate_activities(
    activities: Sequence[Activity],
    min_duration_minutes: float = DEFAULT_MIN_DURATION_MINUTES,
    max_duration_minutes: float = DEFAULT_MAX_DURATION_MINUTES,
) -> None:
    """
    Validate a day's activity list.

    Raises:
        ValidationError: duplicate ids, mixed naive/aware times, or any
            per-activity rule failure
    """
    if min_duration_minutes > max_duration_minutes:
        raise ValueError(
            f"min_duration_minutes ({min_duration_minutes}) exceeds "
            f"max_duration_minutes ({max_duration_minutes})"
        )

    seen: set[str] = set()
    aware: bool | None = None

    for activity in activities:
        if activity.id in seen:
            raise ValidationError(
                "Duplicate activity id in day plan",
                activity_id=activity.id,
                field="id",
            )
        seen.add(activity.id)

        is_aware = activity.start.tzinfo is not None
        if aware is None:
            aware = is_aware
        elif aware != is_aware:
            raise ValidationError(
                "Cannot mix timezone-aware and naive activity times in one day",
                activity_id=activity.id,
                field="time_window",
            )

        validate_activity(activity, min_duration_minutes, max_duration_minutes)
