"""
Temporal conflict detection for a day's activities.

Flags two kinds of problems:
1. Overlaps - two activities whose time windows intersect (error)
2. Travel shortfalls - the gap between consecutive activities is shorter
   than the estimated travel time between their locations (warning)

Conflicts are normal output for a plan that is still being edited; they
are returned as data, never raised.
"""

from collections.abc import Sequence

from ..geo_math import distance_km, minutes_between, travel_time_minutes
from ..types import Activity, Conflict, OverlapConflict, TravelConflict, TravelMode
from ..validation import (
    DEFAULT_MAX_DURATION_MINUTES,
    DEFAULT_MIN_DURATION_MINUTES,
    validate_activities,
    validate_mode,
)


def sort_by_start(activities: Sequence[Activity]) -> list[Activity]:
    """Stable sort by start time; ties keep input order."""
    indexed = sorted(enumerate(activities), key=lambda pair: (pair[1].start, pair[0]))
    return [activity for _, activity in indexed]


class ConflictDetector:
    """
    Detect overlaps and travel-time shortfalls.

    Stateless apart from its settings: detect() can be called any number
    of times, from any thread, and returns a fresh list each time.
    """

    def __init__(
        self,
        mode: TravelMode = "driving",
        min_duration_minutes: float = DEFAULT_MIN_DURATION_MINUTES,
        max_duration_minutes: float = DEFAULT_MAX_DURATION_MINUTES,
    ) -> None:
        """
        Initialize detector.

        Args:
            mode: Travel mode used for travel-time estimates
            min_duration_minutes: Shortest allowed activity
            max_duration_minutes: Longest allowed activity

        Raises:
            ValidationError: Unknown travel mode
        """
        validate_mode(mode)
        self.mode = mode
        self.min_duration_minutes = min_duration_minutes
        self.max_duration_minutes = max_duration_minutes

    def detect(self, activities: Sequence[Activity]) -> list[Conflict]:
        """
        Detect all conflicts in an activity list (any order).

        Args:
            activities: Activities for one day

        Returns:
            Conflicts in chronological order of the later activity

        Raises:
            ValidationError: If the list itself is invalid (duplicate ids,
                durations out of bounds)
        """
        validate_activities(activities, self.min_duration_minutes, self.max_duration_minutes)

        ordered = sort_by_start(activities)
        conflicts: list[Conflict] = []

        # Activities that started earlier and may still be running
        running: list[Activity] = []

        for position, current in enumerate(ordered):
            running = [a for a in running if a.end > current.start]
            for earlier in running:
                conflicts.append(self._overlap_conflict(earlier, current))
            running.append(current)

            if position == 0:
                continue

            previous = ordered[position - 1]
            if previous.end > current.start:
                # Already reported as an overlap
                continue

            travel = self._travel_conflict(previous, current)
            if travel is not None:
                conflicts.append(travel)

        return conflicts

    def _overlap_conflict(self, earlier: Activity, later: Activity) -> OverlapConflict:
        overlap_end = min(earlier.end, later.end)
        overlap_minutes = minutes_between(later.start, overlap_end)
        return OverlapConflict(
            activity_ids=(earlier.id, later.id),
            message=f'"{earlier.title}" overlaps with "{later.title}"',
            overlap_minutes=overlap_minutes,
        )

    def _travel_conflict(self, current: Activity, following: Activity) -> TravelConflict | None:
        gap = minutes_between(current.end, following.start)
        required = travel_time_minutes(
            distance_km(current.coordinates, following.coordinates), self.mode
        )
        if required <= gap:
            return None

        return TravelConflict(
            activity_ids=(current.id, following.id),
            message=(
                f'Need {round(required)} min to travel from "{current.title}" to '
                f'"{following.title}", but only {round(gap)} min available'
            ),
            required_minutes=required,
            available_minutes=gap,
        )


def detect_conflicts(
    activities: Sequence[Activity],
    mode: TravelMode = "driving",
    min_duration_minutes: float = DEFAULT_MIN_DURATION_MINUTES,
    max_duration_minutes: float = DEFAULT_MAX_DURATION_MINUTES,
) -> list[Conflict]:
    """Convenience wrapper around ConflictDetector.detect()."""
    detector = ConflictDetector(mode, min_duration_minutes, max_duration_minutes)
    return detector.detect(activities)
