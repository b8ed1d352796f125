"""
Day plan: one date, an ordered list of activities, and their conflicts.

Conflicts are recomputed whenever a plan is built, and every edit
returns a new plan, so a plan never carries conflicts that don't match
its activities.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date

import pytz

from .analysis.conflict_detector import ConflictDetector
from .types import Activity, Conflict, RouteOptimizationResult, TravelMode, ValidationError


@dataclass(frozen=True)
class DayPlan:
    """
    A single day's planned activities, in execution order.

    conflicts is derived; it is not a constructor argument.
    """

    date: date
    activities: tuple[Activity, ...] = ()
    timezone: str | None = None  # IANA timezone of the destination
    mode: TravelMode = "driving"  # Travel mode used for conflict detection
    conflicts: tuple[Conflict, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "activities", tuple(self.activities))

        if self.timezone is not None:
            try:
                pytz.timezone(self.timezone)
            except pytz.UnknownTimeZoneError:
                raise ValidationError(
                    f"Unknown timezone '{self.timezone}'", field="timezone"
                ) from None

        detector = ConflictDetector(mode=self.mode)
        object.__setattr__(self, "conflicts", tuple(detector.detect(self.activities)))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def activity_ids(self) -> list[str]:
        return [a.id for a in self.activities]

    @property
    def has_errors(self) -> bool:
        """True if any conflict is a definite violation."""
        return any(c.severity == "error" for c in self.conflicts)

    def get_activity(self, activity_id: str) -> Activity:
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        raise ValidationError("No such activity in day plan", activity_id=activity_id, field="id")

    def conflicts_for(self, activity_id: str) -> list[Conflict]:
        """Conflicts that reference the given activity."""
        return [c for c in self.conflicts if activity_id in c.activity_ids]

    # -------------------------------------------------------------------------
    # Structural edits (each returns a new plan)
    # -------------------------------------------------------------------------

    def with_activities(self, activities: Iterable[Activity]) -> "DayPlan":
        """New plan with a replaced activity list."""
        return DayPlan(
            date=self.date,
            activities=tuple(activities),
            timezone=self.timezone,
            mode=self.mode,
        )

    def add_activity(self, activity: Activity, index: int | None = None) -> "DayPlan":
        """Insert an activity (appended if index is None)."""
        activities = list(self.activities)
        if index is None:
            activities.append(activity)
        else:
            activities.insert(index, activity)
        return self.with_activities(activities)

    def remove_activity(self, activity_id: str) -> "DayPlan":
        self.get_activity(activity_id)
        return self.with_activities(a for a in self.activities if a.id != activity_id)

    def move_activity(self, activity_id: str, new_index: int) -> "DayPlan":
        """Move an activity to a new position in the execution order."""
        activity = self.get_activity(activity_id)
        if not 0 <= new_index < len(self.activities):
            raise ValidationError(
                f"Position {new_index} is out of range for {len(self.activities)} activities",
                activity_id=activity_id,
                field="index",
            )
        remaining = [a for a in self.activities if a.id != activity_id]
        remaining.insert(new_index, activity)
        return self.with_activities(remaining)

    def update_activity(self, activity_id: str, **changes) -> "DayPlan":
        """Replace fields of one activity (e.g. time_window=..., anchored=True)."""
        if "id" in changes and changes["id"] != activity_id:
            raise ValidationError("Activity id cannot be changed", activity_id=activity_id, field="id")
        target = self.get_activity(activity_id)
        updated = replace(target, **changes)
        return self.with_activities(updated if a.id == activity_id else a for a in self.activities)

    def apply(self, result: RouteOptimizationResult) -> "DayPlan":
        """
        Accept an optimizer result.

        The result must contain exactly this plan's activities; a result
        computed for an older version of the plan is rejected. Use
        with_activities() for lists whose times were rescheduled.
        """
        if len(result.activities) != len(self.activities) or set(result.activities) != set(
            self.activities
        ):
            raise ValidationError(
                "Optimization result does not match the current activities", field="activities"
            )
        return self.with_activities(result.activities)
