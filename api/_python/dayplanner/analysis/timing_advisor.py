"""
Timing suggestions for a day plan.

Advisory only: reads a DayPlan and its conflicts, returns free-text
suggestions plus the best uninterrupted window of the day. Never edits
the plan.

Category timing table (ideal / avoid start hours, local time):
- Sightseeing: mornings and mid-afternoon, not over lunch
- Dining: lunch and dinner hours
- Shopping: late morning and afternoon, not at meal times
- Entertainment: evenings
- Lodging: check-in hours
- Transport: outside rush hours
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

import pytz

from ..geo_math import (
    distance_km,
    format_duration,
    get_current_datetime_in_tz,
    minutes_between,
    to_local,
    travel_time_minutes,
)
from ..types import Activity, ActivityCategory, TimeWindow, ValidationError
from .conflict_detector import sort_by_start

if TYPE_CHECKING:
    from ..day_plan import DayPlan

# A transition with less slack than this is too tight to rely on
MIN_BUFFER_MINUTES = 10
# An idle gap longer than this splits the day
MAX_IDLE_GAP_MINUTES = 90


@dataclass(frozen=True)
class CategoryTiming:
    """Preferred and discouraged start hours for a category."""

    ideal_hours: tuple[int, ...]
    avoid_hours: tuple[int, ...]
    avoid_reason: str = "peak times"


CATEGORY_TIMING: dict[ActivityCategory, CategoryTiming] = {
    "sightseeing": CategoryTiming(ideal_hours=(9, 10, 11, 14, 15, 16), avoid_hours=(12, 13)),
    "dining": CategoryTiming(ideal_hours=(12, 13, 18, 19, 20), avoid_hours=()),
    "shopping": CategoryTiming(ideal_hours=(10, 11, 14, 15, 16), avoid_hours=(12, 13, 18, 19)),
    "entertainment": CategoryTiming(ideal_hours=(19, 20, 21), avoid_hours=(8, 9, 10)),
    "lodging": CategoryTiming(ideal_hours=(15, 16, 17), avoid_hours=(8, 9, 10, 11)),
    "transport": CategoryTiming(ideal_hours=(), avoid_hours=(7, 8, 17, 18), avoid_reason="rush hour"),
}


@dataclass(frozen=True)
class TimingAdvice:
    """Suggestions plus the best uninterrupted stretch of the day."""

    suggestions: tuple[str, ...]
    best_window: TimeWindow | None


@dataclass(frozen=True)
class _Link:
    """Transition between two consecutive activities."""

    current: Activity
    following: Activity
    gap_minutes: float
    slack_minutes: float  # gap minus travel time
    in_conflict: bool


class TimingAdvisor:
    """Suggest timing adjustments for a day plan."""

    def __init__(
        self,
        min_buffer_minutes: float = MIN_BUFFER_MINUTES,
        max_idle_gap_minutes: float = MAX_IDLE_GAP_MINUTES,
    ) -> None:
        self.min_buffer_minutes = min_buffer_minutes
        self.max_idle_gap_minutes = max_idle_gap_minutes

    def advise(self, day_plan: "DayPlan", now: datetime | None = None) -> TimingAdvice:
        """
        Build timing advice for a plan.

        Args:
            day_plan: Plan with conflicts already computed
            now: Current time; defaults to now in the plan's timezone when
                the plan is for today. Windows that have already ended are
                skipped.

        Returns:
            TimingAdvice (best_window is None for an empty plan)
        """
        ordered = sort_by_start(day_plan.activities)
        if not ordered:
            return TimingAdvice(suggestions=("Add activities to plan your day",), best_window=None)

        now = self._resolve_now(day_plan, ordered, now)
        links = self._build_links(day_plan, ordered)

        suggestions: list[str] = []
        suggestions.extend(self._conflict_suggestions(day_plan))
        suggestions.extend(self._link_suggestions(links))
        suggestions.extend(self._category_suggestions(ordered, day_plan.timezone))

        best_window = self._best_window(ordered, links, now)
        if best_window is None and now is not None:
            suggestions.append("All of today's activities have already ended")

        return TimingAdvice(suggestions=tuple(suggestions), best_window=best_window)

    # -------------------------------------------------------------------------
    # Links and windows
    # -------------------------------------------------------------------------

    def _build_links(self, day_plan: "DayPlan", ordered: list[Activity]) -> list[_Link]:
        conflict_pairs = {frozenset(c.activity_ids) for c in day_plan.conflicts}
        links = []
        for current, following in zip(ordered, ordered[1:]):
            gap = minutes_between(current.end, following.start)
            travel = travel_time_minutes(
                distance_km(current.coordinates, following.coordinates), day_plan.mode
            )
            links.append(
                _Link(
                    current=current,
                    following=following,
                    gap_minutes=gap,
                    slack_minutes=gap - travel,
                    in_conflict=frozenset((current.id, following.id)) in conflict_pairs,
                )
            )
        return links

    def _is_healthy(self, link: _Link) -> bool:
        return (
            not link.in_conflict
            and link.slack_minutes >= self.min_buffer_minutes
            and link.gap_minutes <= self.max_idle_gap_minutes
        )

    def _best_window(
        self, ordered: list[Activity], links: list[_Link], now: datetime | None
    ) -> TimeWindow | None:
        """Longest chain of healthy links; ties go to the earliest chain."""
        chains: list[list[Activity]] = [[ordered[0]]]
        for link in links:
            if self._is_healthy(link):
                chains[-1].append(link.following)
            else:
                chains.append([link.following])

        best: TimeWindow | None = None
        for chain in chains:
            window = TimeWindow(start=chain[0].start, end=max(a.end for a in chain))
            if now is not None and window.end <= now:
                continue
            if best is None or window.duration_minutes > best.duration_minutes:
                best = window
        return best

    def _resolve_now(
        self, day_plan: "DayPlan", ordered: list[Activity], now: datetime | None
    ) -> datetime | None:
        aware = ordered[0].start.tzinfo is not None

        if now is None:
            if day_plan.timezone is None:
                return None
            current = get_current_datetime_in_tz(day_plan.timezone, aware=aware)
            # Only today's plan has a "past"
            return current if current.date() == day_plan.date else None

        if aware and now.tzinfo is None:
            if day_plan.timezone is None:
                raise ValidationError(
                    "A naive 'now' needs the plan timezone to compare with aware activity times",
                    field="timezone",
                )
            return pytz.timezone(day_plan.timezone).localize(now)
        if not aware and now.tzinfo is not None:
            if day_plan.timezone is None:
                raise ValidationError(
                    "An aware 'now' needs the plan timezone to compare with naive activity times",
                    field="timezone",
                )
            return to_local(now, day_plan.timezone).replace(tzinfo=None)
        return now

    # -------------------------------------------------------------------------
    # Suggestions
    # -------------------------------------------------------------------------

    def _conflict_suggestions(self, day_plan: "DayPlan") -> list[str]:
        suggestions = []
        overlaps = sum(1 for c in day_plan.conflicts if c.kind == "overlap")
        shortfalls = sum(1 for c in day_plan.conflicts if c.kind == "travel_infeasible")
        if overlaps:
            noun = "overlap" if overlaps == 1 else "overlaps"
            suggestions.append(f"Resolve {overlaps} {noun} before fine-tuning timing")
        if shortfalls:
            noun = "transition doesn't" if shortfalls == 1 else "transitions don't"
            suggestions.append(f"{shortfalls} {noun} leave enough travel time")
        return suggestions

    def _link_suggestions(self, links: list[_Link]) -> list[str]:
        suggestions = []
        for link in links:
            if link.in_conflict:
                continue
            if link.slack_minutes < self.min_buffer_minutes:
                suggestions.append(
                    f'Only {round(link.slack_minutes)} min of slack between "{link.current.title}" '
                    f'and "{link.following.title}" - consider starting "{link.following.title}" later'
                )
            elif link.gap_minutes > self.max_idle_gap_minutes:
                suggestions.append(
                    f'{format_duration(link.gap_minutes)} free between "{link.current.title}" '
                    f'and "{link.following.title}" - room for another activity nearby'
                )
        return suggestions

    def _category_suggestions(self, ordered: list[Activity], tz_name: str | None) -> list[str]:
        suggestions = []
        for activity in ordered:
            timing = CATEGORY_TIMING[activity.category]
            hour = to_local(activity.start, tz_name).hour

            if hour in timing.avoid_hours:
                suggestions.append(
                    f"Consider rescheduling {activity.title} to avoid {timing.avoid_reason}"
                )
            elif timing.ideal_hours and hour not in timing.ideal_hours:
                ideal = ", ".join(f"{h}:00" for h in timing.ideal_hours)
                suggestions.append(f"{activity.title} works best around {ideal}")
        return suggestions


def advise_timing(day_plan: "DayPlan", now: datetime | None = None) -> TimingAdvice:
    """Convenience wrapper around TimingAdvisor.advise()."""
    return TimingAdvisor().advise(day_plan, now)
