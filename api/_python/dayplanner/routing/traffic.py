"""
Traffic severity buckets and caller-supplied travel hints.

Live traffic is never fetched here. Callers pass severities per segment
or per departure hour; anything not covered is treated as free flowing.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..geo_math import to_local
from ..types import Activity, TrafficSeverity

# Travel-time multiplier per severity bucket
TRAFFIC_MULTIPLIERS: dict[TrafficSeverity, float] = {
    "none": 1.0,
    "light": 1.15,
    "moderate": 1.35,
    "heavy": 1.6,
    "severe": 2.0,
}

Segment = tuple[str, str]  # (from activity id, to activity id)


@dataclass(frozen=True)
class TravelHints:
    """
    Externally sourced traffic and cost hints.

    All fields are optional; missing entries mean "no traffic" and
    "no toll/parking cost".
    """

    segment_traffic: Mapping[Segment, TrafficSeverity] = field(default_factory=dict)
    hourly_traffic: Mapping[int, TrafficSeverity] = field(default_factory=dict)  # departure hour 0-23
    tolls: Mapping[Segment, float] = field(default_factory=dict)
    parking: Mapping[str, float] = field(default_factory=dict)  # activity id -> cost


class TrafficModel:
    """
    Resolve a traffic severity for each leg of a route.

    Segment hints win over hourly hints; the hourly lookup uses the local
    hour at which the traveler leaves the earlier activity.
    """

    def __init__(self, hints: TravelHints | None = None, tz_name: str | None = None) -> None:
        self.hints = hints or TravelHints()
        self.tz_name = tz_name

    def severity(self, current: Activity, following: Activity) -> TrafficSeverity:
        segment = (current.id, following.id)
        if segment in self.hints.segment_traffic:
            severity = self.hints.segment_traffic[segment]
        else:
            departure_hour = to_local(current.end, self.tz_name).hour
            severity = self.hints.hourly_traffic.get(departure_hour, "none")

        if severity not in TRAFFIC_MULTIPLIERS:
            raise ValueError(f"Unknown traffic severity '{severity}' for {segment[0]} -> {segment[1]}")
        return severity

    def factor(self, current: Activity, following: Activity) -> float:
        """Travel-time multiplier for one leg."""
        return TRAFFIC_MULTIPLIERS[self.severity(current, following)]


def estimate_hourly_hints() -> dict[int, TrafficSeverity]:
    """
    Rough time-of-day traffic profile for callers with no live data.

    - Rush hours (07-09, 17-19): heavy
    - Shoulders of the peaks (06, 10, 16, 20): moderate
    - Business hours (11-15): light
    - Otherwise: none

    Never applied implicitly; pass it as TravelHints.hourly_traffic.
    """
    hints: dict[int, TrafficSeverity] = {}
    for hour in range(24):
        if 7 <= hour <= 9 or 17 <= hour <= 19:
            hints[hour] = "heavy"
        elif hour in (6, 10, 16, 20):
            hints[hour] = "moderate"
        elif 11 <= hour <= 15:
            hints[hour] = "light"
        else:
            hints[hour] = "none"
    return hints
