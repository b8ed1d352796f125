"""
Data structures for day planning and route optimization.

Inputs (Coordinate, Location, TimeWindow, Activity) are owned by the caller.
Outputs (conflicts, clusters, optimization results) are derived values,
recomputed from current input on every call and never mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Literal

# =============================================================================
# Vocabularies
# =============================================================================

TravelMode = Literal["walking", "driving", "public_transport"]

TRAVEL_MODES: tuple[str, ...] = ("walking", "driving", "public_transport")

ActivityCategory = Literal[
    "sightseeing",
    "dining",
    "transport",
    "lodging",
    "entertainment",
    "shopping",
]

ACTIVITY_CATEGORIES: tuple[str, ...] = (
    "sightseeing",
    "dining",
    "transport",
    "lodging",
    "entertainment",
    "shopping",
)

ConflictKind = Literal["overlap", "travel_infeasible", "location_conflict"]

Severity = Literal["error", "warning"]

VehicleType = Literal["compact", "standard", "suv", "electric"]

TrafficSeverity = Literal["none", "light", "moderate", "heavy", "severe"]

OptimizerMode = Literal["basic", "enhanced"]


class ValidationError(ValueError):
    """
    Caller supplied input that cannot produce a meaningful result.

    Carries the offending activity id (if any) and field name so the
    caller can point the user at what to fix.
    """

    def __init__(self, message: str, activity_id: str | None = None, field: str | None = None):
        self.reason = message
        self.activity_id = activity_id
        self.field = field
        context = []
        if activity_id is not None:
            context.append(f"activity={activity_id}")
        if field is not None:
            context.append(f"field={field}")
        suffix = f" ({', '.join(context)})" if context else ""
        super().__init__(f"{message}{suffix}")


# =============================================================================
# Input Types
# =============================================================================


@dataclass(frozen=True)
class Coordinate:
    """WGS84 point in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class Location:
    """Where an activity takes place."""

    name: str
    coordinates: Coordinate
    address: str = ""


@dataclass(frozen=True)
class TimeWindow:
    """
    Start/end instants of an activity.

    Duration is derived on access, so it always matches start and end.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValidationError(
                "Start and end must both be naive or both be timezone-aware",
                field="time_window",
            )
        if self.end <= self.start:
            raise ValidationError(
                f"End time {self.end.isoformat()} must be after start time {self.start.isoformat()}",
                field="time_window",
            )

    @property
    def duration_minutes(self) -> float:
        """Length of the window in minutes."""
        return (self.end - self.start).total_seconds() / 60

    def shifted(self, delta: timedelta) -> "TimeWindow":
        """New window moved by delta, duration preserved."""
        return TimeWindow(start=self.start + delta, end=self.end + delta)

    def overlaps(self, other: "TimeWindow") -> bool:
        """True if the two windows share any instant (touching ends don't count)."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Activity:
    """
    One planned item in a day.

    anchored=True means the time window is fixed externally (paid booking,
    tour slot) and the optimizer must not move it relative to other anchors.
    """

    id: str
    title: str
    location: Location
    time_window: TimeWindow
    category: ActivityCategory = "sightseeing"
    cost: float | None = None
    anchored: bool = False
    notes: str = ""

    @property
    def coordinates(self) -> Coordinate:
        return self.location.coordinates

    @property
    def start(self) -> datetime:
        return self.time_window.start

    @property
    def end(self) -> datetime:
        return self.time_window.end


# =============================================================================
# Conflicts (one variant per kind)
# =============================================================================


@dataclass(frozen=True)
class OverlapConflict:
    """Two activities whose time windows intersect."""

    activity_ids: tuple[str, ...]
    message: str
    overlap_minutes: float
    severity: Severity = "error"
    kind: Literal["overlap"] = field(default="overlap", init=False)


@dataclass(frozen=True)
class TravelConflict:
    """Not enough time between two activities to travel from one to the next."""

    activity_ids: tuple[str, ...]
    message: str
    required_minutes: float
    available_minutes: float
    severity: Severity = "warning"
    kind: Literal["travel_infeasible"] = field(default="travel_infeasible", init=False)


@dataclass(frozen=True)
class LocationConflict:
    """
    Reserved for venue-level conflicts (e.g. same-venue capacity).

    No detector produces this variant yet; its trigger condition is undefined.
    """

    activity_ids: tuple[str, ...]
    message: str
    severity: Severity = "warning"
    kind: Literal["location_conflict"] = field(default="location_conflict", init=False)


Conflict = OverlapConflict | TravelConflict | LocationConflict


# =============================================================================
# Clustering
# =============================================================================


@dataclass(frozen=True)
class LocationCluster:
    """
    Activities close enough to be visited together.

    price_range is None when no member has a cost.
    """

    activity_ids: tuple[str, ...]
    centroid: Coordinate
    price_range: tuple[float, float] | None
    time_range: tuple[datetime, datetime]

    @property
    def size(self) -> int:
        return len(self.activity_ids)


# =============================================================================
# Optimization Results
# =============================================================================


@dataclass(frozen=True)
class Savings:
    """Improvement relative to the original ordering (never negative)."""

    time_minutes: float = 0.0
    distance_km: float = 0.0
    cost: float = 0.0


@dataclass(frozen=True)
class RouteOptimizationResult:
    """Output of the basic optimizer."""

    activities: tuple[Activity, ...]
    total_travel_minutes: float
    total_distance_km: float
    efficiency: float  # 0-100
    suggestions: tuple[str, ...] = ()
    savings: Savings = field(default_factory=Savings)
    mode: OptimizerMode = "basic"

    @property
    def activity_ids(self) -> list[str]:
        return [activity.id for activity in self.activities]


@dataclass(frozen=True)
class CostBreakdown:
    """Monetary cost of driving the route (currency of fuel_price)."""

    fuel: float = 0.0
    fuel_liters: float = 0.0
    tolls: float = 0.0
    parking: float = 0.0

    @property
    def total(self) -> float:
        return self.fuel + self.tolls + self.parking


@dataclass(frozen=True)
class SegmentDelay:
    """Traffic delay on one leg of the route."""

    from_id: str
    to_id: str
    severity: TrafficSeverity
    base_minutes: float
    delay_minutes: float


@dataclass(frozen=True)
class TrafficImpact:
    """Traffic summary for the optimized route."""

    base_minutes: float = 0.0  # travel time without traffic
    delay_minutes: float = 0.0  # additional time due to traffic
    most_delayed: tuple[SegmentDelay, ...] = ()


@dataclass(frozen=True)
class EnhancedRouteOptimizationResult(RouteOptimizationResult):
    """
    Output of the enhanced optimizer.

    Same shape whether or not the enhanced computation succeeded. On
    fallback, cost/traffic/co2 are zeroed and fallback_reason says why.
    """

    cost: CostBreakdown = field(default_factory=CostBreakdown)
    traffic: TrafficImpact = field(default_factory=TrafficImpact)
    co2_kg: float = 0.0
    fallback_reason: str | None = None
    mode: OptimizerMode = "enhanced"

    @property
    def degraded(self) -> bool:
        return self.fallback_reason is not None
