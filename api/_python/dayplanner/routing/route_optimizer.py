"""
Heuristic reordering of a day's activities to cut travel.

Algorithm:
1. Split the day into runs of non-anchored activities. Anchored
   activities (booked slots) stay where they are and bound the runs.
2. Per run, build a nearest-neighbor ordering seeded at the run's entry
   point (the preceding anchor, or the first activity of the day).
3. Improve it with a bounded local search: adjacent swaps and reversals
   of three consecutive stops, kept only when they strictly cut the run's
   travel cost and don't make a feasible transition infeasible.
4. Reassemble. Start/end times are not changed, only the sequence; see
   rescheduler.reschedule() to derive new times.

Each run is only replaced by a cheaper ordering, so the result is never
worse than the input.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..analysis.location_clusterer import find_location_clusters
from ..geo_math import distance_km, minutes_between, travel_time_minutes
from ..types import Activity, Coordinate, RouteOptimizationResult, Savings, TravelMode
from ..validation import validate_activities, validate_mode

logger = logging.getLogger(__name__)

EPSILON = 1e-9
MAX_IMPROVEMENT_PASSES = 25

# Suggestion thresholds
NOTABLE_TIME_SAVINGS_MINUTES = 30
NOTABLE_DISTANCE_SAVINGS_KM = 1.0
FAR_SEGMENT_MINUTES = 60

# Multiplier applied to a leg's travel time (traffic); 1.0 = none
SegmentFactor = Callable[[Activity, Activity], float]


@dataclass(frozen=True)
class OptimizeOptions:
    """Caller choices for an optimize call."""

    mode: TravelMode = "driving"
    prioritize_time: bool = True  # False = minimize distance instead
    preserve_time_constraints: bool = True
    start_location: Coordinate | None = None  # Where the day starts (e.g. hotel)


@dataclass
class _Run:
    """Maximal stretch of non-anchored activities."""

    start: int  # Index of the first activity in the day
    activities: list[Activity]
    entry: Activity | None  # Preceding anchor
    exit: Activity | None  # Following anchor


def _no_traffic(current: Activity, following: Activity) -> float:
    return 1.0


class RouteOptimizer:
    """
    Reorder non-anchored activities to reduce travel time or distance.

    Holds only its options; optimize() is a pure function of its input.
    """

    def __init__(
        self,
        options: OptimizeOptions | None = None,
        segment_factor: SegmentFactor | None = None,
    ) -> None:
        """
        Initialize optimizer.

        Args:
            options: Mode and constraint choices (defaults: driving, time)
            segment_factor: Per-leg travel-time multiplier; the enhanced
                optimizer passes its traffic model here

        Raises:
            ValidationError: Unknown travel mode
        """
        self.options = options or OptimizeOptions()
        validate_mode(self.options.mode)
        self.segment_factor = segment_factor or _no_traffic

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def optimize(self, activities: Sequence[Activity]) -> RouteOptimizationResult:
        """
        Compute an improved ordering.

        Args:
            activities: Activities in their current planned order

        Returns:
            RouteOptimizationResult with the (possibly) reordered list

        Raises:
            ValidationError: If the activity list is invalid
        """
        original = list(activities)
        validate_activities(original)

        if len(original) <= 1:
            return RouteOptimizationResult(
                activities=tuple(original),
                total_travel_minutes=0.0,
                total_distance_km=0.0,
                efficiency=100.0,
            )

        ordered = self.reorder(original)
        return self.build_result(original, ordered)

    def reorder(self, activities: list[Activity]) -> list[Activity]:
        """Return the optimized sequence (same activities, same times)."""
        runs = self._partition(activities)
        logger.debug(
            "Optimizing %d activities in %d run(s), %d anchored",
            len(activities),
            len(runs),
            sum(1 for a in activities if a.anchored),
        )

        ordered = list(activities)
        for run_number, run in enumerate(runs):
            seed = None
            if run.entry is None and run_number == 0:
                seed = self.options.start_location
            improved = self._optimize_run(run, seed)
            ordered[run.start : run.start + len(improved)] = improved
        return ordered

    def build_result(
        self, original: list[Activity], ordered: list[Activity]
    ) -> RouteOptimizationResult:
        """Metrics and suggestions for a reordering of original."""
        baseline_minutes = self.route_minutes(original)
        baseline_km = self.route_distance(original)
        optimized_minutes = self.route_minutes(ordered)
        optimized_km = self.route_distance(ordered)

        savings = Savings(
            time_minutes=max(0.0, baseline_minutes - optimized_minutes),
            distance_km=max(0.0, baseline_km - optimized_km),
        )

        return RouteOptimizationResult(
            activities=tuple(ordered),
            total_travel_minutes=optimized_minutes,
            total_distance_km=optimized_km,
            efficiency=efficiency_score(baseline_minutes, optimized_minutes),
            suggestions=tuple(self._suggestions(ordered, savings)),
            savings=savings,
        )

    def segment_minutes(self, current: Activity, following: Activity) -> float:
        """Travel time for one leg, including the segment factor."""
        return travel_time_minutes(
            distance_km(current.coordinates, following.coordinates),
            self.options.mode,
            self.segment_factor(current, following),
        )

    def route_minutes(self, ordered: Sequence[Activity]) -> float:
        return sum(self.segment_minutes(a, b) for a, b in zip(ordered, ordered[1:]))

    def route_distance(self, ordered: Sequence[Activity]) -> float:
        return sum(distance_km(a.coordinates, b.coordinates) for a, b in zip(ordered, ordered[1:]))

    # -------------------------------------------------------------------------
    # Runs
    # -------------------------------------------------------------------------

    def _partition(self, activities: list[Activity]) -> list[_Run]:
        """Split into maximal runs of non-anchored activities."""
        runs: list[_Run] = []
        current: _Run | None = None
        previous_anchor: Activity | None = None

        for index, activity in enumerate(activities):
            if activity.anchored:
                if current is not None:
                    current.exit = activity
                    runs.append(current)
                    current = None
                previous_anchor = activity
                continue

            if current is None:
                current = _Run(start=index, activities=[], entry=previous_anchor, exit=None)
            current.activities.append(activity)

        if current is not None:
            runs.append(current)
        return runs

    def _optimize_run(self, run: _Run, seed: Coordinate | None) -> list[Activity]:
        original = list(run.activities)
        if len(original) == 1 and run.entry is None and run.exit is None:
            return original

        best = original
        candidate = self._nearest_neighbor(run, seed)
        if self._accept(run, best, candidate):
            best = candidate

        return self._improve(run, best)

    def _nearest_neighbor(self, run: _Run, seed: Coordinate | None) -> list[Activity]:
        """
        Greedy ordering: repeatedly visit the closest unvisited activity.

        Starts from the entry anchor, the caller's start location, or (when
        the run opens the day) the run's first activity.
        """
        unvisited = list(run.activities)
        ordered: list[Activity] = []

        if run.entry is not None:
            position = run.entry.coordinates
        elif seed is not None:
            position = seed
        else:
            first = unvisited.pop(0)
            ordered.append(first)
            position = first.coordinates

        while unvisited:
            nearest = min(unvisited, key=lambda a: distance_km(position, a.coordinates))
            unvisited.remove(nearest)
            ordered.append(nearest)
            position = nearest.coordinates

        return ordered

    def _improve(self, run: _Run, order: list[Activity]) -> list[Activity]:
        """Bounded local search over adjacent swaps and triple reversals."""
        best = order
        for _ in range(MAX_IMPROVEMENT_PASSES):
            improved = False
            for i in range(len(best) - 1):
                for width in (2, 3):
                    if i + width > len(best):
                        continue
                    candidate = best[:i] + best[i : i + width][::-1] + best[i + width :]
                    if self._accept(run, best, candidate):
                        best = candidate
                        improved = True
            if not improved:
                break
        return best

    # -------------------------------------------------------------------------
    # Acceptance
    # -------------------------------------------------------------------------

    def _links(self, run: _Run, order: list[Activity]) -> list[tuple[Activity, Activity]]:
        stops = list(order)
        if run.entry is not None:
            stops.insert(0, run.entry)
        if run.exit is not None:
            stops.append(run.exit)
        return list(zip(stops, stops[1:]))

    def _link_cost(self, current: Activity, following: Activity) -> float:
        if self.options.prioritize_time:
            return self.segment_minutes(current, following)
        return distance_km(current.coordinates, following.coordinates)

    def _is_feasible(self, current: Activity, following: Activity) -> bool:
        """Same rule as the conflict detector: the gap covers the travel time."""
        gap = minutes_between(current.end, following.start)
        required = travel_time_minutes(
            distance_km(current.coordinates, following.coordinates), self.options.mode
        )
        return required <= gap

    def _accept(self, run: _Run, current: list[Activity], candidate: list[Activity]) -> bool:
        """
        Keep a candidate only if it is strictly cheaper, adds no travel
        time, and (when preserving time constraints) breaks no feasible link.
        """
        current_links = self._links(run, current)
        candidate_links = self._links(run, candidate)

        current_cost = sum(self._link_cost(a, b) for a, b in current_links)
        candidate_cost = sum(self._link_cost(a, b) for a, b in candidate_links)
        if candidate_cost >= current_cost - EPSILON:
            return False

        current_minutes = sum(self.segment_minutes(a, b) for a, b in current_links)
        candidate_minutes = sum(self.segment_minutes(a, b) for a, b in candidate_links)
        if candidate_minutes > current_minutes + EPSILON:
            return False

        if self.options.preserve_time_constraints:
            for before, after in zip(current_links, candidate_links):
                if self._is_feasible(*before) and not self._is_feasible(*after):
                    return False

        return True

    # -------------------------------------------------------------------------
    # Suggestions
    # -------------------------------------------------------------------------

    def _suggestions(self, ordered: list[Activity], savings: Savings) -> list[str]:
        suggestions = []

        if savings.time_minutes > NOTABLE_TIME_SAVINGS_MINUTES:
            suggestions.append(
                f"Optimized route saves {round(savings.time_minutes)} minutes of travel time"
            )

        if savings.distance_km > NOTABLE_DISTANCE_SAVINGS_KM:
            suggestions.append(f"Reduces total travel distance by {savings.distance_km:.1f} km")

        if any(self.segment_minutes(a, b) > FAR_SEGMENT_MINUTES for a, b in zip(ordered, ordered[1:])):
            suggestions.append("Some activities are far apart - consider transportation mode or timing")

        clusters = find_location_clusters(ordered)
        if len(clusters) > 1:
            suggestions.append(
                f"Found {len(clusters)} location clusters - consider scheduling by area"
            )

        if all(a.anchored for a in ordered):
            suggestions.append("All activities are anchored - order kept as booked")

        if not suggestions:
            suggestions.append("Your route is already well optimized!")

        return suggestions


def efficiency_score(baseline_minutes: float, optimized_minutes: float) -> float:
    """
    0-100 score from baseline and optimized travel time.

    A route with no travel at all is 100% efficient.
    """
    if baseline_minutes <= EPSILON:
        return 100.0
    score = 100 * baseline_minutes / max(optimized_minutes, EPSILON)
    return round(min(100.0, max(0.0, score)), 1)


def optimize_route(
    activities: Sequence[Activity], options: OptimizeOptions | None = None
) -> RouteOptimizationResult:
    """Convenience wrapper around RouteOptimizer.optimize()."""
    return RouteOptimizer(options).optimize(activities)
