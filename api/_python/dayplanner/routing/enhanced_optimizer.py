"""
Traffic, cost and emissions aware route optimization.

Runs the basic optimizer with a traffic-weighted travel time per leg,
then prices the original and optimized routes (fuel, tolls, parking,
CO2). Hints are supplied by the caller; nothing is fetched.

If anything in the enhanced computation fails (unknown vehicle type,
negative price, unknown traffic severity, malformed hints) the basic
result is returned in the enhanced shape with fallback_reason set.
Invalid activity lists and travel modes are not a fallback case:
ValidationError propagates.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..types import (
    Activity,
    CostBreakdown,
    EnhancedRouteOptimizationResult,
    RouteOptimizationResult,
    Savings,
    SegmentDelay,
    TrafficImpact,
    VehicleType,
)
from ..validation import validate_activities, validate_mode
from .cost_estimator import CostEstimator
from .route_optimizer import OptimizeOptions, RouteOptimizer, efficiency_score
from .traffic import TrafficModel, TravelHints

logger = logging.getLogger(__name__)

MOST_DELAYED_SEGMENTS = 3

# Suggestion thresholds
NOTABLE_TIME_SAVINGS_MINUTES = 15
NOTABLE_DISTANCE_SAVINGS_KM = 1.0
NOTABLE_COST_SAVINGS = 5.0
HIGH_CO2_KG = 20.0


@dataclass(frozen=True)
class EnhancedOptimizeOptions(OptimizeOptions):
    """Basic options plus vehicle, pricing and traffic choices."""

    vehicle_type: VehicleType = "standard"
    fuel_price: float = 1.45  # Per liter
    consider_traffic: bool = True
    consider_tolls: bool = False
    consider_parking: bool = False
    hints: TravelHints = field(default_factory=TravelHints)
    timezone: str | None = None  # For hourly traffic hints on aware times

    def basic(self) -> OptimizeOptions:
        """The subset understood by the basic optimizer."""
        return OptimizeOptions(
            mode=self.mode,
            prioritize_time=self.prioritize_time,
            preserve_time_constraints=self.preserve_time_constraints,
            start_location=self.start_location,
        )


class EnhancedRouteOptimizer:
    """Route optimizer that accounts for traffic and travel costs."""

    def __init__(self, options: EnhancedOptimizeOptions | None = None) -> None:
        self.options = options or EnhancedOptimizeOptions()
        validate_mode(self.options.mode)

    def optimize(self, activities: Sequence[Activity]) -> EnhancedRouteOptimizationResult:
        """
        Compute an improved ordering with traffic, cost and CO2 figures.

        Args:
            activities: Activities in their current planned order

        Returns:
            EnhancedRouteOptimizationResult (degraded if the enhanced
            computation failed)

        Raises:
            ValidationError: If the activity list is invalid
        """
        original = list(activities)
        validate_activities(original)

        try:
            return self._optimize(original)
        except Exception as e:
            logger.warning("Enhanced optimization failed, using basic result: %s", e)
            basic = RouteOptimizer(self.options.basic()).optimize(original)
            return _as_enhanced(basic, fallback_reason=str(e))

    def _optimize(self, original: list[Activity]) -> EnhancedRouteOptimizationResult:
        options = self.options
        estimator = CostEstimator(options.mode, options.vehicle_type, options.fuel_price)

        traffic = None
        if options.consider_traffic:
            traffic = TrafficModel(options.hints, options.timezone)
        weighted = RouteOptimizer(options.basic(), traffic.factor if traffic else None)
        plain = RouteOptimizer(options.basic())

        ordered = weighted.reorder(original) if len(original) > 1 else list(original)

        baseline_minutes = weighted.route_minutes(original)
        optimized_minutes = weighted.route_minutes(ordered)
        base_minutes = plain.route_minutes(ordered)
        baseline_km = weighted.route_distance(original)
        optimized_km = weighted.route_distance(ordered)

        original_cost = estimator.estimate(
            original, options.hints, options.consider_tolls, options.consider_parking
        )
        optimized_cost = estimator.estimate(
            ordered, options.hints, options.consider_tolls, options.consider_parking
        )

        savings = Savings(
            time_minutes=max(0.0, baseline_minutes - optimized_minutes),
            distance_km=max(0.0, baseline_km - optimized_km),
            cost=max(0.0, original_cost.total - optimized_cost.total),
        )
        impact = TrafficImpact(
            base_minutes=base_minutes,
            delay_minutes=max(0.0, optimized_minutes - base_minutes),
            most_delayed=tuple(self._most_delayed(ordered, plain, traffic)),
        )
        co2 = estimator.co2_kg(optimized_km)

        logger.debug(
            "Enhanced optimization: %.1f -> %.1f min, delay %.1f min, cost %.2f",
            baseline_minutes,
            optimized_minutes,
            impact.delay_minutes,
            optimized_cost.total,
        )

        return EnhancedRouteOptimizationResult(
            activities=tuple(ordered),
            total_travel_minutes=optimized_minutes,
            total_distance_km=optimized_km,
            efficiency=efficiency_score(baseline_minutes, optimized_minutes),
            suggestions=tuple(self._suggestions(savings, impact, co2, len(ordered))),
            savings=savings,
            cost=optimized_cost,
            traffic=impact,
            co2_kg=co2,
        )

    def _most_delayed(
        self, ordered: list[Activity], plain: RouteOptimizer, traffic: TrafficModel | None
    ) -> list[SegmentDelay]:
        if traffic is None:
            return []

        delays = []
        for current, following in zip(ordered, ordered[1:]):
            base = plain.segment_minutes(current, following)
            factor = traffic.factor(current, following)
            if factor <= 1.0 or base <= 0:
                continue
            delays.append(
                SegmentDelay(
                    from_id=current.id,
                    to_id=following.id,
                    severity=traffic.severity(current, following),
                    base_minutes=base,
                    delay_minutes=base * (factor - 1.0),
                )
            )

        # Stable: equal delays keep route order
        delays.sort(key=lambda d: d.delay_minutes, reverse=True)
        return delays[:MOST_DELAYED_SEGMENTS]

    def _suggestions(
        self, savings: Savings, impact: TrafficImpact, co2_kg: float, count: int
    ) -> list[str]:
        if count <= 1:
            return []

        suggestions = []
        if savings.time_minutes > NOTABLE_TIME_SAVINGS_MINUTES:
            suggestions.append(
                f"Enhanced optimization saves {round(savings.time_minutes)} minutes including traffic delays"
            )
        if savings.distance_km > NOTABLE_DISTANCE_SAVINGS_KM:
            suggestions.append(f"Reduces total travel distance by {savings.distance_km:.1f} km")
        if savings.cost > NOTABLE_COST_SAVINGS:
            suggestions.append(f"Saves {savings.cost:.2f} in total travel costs")
        if any(d.severity in ("heavy", "severe") for d in impact.most_delayed):
            suggestions.append("Heavy traffic detected - consider adjusting departure times")
        if co2_kg > HIGH_CO2_KG:
            suggestions.append(
                f"Consider eco-friendly transport - this route produces {co2_kg:.1f}kg CO2"
            )

        if not suggestions:
            suggestions.append("Your route is already well optimized with current traffic conditions!")
        return suggestions


def _as_enhanced(
    basic: RouteOptimizationResult, fallback_reason: str
) -> EnhancedRouteOptimizationResult:
    """Basic result in the enhanced shape, cost and traffic zeroed."""
    return EnhancedRouteOptimizationResult(
        activities=basic.activities,
        total_travel_minutes=basic.total_travel_minutes,
        total_distance_km=basic.total_distance_km,
        efficiency=basic.efficiency,
        suggestions=basic.suggestions,
        savings=Savings(
            time_minutes=basic.savings.time_minutes,
            distance_km=basic.savings.distance_km,
        ),
        cost=CostBreakdown(),
        traffic=TrafficImpact(),
        co2_kg=0.0,
        fallback_reason=fallback_reason,
    )


def optimize_route_enhanced(
    activities: Sequence[Activity], options: EnhancedOptimizeOptions | None = None
) -> EnhancedRouteOptimizationResult:
    """Convenience wrapper around EnhancedRouteOptimizer.optimize()."""
    return EnhancedRouteOptimizer(options).optimize(activities)
