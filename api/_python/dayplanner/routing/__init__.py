"""
Route Optimization Layer.

Reorders a day's activities to cut travel, optionally weighing traffic,
travel costs and emissions.

Modules:
- traffic: Traffic severity buckets and caller-supplied hints
- route_optimizer: Nearest-neighbor plus local-search reordering
- cost_estimator: Fuel, toll, parking and CO2 estimates
- enhanced_optimizer: Traffic/cost aware wrapper with basic fallback
- rescheduler: New start times for a reordered day
"""

from .cost_estimator import VEHICLE_PROFILES, CostEstimator, VehicleProfile
from .enhanced_optimizer import (
    EnhancedOptimizeOptions,
    EnhancedRouteOptimizer,
    optimize_route_enhanced,
)
from .rescheduler import reschedule
from .route_optimizer import OptimizeOptions, RouteOptimizer, optimize_route
from .traffic import TRAFFIC_MULTIPLIERS, TrafficModel, TravelHints, estimate_hourly_hints

__all__ = [
    "VEHICLE_PROFILES",
    "CostEstimator",
    "VehicleProfile",
    "EnhancedOptimizeOptions",
    "EnhancedRouteOptimizer",
    "optimize_route_enhanced",
    "reschedule",
    "OptimizeOptions",
    "RouteOptimizer",
    "optimize_route",
    "TRAFFIC_MULTIPLIERS",
    "TrafficModel",
    "TravelHints",
    "estimate_hourly_hints",
]
