"""
Dayplanner Itinerary Analysis and Route Optimization

Analyzes a single day's activities (conflicts, clusters, timing) and
reorders them to cut travel time, distance and, optionally, travel cost.

Main entry points: DayPlan, RouteOptimizer, EnhancedRouteOptimizer
"""

from .analysis import (
    ConflictDetector,
    LocationClusterer,
    TimingAdvice,
    TimingAdvisor,
    advise_timing,
    detect_conflicts,
    find_location_clusters,
)
from .day_plan import DayPlan
from .routing import (
    EnhancedOptimizeOptions,
    EnhancedRouteOptimizer,
    OptimizeOptions,
    RouteOptimizer,
    TravelHints,
    optimize_route,
    optimize_route_enhanced,
    reschedule,
)
from .types import (
    Activity,
    Conflict,
    Coordinate,
    EnhancedRouteOptimizationResult,
    Location,
    LocationCluster,
    RouteOptimizationResult,
    TimeWindow,
    ValidationError,
)

__all__ = [
    # Types
    "Coordinate",
    "Location",
    "TimeWindow",
    "Activity",
    "Conflict",
    "LocationCluster",
    "RouteOptimizationResult",
    "EnhancedRouteOptimizationResult",
    "ValidationError",
    "DayPlan",
    # Analysis
    "ConflictDetector",
    "detect_conflicts",
    "LocationClusterer",
    "find_location_clusters",
    "TimingAdvisor",
    "TimingAdvice",
    "advise_timing",
    # Routing
    "OptimizeOptions",
    "RouteOptimizer",
    "optimize_route",
    "EnhancedOptimizeOptions",
    "EnhancedRouteOptimizer",
    "optimize_route_enhanced",
    "TravelHints",
    "reschedule",
]
