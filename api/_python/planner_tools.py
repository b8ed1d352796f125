"""
JSON tool implementations for day planning.

Each tool takes a plain dict of arguments (as decoded from JSON) and
returns a JSON-safe dict. Provides:
1. detect_conflicts - Overlaps and travel-time shortfalls
2. find_clusters - Groups of nearby activities
3. advise_timing - Timing suggestions and best window for a day
4. optimize_route - Basic reordering
5. optimize_route_enhanced - Traffic/cost aware reordering
6. reschedule - New start times for a given order
"""

from datetime import date
from typing import Any

from dayplanner.analysis import advise_timing, detect_conflicts, find_location_clusters
from dayplanner.analysis.location_clusterer import CLUSTER_RADIUS_KM
from dayplanner.day_plan import DayPlan
from dayplanner.geo_math import parse_iso_datetime
from dayplanner.routing import (
    EnhancedOptimizeOptions,
    OptimizeOptions,
    optimize_route,
    optimize_route_enhanced,
    reschedule,
)
from dayplanner.serialization import (
    activities_from_list,
    activity_to_dict,
    coordinate_from_dict,
    hints_from_dict,
    result_to_dict,
    to_dict,
)
from dayplanner.types import ValidationError


def _activities(arguments: dict[str, Any]) -> list:
    if "activities" not in arguments:
        raise ValidationError("Missing required field 'activities'", field="activities")
    return activities_from_list(arguments["activities"])


def _optimize_options(options: dict[str, Any]) -> dict[str, Any]:
    """Keyword arguments shared by the basic and enhanced options."""
    kwargs: dict[str, Any] = {
        "mode": options.get("mode", "driving"),
        "prioritize_time": options.get("prioritize_time", True),
        "preserve_time_constraints": options.get("preserve_time_constraints", True),
    }
    if options.get("start_location") is not None:
        kwargs["start_location"] = coordinate_from_dict(options["start_location"])
    return kwargs


def detect_conflicts_tool(arguments: dict[str, Any]) -> dict[str, Any]:
    conflicts = detect_conflicts(_activities(arguments), arguments.get("mode", "driving"))
    return {
        "conflicts": to_dict(conflicts),
        "has_errors": any(c.severity == "error" for c in conflicts),
    }


def find_clusters_tool(arguments: dict[str, Any]) -> dict[str, Any]:
    radius = arguments.get("radius_km", CLUSTER_RADIUS_KM)
    clusters = find_location_clusters(_activities(arguments), radius)
    return {"clusters": to_dict(clusters)}


def advise_timing_tool(arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Timing advice for one day.

    "now" is optional; when omitted and the plan has a timezone, the
    current time in that timezone is used for today's plan.
    """
    if "date" not in arguments:
        raise ValidationError("Missing required field 'date'", field="date")
    plan = DayPlan(
        date=date.fromisoformat(arguments["date"]),
        activities=_activities(arguments),
        timezone=arguments.get("timezone"),
        mode=arguments.get("mode", "driving"),
    )
    now = parse_iso_datetime(arguments["now"]) if arguments.get("now") else None

    advice = advise_timing(plan, now)
    return {
        "suggestions": list(advice.suggestions),
        "best_window": to_dict(advice.best_window),
        "conflicts": to_dict(plan.conflicts),
    }


def optimize_route_tool(arguments: dict[str, Any]) -> dict[str, Any]:
    options = OptimizeOptions(**_optimize_options(arguments.get("options", {})))
    return result_to_dict(optimize_route(_activities(arguments), options))


def optimize_route_enhanced_tool(arguments: dict[str, Any]) -> dict[str, Any]:
    raw = arguments.get("options", {})
    options = EnhancedOptimizeOptions(
        **_optimize_options(raw),
        vehicle_type=raw.get("vehicle_type", "standard"),
        fuel_price=raw.get("fuel_price", 1.45),
        consider_traffic=raw.get("consider_traffic", True),
        consider_tolls=raw.get("consider_tolls", False),
        consider_parking=raw.get("consider_parking", False),
        hints=hints_from_dict(raw.get("hints")),
        timezone=raw.get("timezone"),
    )
    return result_to_dict(optimize_route_enhanced(_activities(arguments), options))


def reschedule_tool(arguments: dict[str, Any]) -> dict[str, Any]:
    activities = reschedule(
        _activities(arguments),
        mode=arguments.get("mode", "driving"),
        buffer_minutes=arguments.get("buffer_minutes", 0),
    )
    return {"activities": [activity_to_dict(a) for a in activities]}


TOOLS = {
    "detect_conflicts": detect_conflicts_tool,
    "find_clusters": find_clusters_tool,
    "advise_timing": advise_timing_tool,
    "optimize_route": optimize_route_tool,
    "optimize_route_enhanced": optimize_route_enhanced_tool,
    "reschedule": reschedule_tool,
}


def invoke_tool(tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Router function for CLI/subprocess invocation."""
    if tool_name not in TOOLS:
        raise ValueError(f"Unknown tool: {tool_name}")
    return TOOLS[tool_name](arguments)
