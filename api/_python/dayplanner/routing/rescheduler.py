"""
Derive new start/end times for an activity order.

The optimizers only change the sequence. This pass walks that sequence
and pushes each flexible activity later when it would start before the
traveler can get there. Durations are preserved; anchored activities are
never moved, even if that leaves a travel conflict in front of them.
"""

from collections.abc import Sequence
from dataclasses import replace
from datetime import timedelta

from ..geo_math import distance_km, travel_time_minutes
from ..types import Activity, TravelMode
from ..validation import validate_activities, validate_mode


def reschedule(
    activities: Sequence[Activity],
    mode: TravelMode = "driving",
    buffer_minutes: float = 0,
) -> list[Activity]:
    """
    Shift non-anchored activities so each is reachable from the previous one.

    Args:
        activities: Activities in execution order (e.g. an optimizer result)
        mode: Travel mode for travel-time estimates
        buffer_minutes: Extra slack added after each travel leg

    Returns:
        New list in the same order; unchanged activities are the same objects
    """
    validate_mode(mode)
    if buffer_minutes < 0:
        raise ValueError(f"Buffer must be non-negative, got {buffer_minutes}")
    validate_activities(activities)

    result: list[Activity] = []
    for activity in activities:
        if not result or activity.anchored:
            result.append(activity)
            continue

        previous = result[-1]
        travel = travel_time_minutes(
            distance_km(previous.coordinates, activity.coordinates), mode
        )
        earliest = previous.end + timedelta(minutes=travel + buffer_minutes)

        if activity.start < earliest:
            window = activity.time_window.shifted(earliest - activity.start)
            activity = replace(activity, time_window=window)
        result.append(activity)

    return result
