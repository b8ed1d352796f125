"""
Pytest fixtures for day planner tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dayplanner.types import Activity, Coordinate, Location, TimeWindow
from helpers import BASE_DATE, at, make_activity


@pytest.fixture
def test_date():
    """The date all helper-built activities fall on."""
    return BASE_DATE


@pytest.fixture
def zigzag_day():
    """
    Four one-hour activities that bounce back and forth along a line.

    Planned order A(0km) -> B(10km) -> C(2km) -> D(12km) covers 28 km;
    A -> C -> B -> D covers 12 km.
    """
    return [
        make_activity("A", "09:00", "10:00", km=0),
        make_activity("B", "11:00", "12:00", km=10),
        make_activity("C", "13:00", "14:00", km=2),
        make_activity("D", "15:00", "16:00", km=12),
    ]


@pytest.fixture
def compact_day():
    """Three activities 1 km apart in sequence, generous gaps."""
    return [
        make_activity("A", "09:00", "10:00", km=0),
        make_activity("B", "10:30", "11:30", km=1),
        make_activity("C", "12:00", "13:00", km=2),
    ]


@pytest.fixture
def paris_day():
    """A realistic sightseeing day in Paris with one booked slot."""

    def activity(activity_id, title, lat, lng, start, end, **kwargs):
        return Activity(
            id=activity_id,
            title=title,
            location=Location(name=title, coordinates=Coordinate(lat=lat, lng=lng)),
            time_window=TimeWindow(start=at(start), end=at(end)),
            **kwargs,
        )

    return [
        activity("louvre", "Louvre", 48.8606, 2.3376, "09:00", "11:30", cost=22.0),
        activity("notre-dame", "Notre-Dame", 48.8530, 2.3499, "12:00", "13:00"),
        activity("lunch", "Lunch", 48.8462, 2.3447, "13:15", "14:15", category="dining", cost=35.0),
        activity("eiffel", "Eiffel Tower", 48.8584, 2.2945, "15:00", "17:00", cost=29.4, anchored=True),
        activity("sacre-coeur", "Sacre-Coeur", 48.8867, 2.3431, "17:45", "19:00"),
    ]
