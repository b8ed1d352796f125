"""Tests for spatial clustering of activities."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from dayplanner.analysis.location_clusterer import LocationClusterer, find_location_clusters
from helpers import at, make_activity


class TestLocationClusterer:
    """Tests for single-link clustering within the cluster radius."""

    def test_nearby_activities_grouped(self) -> None:
        """Three activities within 500 m plus one 20 km away form two clusters."""
        activities = [
            make_activity("a", "09:00", "10:00", km=0.0, cost=10),
            make_activity("b", "10:30", "11:30", km=0.2, cost=25),
            make_activity("far", "12:00", "13:00", km=20.0),
            make_activity("c", "14:00", "15:30", km=0.5),
        ]

        clusters = find_location_clusters(activities)

        assert len(clusters) == 2
        nearby, far = clusters
        assert nearby.activity_ids == ("a", "b", "c")
        assert nearby.size == 3
        assert nearby.price_range == (10, 25)
        assert nearby.time_range == (at("09:00"), at("15:30"))
        assert far.activity_ids == ("far",)
        assert far.price_range is None

    def test_centroid_is_mean_of_members(self) -> None:
        activities = [make_activity("a", km=0.0), make_activity("b", "11:00", "12:00", km=1.0)]

        (cluster,) = find_location_clusters(activities)

        assert cluster.centroid.lat == pytest.approx(
            (activities[0].coordinates.lat + activities[1].coordinates.lat) / 2
        )
        assert cluster.centroid.lng == pytest.approx(activities[0].coordinates.lng)

    def test_chained_activities_join_one_cluster(self) -> None:
        """a-b and b-c are within the radius, a-c is not: still one cluster."""
        activities = [
            make_activity("a", "09:00", "10:00", km=0.0),
            make_activity("b", "10:30", "11:30", km=1.2),
            make_activity("c", "12:00", "13:00", km=2.4),
        ]
        assert len(find_location_clusters(activities)) == 1

    def test_every_activity_in_exactly_one_cluster(self, paris_day) -> None:
        clusters = find_location_clusters(paris_day)

        members = [activity_id for cluster in clusters for activity_id in cluster.activity_ids]
        assert sorted(members) == sorted(a.id for a in paris_day)

    def test_custom_radius(self) -> None:
        """A smaller radius splits activities 1 km apart."""
        activities = [make_activity("a", km=0.0), make_activity("b", "11:00", "12:00", km=1.0)]

        assert len(LocationClusterer(radius_km=1.5).cluster(activities)) == 1
        assert len(LocationClusterer(radius_km=0.5).cluster(activities)) == 2

    def test_empty_input(self) -> None:
        assert find_location_clusters([]) == []

    def test_deterministic(self, paris_day) -> None:
        assert find_location_clusters(paris_day) == find_location_clusters(paris_day)
