"""
Spatial clustering of a day's activities.

Two activities closer than the radius end up in the same cluster, and
clustering is transitive (connected components). Pairwise comparison is
O(n^2), fine for a single day's activity count.
"""

from collections.abc import Sequence

from ..geo_math import centroid, distance_km
from ..types import Activity, LocationCluster

CLUSTER_RADIUS_KM = 1.5


class _DisjointSet:
    """Union-find over list positions, with path halving."""

    def __init__(self, size: int) -> None:
        self.parent = list(range(size))

    def find(self, i: int) -> int:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, i: int, j: int) -> None:
        root_i, root_j = self.find(i), self.find(j)
        if root_i == root_j:
            return
        # Lower index wins so roots are deterministic
        if root_j < root_i:
            root_i, root_j = root_j, root_i
        self.parent[root_j] = root_i


class LocationClusterer:
    """Group activities into spatial clusters."""

    def __init__(self, radius_km: float = CLUSTER_RADIUS_KM) -> None:
        if radius_km <= 0:
            raise ValueError(f"Cluster radius must be positive, got {radius_km}")
        self.radius_km = radius_km

    def cluster(self, activities: Sequence[Activity]) -> list[LocationCluster]:
        """
        Cluster activities by distance.

        Args:
            activities: Activities to group

        Returns:
            One cluster per connected component (singletons included),
            ordered by the position of each cluster's first member
        """
        n = len(activities)
        groups = _DisjointSet(n)

        for i in range(n):
            for j in range(i + 1, n):
                d = distance_km(activities[i].coordinates, activities[j].coordinates)
                if d < self.radius_km:
                    groups.union(i, j)

        members: dict[int, list[Activity]] = {}
        for i, activity in enumerate(activities):
            members.setdefault(groups.find(i), []).append(activity)

        # Dict preserves insertion order, which follows each root's first member
        return [self._build_cluster(group) for group in members.values()]

    def _build_cluster(self, group: list[Activity]) -> LocationCluster:
        costs = [a.cost for a in group if a.cost is not None]
        price_range = (min(costs), max(costs)) if costs else None

        return LocationCluster(
            activity_ids=tuple(a.id for a in group),
            centroid=centroid([a.coordinates for a in group]),
            price_range=price_range,
            time_range=(min(a.start for a in group), max(a.end for a in group)),
        )


def find_location_clusters(
    activities: Sequence[Activity], radius_km: float = CLUSTER_RADIUS_KM
) -> list[LocationCluster]:
    """Convenience wrapper around LocationClusterer.cluster()."""
    return LocationClusterer(radius_km).cluster(activities)
