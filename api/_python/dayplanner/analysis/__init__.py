"""
Day Plan Analysis Layer.

Read-only analysis of an activity list: nothing here reorders or edits
activities.

Modules:
- conflict_detector: Overlaps and travel-time shortfalls
- location_clusterer: Spatial clusters of nearby activities
- timing_advisor: Timing suggestions and the best window of the day
"""

from .conflict_detector import ConflictDetector, detect_conflicts
from .location_clusterer import LocationClusterer, find_location_clusters
from .timing_advisor import TimingAdvice, TimingAdvisor, advise_timing

__all__ = [
    "ConflictDetector",
    "detect_conflicts",
    "LocationClusterer",
    "find_location_clusters",
    "TimingAdvisor",
    "TimingAdvice",
    "advise_timing",
]
