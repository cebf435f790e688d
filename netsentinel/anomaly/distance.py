"""
Distance law shared by scoring, threshold estimation, and classification.

All three must use the same metric so their outputs are comparable.
"""

from __future__ import annotations

from math import sqrt
from typing import Callable, Iterable, List, Sequence

from netsentinel.core.exceptions import DimensionMismatchError, UnknownClusterError

from .schema import Assignment

DistanceFn = Callable[[Sequence[float], Sequence[float]], float]


def euclidean_distance(centroid: Sequence[float], point: Sequence[float]) -> float:
    """
    Euclidean distance between a centroid and a point.

    Raises:
        DimensionMismatchError: If the two vectors differ in length
    """
    if len(centroid) != len(point):
        raise DimensionMismatchError(len(centroid), len(point))
    return sqrt(sum((c - p) ** 2 for c, p in zip(centroid, point)))


def partition_by_cluster(assignments: Iterable[Assignment], k: int) -> List[List[Assignment]]:
    """
    Group assignments by cluster id into k partitions (some may be empty).

    Raises:
        UnknownClusterError: If an assignment references a cluster outside [0, k)
    """
    partitions: List[List[Assignment]] = [[] for _ in range(k)]
    for assignment in assignments:
        if not 0 <= assignment.cluster_id < k:
            raise UnknownClusterError(assignment.cluster_id, k)
        partitions[assignment.cluster_id].append(assignment)
    return partitions


def cluster_distances(
    centroids: Sequence[Sequence[float]],
    assignments: Iterable[Assignment],
    metric: DistanceFn = euclidean_distance,
) -> List[List[float]]:
    """
    Distances of every assignment to its centroid, grouped by cluster id.

    The result has one (possibly empty) list per centroid.
    """
    partitions = partition_by_cluster(assignments, len(centroids))
    return [
        [metric(centroids[cluster_id], a.point) for a in members]
        for cluster_id, members in enumerate(partitions)
    ]
