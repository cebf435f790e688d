"""
Clustering quality scoring.

The score is the mean over clusters of the mean distance between each point
and its centroid. It is used to compare clustering configurations (algorithm,
preprocessing, k); lower is better.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .distance import DistanceFn, cluster_distances, euclidean_distance
from .schema import Assignment, ClusterScore


@dataclass
class ClusterScorer:
    """
    Aggregates per-cluster and overall fit quality.

    An empty cluster contributes exactly 0.0 and still counts toward the
    k-way average.
    """

    metric: DistanceFn = euclidean_distance

    def evaluate(
        self, centroids: Sequence[Sequence[float]], assignments: Iterable[Assignment]
    ) -> ClusterScore:
        distances = cluster_distances(centroids, assignments, self.metric)

        means = tuple(sum(d) / len(d) if d else 0.0 for d in distances)
        sizes = tuple(len(d) for d in distances)
        overall = sum(means) / len(means) if means else 0.0

        return ClusterScore(score=overall, cluster_means=means, cluster_sizes=sizes)

    def score(
        self, centroids: Sequence[Sequence[float]], assignments: Iterable[Assignment]
    ) -> float:
        return self.evaluate(centroids, assignments).score
