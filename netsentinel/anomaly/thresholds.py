"""
Per-cluster anomaly thresholds.

The threshold of a cluster is the largest distance between a training point
and its centroid: the furthest known-normal point defines normal territory.
Thresholds must be estimated on training data only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .distance import DistanceFn, cluster_distances, euclidean_distance
from .schema import Assignment, ClusterThresholdTable

logger = logging.getLogger(__name__)


@dataclass
class ThresholdEstimator:
    """
    Derives one envelope radius per cluster (0.0 for empty clusters).
    """

    metric: DistanceFn = euclidean_distance

    def estimate(
        self,
        centroids: Sequence[Sequence[float]],
        assignments: Iterable[Assignment],
        model_id: Optional[str] = None,
    ) -> ClusterThresholdTable:
        distances = cluster_distances(centroids, assignments, self.metric)
        thresholds = tuple(max(d) if d else 0.0 for d in distances)

        empty = sum(1 for d in distances if not d)
        if empty:
            logger.debug(f"{empty}/{len(distances)} clusters received no training points")

        return ClusterThresholdTable(thresholds=thresholds, model_id=model_id)
