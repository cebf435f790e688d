"""
Threshold-based anomaly classification.

A point is anomalous when its distance to the assigned centroid is strictly
greater than the threshold of that cluster. A point lying exactly on the
training envelope is normal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from netsentinel.core.exceptions import UnknownClusterError

from .distance import DistanceFn, euclidean_distance
from .schema import AnomalyRecord, Assignment, ClusterThresholdTable

logger = logging.getLogger(__name__)


@dataclass
class AnomalyClassifier:
    """
    Applies trained thresholds to new assignments.

    Every cluster id is validated before any record is produced, so a
    mismatch between the thresholds and the classified data yields no
    partial output.
    """

    metric: DistanceFn = euclidean_distance

    def label(
        self,
        centroids: Sequence[Sequence[float]],
        thresholds: ClusterThresholdTable,
        assignments: Iterable[Assignment],
    ) -> List[AnomalyRecord]:
        """Classify every assignment, normal and anomalous alike."""
        assignments = list(assignments)
        k = min(len(centroids), thresholds.k)

        for assignment in assignments:
            if assignment.cluster_id not in thresholds or assignment.cluster_id >= len(centroids):
                raise UnknownClusterError(assignment.cluster_id, k)

        records: List[AnomalyRecord] = []
        for assignment in assignments:
            distance = self.metric(centroids[assignment.cluster_id], assignment.point)
            threshold = thresholds[assignment.cluster_id]
            records.append(
                AnomalyRecord(
                    assignment=assignment.with_distance(distance),
                    distance=distance,
                    threshold=threshold,
                    is_anomaly=distance > threshold,
                )
            )
        return records

    def classify(
        self,
        centroids: Sequence[Sequence[float]],
        thresholds: ClusterThresholdTable,
        assignments: Iterable[Assignment],
    ) -> List[AnomalyRecord]:
        """Return only the anomalous assignments."""
        records = self.label(centroids, thresholds, assignments)
        anomalies = [r for r in records if r.is_anomaly]
        logger.debug(f"Classified {len(records)} points, {len(anomalies)} anomalies")
        return anomalies
