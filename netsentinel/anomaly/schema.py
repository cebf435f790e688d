"""
Schema definitions for cluster-based anomaly detection.

All values are immutable once produced. A point keeps its cluster assignment
and, once measured, the distance to its centroid; thresholds are frozen per
trained model so classification can never observe them changing.
"""

from __future__ import annotations

import operator
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from netsentinel.core.exceptions import UnknownClusterError

# Numeric feature vector of fixed dimension (post feature engineering).
Point = Tuple[float, ...]


class Assignment(BaseModel):
    """
    A point together with the cluster it was assigned to.

    Fields:
    - point: feature vector
    - cluster_id: index of the assigned centroid
    - distance: distance to that centroid, None until measured
    """

    model_config = ConfigDict(frozen=True)

    point: Point
    cluster_id: int
    distance: Optional[float] = Field(default=None, ge=0.0)

    @property
    def dimension(self) -> int:
        return len(self.point)

    def with_distance(self, distance: float) -> "Assignment":
        """Return a copy of this assignment carrying the measured distance."""
        return Assignment(point=self.point, cluster_id=self.cluster_id, distance=distance)


class ClusterThresholdTable(BaseModel):
    """
    Per-cluster anomaly thresholds for one trained model.

    Fields:
    - thresholds: dense sequence indexed by cluster id (0..k-1)
    - model_id: identifier of the trained model whose centroids produced it

    Lookups outside [0, k) raise UnknownClusterError, never default to 0.
    """

    model_config = ConfigDict(frozen=True)

    thresholds: Tuple[float, ...]
    model_id: Optional[str] = None

    @field_validator("thresholds")
    @classmethod
    def _non_negative(cls, value: Tuple[float, ...]) -> Tuple[float, ...]:
        for cluster_id, threshold in enumerate(value):
            if threshold < 0.0:
                raise ValueError(f"Threshold for cluster {cluster_id} is negative: {threshold}")
        return value

    @property
    def k(self) -> int:
        return len(self.thresholds)

    def __len__(self) -> int:
        return len(self.thresholds)

    def __contains__(self, cluster_id: object) -> bool:
        if isinstance(cluster_id, bool):
            return False
        try:
            index = operator.index(cluster_id)
        except TypeError:
            return False
        return 0 <= index < len(self.thresholds)

    def __getitem__(self, cluster_id: int) -> float:
        if cluster_id not in self:
            raise UnknownClusterError(cluster_id, self.k)
        return self.thresholds[operator.index(cluster_id)]

    def as_dict(self) -> Dict[int, float]:
        return dict(enumerate(self.thresholds))


class AnomalyRecord(BaseModel):
    """
    Classification result for a single assignment.

    Fields:
    - assignment: the classified assignment (with its measured distance)
    - distance: distance to the assigned centroid
    - threshold: threshold of the assigned cluster
    - is_anomaly: True iff distance > threshold
    """

    model_config = ConfigDict(frozen=True)

    assignment: Assignment
    distance: float = Field(ge=0.0)
    threshold: float = Field(ge=0.0)
    is_anomaly: bool

    @property
    def cluster_id(self) -> int:
        return self.assignment.cluster_id

    @property
    def point(self) -> Point:
        return self.assignment.point

    @property
    def excess(self) -> float:
        """How far the point lies beyond its cluster envelope (negative if inside)."""
        return self.distance - self.threshold


class ClusterScore(BaseModel):
    """
    Clustering quality breakdown.

    Fields:
    - score: mean of the per-cluster mean distances (lower is better)
    - cluster_means: mean distance to centroid for each cluster (0.0 if empty)
    - cluster_sizes: number of assigned points for each cluster
    """

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0)
    cluster_means: Tuple[float, ...]
    cluster_sizes: Tuple[int, ...]

    @property
    def k(self) -> int:
        return len(self.cluster_means)

    @property
    def empty_clusters(self) -> List[int]:
        return [cluster_id for cluster_id, size in enumerate(self.cluster_sizes) if size == 0]
