"""
Clustering model interface consumed by the anomaly pipeline.

Algorithms are pluggable: anything that can be fitted on points and then
assign points to one of k centroids can drive scoring, thresholds, and
classification. Each fitted model carries a unique id so results from
different fits are never mixed.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, List, Sequence
from uuid import uuid4

import numpy as np

from netsentinel.anomaly.schema import Assignment, Point
from netsentinel.core.exceptions import ModelTrainingError
from netsentinel.data.features import to_points

logger = logging.getLogger(__name__)


def _as_matrix(points: Sequence[Sequence[float]]) -> np.ndarray:
    matrix = np.asarray(points, dtype=np.float64)
    if matrix.ndim != 2:
        raise ModelTrainingError(f"Expected a 2-D collection of points, got shape {matrix.shape}")
    return matrix


class TrainedModel(ABC):
    """
    A fitted clustering model with a fixed number of clusters k.
    """

    def __init__(self, algorithm: str, k: int):
        self.algorithm = algorithm
        self.k = k
        self.model_id = uuid4().hex

    @abstractmethod
    def centroids(self) -> List[Point]:
        """Ordered centroids, one per cluster id 0..k-1."""

    @abstractmethod
    def predict(self, matrix: np.ndarray) -> np.ndarray:
        """Cluster id of each row of a feature matrix."""

    def assign(self, points: Sequence[Sequence[float]]) -> List[Assignment]:
        """
        Assign every point to a cluster.

        Raises:
            ModelTrainingError: If the underlying model fails to predict
        """
        points = list(points)
        if not points:
            return []
        matrix = _as_matrix(points)
        try:
            labels = self.predict(matrix)
        except ValueError as e:
            raise ModelTrainingError(f"{self.algorithm} failed to assign points: {e}") from e
        return [
            Assignment(point=point, cluster_id=int(label))
            for point, label in zip(to_points(matrix), labels)
        ]


class SklearnTrainedModel(TrainedModel):
    """
    Trained model backed by a fitted scikit-learn estimator.
    """

    def __init__(self, algorithm: str, k: int, estimator: Any, centers: np.ndarray):
        super().__init__(algorithm, k)
        self._estimator = estimator
        self._centroids = to_points(centers)

    def centroids(self) -> List[Point]:
        return list(self._centroids)

    def predict(self, matrix: np.ndarray) -> np.ndarray:
        return self._estimator.predict(matrix)


class ClusteringAlgorithm(ABC):
    """
    A clustering configuration (algorithm + k) that can be fitted.
    """

    name: str = "clustering"

    def __init__(self, k: int, seed: int = 1):
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        self.k = k
        self.seed = seed

    @abstractmethod
    def _fit_estimator(self, matrix: np.ndarray) -> TrainedModel:
        """Fit on a feature matrix and wrap the result."""

    def fit(self, points: Sequence[Sequence[float]]) -> TrainedModel:
        """
        Fit the clustering model on training points.

        Raises:
            ModelTrainingError: If there are fewer points than clusters or
                the estimator fails
        """
        matrix = _as_matrix(list(points))
        if matrix.shape[0] < self.k:
            raise ModelTrainingError(
                f"{self.name}: cannot fit {self.k} clusters on {matrix.shape[0]} points"
            )

        time_start = time.time()
        logger.debug(f"Fitting {self.name}(k={self.k}) on {matrix.shape[0]}x{matrix.shape[1]} points")
        try:
            model = self._fit_estimator(matrix)
        except ValueError as e:
            raise ModelTrainingError(f"{self.name} failed to fit: {e}") from e

        logger.info(f"Fitted {self.name}(k={self.k}) in {time.time() - time_start:.2f} seconds")
        return model
