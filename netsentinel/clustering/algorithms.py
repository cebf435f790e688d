"""
Concrete clustering algorithms.

- kmeans: Lloyd's k-means
- bisecting_kmeans: top-down divisive k-means (all points start in one
  cluster, splits performed recursively)
- gaussian_mixture: Gaussian mixture fitted with EM; the component means are
  used as centroids
"""

from __future__ import annotations

from typing import Dict, Type

import numpy as np
from sklearn.cluster import BisectingKMeans, KMeans
from sklearn.mixture import GaussianMixture

from netsentinel.core.exceptions import ConfigurationError

from .base import ClusteringAlgorithm, SklearnTrainedModel, TrainedModel


class KMeansAlgorithm(ClusteringAlgorithm):
    name = "kmeans"

    def __init__(self, k: int, seed: int = 1, max_iter: int = 20):
        super().__init__(k, seed)
        self.max_iter = max_iter

    def _fit_estimator(self, matrix: np.ndarray) -> TrainedModel:
        kmeans = KMeans(n_clusters=self.k, max_iter=self.max_iter, n_init="auto", random_state=self.seed)
        kmeans.fit(matrix)
        return SklearnTrainedModel(self.name, self.k, kmeans, kmeans.cluster_centers_)


class BisectingKMeansAlgorithm(ClusteringAlgorithm):
    name = "bisecting_kmeans"

    def __init__(self, k: int, seed: int = 1, max_iter: int = 20):
        super().__init__(k, seed)
        self.max_iter = max_iter

    def _fit_estimator(self, matrix: np.ndarray) -> TrainedModel:
        bisecting = BisectingKMeans(n_clusters=self.k, max_iter=self.max_iter, random_state=self.seed)
        bisecting.fit(matrix)
        return SklearnTrainedModel(self.name, self.k, bisecting, bisecting.cluster_centers_)


class GaussianMixtureAlgorithm(ClusteringAlgorithm):
    name = "gaussian_mixture"

    def __init__(self, k: int, seed: int = 1, max_iter: int = 100):
        super().__init__(k, seed)
        self.max_iter = max_iter

    def _fit_estimator(self, matrix: np.ndarray) -> TrainedModel:
        # diagonal covariances keep EM tractable on one-hot encoded features
        gmm = GaussianMixture(
            n_components=self.k,
            covariance_type="diag",
            max_iter=self.max_iter,
            random_state=self.seed,
        )
        gmm.fit(matrix)
        return SklearnTrainedModel(self.name, self.k, gmm, gmm.means_)


ALGORITHMS: Dict[str, Type[ClusteringAlgorithm]] = {
    KMeansAlgorithm.name: KMeansAlgorithm,
    BisectingKMeansAlgorithm.name: BisectingKMeansAlgorithm,
    GaussianMixtureAlgorithm.name: GaussianMixtureAlgorithm,
}


def build_algorithm(name: str, k: int, seed: int = 1, max_iter: int | None = None) -> ClusteringAlgorithm:
    """
    Instantiate a clustering algorithm by name.

    Raises:
        ConfigurationError: If the algorithm name is unknown
    """
    try:
        cls = ALGORITHMS[name]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown clustering algorithm: {name} (available: {sorted(ALGORITHMS)})"
        ) from e
    if max_iter is None:
        return cls(k, seed=seed)
    return cls(k, seed=seed, max_iter=max_iter)
