"""
Clustering module: pluggable clustering models.

Exposes fit(points) -> TrainedModel, TrainedModel.assign(points) and
TrainedModel.centroids() for k-means, bisecting k-means, and Gaussian mixture.
"""

from .algorithms import (
    ALGORITHMS,
    BisectingKMeansAlgorithm,
    GaussianMixtureAlgorithm,
    KMeansAlgorithm,
    build_algorithm,
)
from .base import ClusteringAlgorithm, SklearnTrainedModel, TrainedModel

__all__ = [
    "ALGORITHMS",
    "ClusteringAlgorithm",
    "TrainedModel",
    "SklearnTrainedModel",
    "KMeansAlgorithm",
    "BisectingKMeansAlgorithm",
    "GaussianMixtureAlgorithm",
    "build_algorithm",
]
