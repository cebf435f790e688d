"""
Unit tests for clustering algorithms.
"""

import numpy as np
import pytest

from netsentinel.clustering.algorithms import (
    BisectingKMeansAlgorithm,
    GaussianMixtureAlgorithm,
    KMeansAlgorithm,
    build_algorithm,
)
from netsentinel.core.exceptions import ConfigurationError, ModelTrainingError


def _two_blobs(n: int = 20):
    rng = np.random.RandomState(0)
    left = rng.normal(loc=0.0, scale=0.1, size=(n, 2))
    right = rng.normal(loc=10.0, scale=0.1, size=(n, 2))
    return [tuple(p) for p in np.vstack([left, right]).tolist()]


@pytest.mark.parametrize("cls", [KMeansAlgorithm, BisectingKMeansAlgorithm, GaussianMixtureAlgorithm])
def test_fit_exposes_k_centroids_and_assignments(cls):
    points = _two_blobs()

    model = cls(k=2, seed=1).fit(points)
    centroids = model.centroids()
    assignments = model.assign(points)

    assert model.k == 2
    assert len(centroids) == 2
    assert all(len(c) == 2 for c in centroids)
    assert len(assignments) == len(points)
    assert {a.cluster_id for a in assignments} == {0, 1}
    # both blobs end up in different clusters
    assert assignments[0].cluster_id != assignments[-1].cluster_id
    assert assignments[0].point == points[0]


def test_each_fit_gets_its_own_model_id():
    points = _two_blobs()
    algorithm = KMeansAlgorithm(k=2)

    assert algorithm.fit(points).model_id != algorithm.fit(points).model_id


def test_assign_nothing_returns_empty():
    model = KMeansAlgorithm(k=2).fit(_two_blobs())
    assert model.assign([]) == []


def test_fit_with_too_few_points_fails():
    with pytest.raises(ModelTrainingError):
        KMeansAlgorithm(k=5).fit([(0.0, 0.0), (1.0, 1.0)])


def test_assign_with_wrong_dimension_fails():
    model = KMeansAlgorithm(k=2).fit(_two_blobs())

    with pytest.raises(ModelTrainingError):
        model.assign([(0.0, 0.0, 0.0)])


def test_build_algorithm_by_name():
    algorithm = build_algorithm("bisecting_kmeans", k=4, seed=7, max_iter=5)

    assert isinstance(algorithm, BisectingKMeansAlgorithm)
    assert algorithm.k == 4
    assert algorithm.seed == 7
    assert algorithm.max_iter == 5


def test_build_unknown_algorithm_fails():
    with pytest.raises(ConfigurationError):
        build_algorithm("dbscan", k=2)


def test_k_must_be_positive():
    with pytest.raises(ValueError):
        KMeansAlgorithm(k=0)
