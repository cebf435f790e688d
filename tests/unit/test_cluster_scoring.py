"""
Unit tests for clustering quality scoring.
"""

from math import isclose

import pytest

from netsentinel.anomaly.schema import Assignment
from netsentinel.anomaly.scoring import ClusterScorer
from netsentinel.core.exceptions import DimensionMismatchError, UnknownClusterError


def test_score_is_mean_of_cluster_means():
    centroids = [(0.0, 0.0), (10.0, 0.0)]
    assignments = [
        Assignment(point=(3.0, 4.0), cluster_id=0),   # 5
        Assignment(point=(0.0, 1.0), cluster_id=0),   # 1
        Assignment(point=(12.0, 0.0), cluster_id=1),  # 2
    ]

    result = ClusterScorer().evaluate(centroids, assignments)

    assert result.cluster_means == (3.0, 2.0)
    assert result.cluster_sizes == (2, 1)
    assert isclose(result.score, 2.5)


def test_empty_cluster_counts_as_zero_in_average():
    centroids = [(0.0, 0.0), (10.0, 10.0)]
    assignments = [
        Assignment(point=(0.0, 0.0), cluster_id=0),
        Assignment(point=(3.0, 4.0), cluster_id=0),
    ]

    result = ClusterScorer().evaluate(centroids, assignments)

    assert result.cluster_means[1] == 0.0
    assert result.empty_clusters == [1]
    # cluster 0 mean is 2.5, still divided by k=2
    assert result.score == 1.25


def test_score_without_clusters_is_zero():
    assert ClusterScorer().score([], []) == 0.0


def test_all_clusters_empty_score_is_zero():
    result = ClusterScorer().evaluate([(0.0,), (1.0,), (2.0,)], [])

    assert result.score == 0.0
    assert result.cluster_means == (0.0, 0.0, 0.0)
    assert result.k == 3


def test_score_rejects_unknown_cluster():
    with pytest.raises(UnknownClusterError):
        ClusterScorer().score([(0.0,)], [Assignment(point=(1.0,), cluster_id=1)])


def test_score_rejects_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        ClusterScorer().score([(0.0, 0.0)], [Assignment(point=(1.0,), cluster_id=0)])


def test_scorer_uses_injected_metric():
    manhattan = lambda c, p: sum(abs(a - b) for a, b in zip(c, p))
    scorer = ClusterScorer(metric=manhattan)

    assert scorer.score([(0.0, 0.0)], [Assignment(point=(3.0, 4.0), cluster_id=0)]) == 7.0
