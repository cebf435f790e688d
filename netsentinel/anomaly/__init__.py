"""
Anomaly module: cluster scoring, thresholds, and classification.

Implements the distance law, clustering quality score, per-cluster envelope
thresholds, and threshold-based anomaly classification.
"""

from .classifier import AnomalyClassifier
from .distance import cluster_distances, euclidean_distance, partition_by_cluster
from .schema import AnomalyRecord, Assignment, ClusterScore, ClusterThresholdTable, Point
from .scoring import ClusterScorer
from .thresholds import ThresholdEstimator

__all__ = [
	"AnomalyClassifier",
	"AnomalyRecord",
	"Assignment",
	"ClusterScore",
	"ClusterScorer",
	"ClusterThresholdTable",
	"Point",
	"ThresholdEstimator",
	"cluster_distances",
	"euclidean_distance",
	"partition_by_cluster",
]
