"""
Custom exceptions for NetSentinel.

These exceptions provide clear error semantics across the system.
Contract violations (dimension or cluster mismatches) are kept apart from
data issues, training failures, and configuration errors.
"""


class NetSentinelError(Exception):
    """Base exception for anomaly detection failures."""
    pass


class DimensionMismatchError(NetSentinelError, ValueError):
    """Raised when a centroid and a point do not have the same dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Dimension mismatch: centroid has {expected} components, point has {actual}"
        )


class UnknownClusterError(NetSentinelError, KeyError):
    """Raised when a cluster id is not part of the trained model (outside [0, k))."""

    def __init__(self, cluster_id: int, k: int):
        self.cluster_id = cluster_id
        self.k = k
        super().__init__(f"Unknown cluster id {cluster_id} (model has k={k})")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class PipelineStateError(NetSentinelError):
    """Raised when a run skips a stage or mixes results from different models."""
    pass


class ModelTrainingError(NetSentinelError):
    """Raised when the clustering collaborator fails to fit or assign."""
    pass


class DataValidationError(NetSentinelError):
    """Raised when input data fails validation or ingestion."""
    pass


class ConfigurationError(NetSentinelError):
    """Raised when configuration is invalid or missing."""
    pass
