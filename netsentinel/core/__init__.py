"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, config
from .exceptions import (
    ConfigurationError,
    DataValidationError,
    DimensionMismatchError,
    ModelTrainingError,
    NetSentinelError,
    PipelineStateError,
    UnknownClusterError,
)

__all__ = [
    "Config",
    "config",
    "NetSentinelError",
    "DimensionMismatchError",
    "UnknownClusterError",
    "PipelineStateError",
    "ModelTrainingError",
    "DataValidationError",
    "ConfigurationError",
]
