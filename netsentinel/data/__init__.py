"""
Data module: Connection record ingestion and feature engineering.

Responsible for converting raw CSV captures into immutable numeric points
suitable for clustering. Pipeline:

    Raw CSV (KDD Cup 1999 layout)
        ↓
    Ingestion (netsentinel/data/ingestion.py) → typed DataFrame
        ↓
    Feature stages (netsentinel/data/features.py) → Point
        ↓
    Ready for clustering and anomaly scoring
"""

from netsentinel.data.features import (
    FeatureEncoder,
    FeatureStage,
    to_points,
    validate_stages,
)
from netsentinel.data.ingestion import load_connections
from netsentinel.data.schema import (
    CATEGORICAL_COLUMNS,
    COLUMN_NAMES,
    FEATURE_COLUMNS,
    LABEL_COLUMN,
    NUMERIC_COLUMNS,
)

__all__ = [
    # Schema
    "COLUMN_NAMES",
    "FEATURE_COLUMNS",
    "NUMERIC_COLUMNS",
    "CATEGORICAL_COLUMNS",
    "LABEL_COLUMN",

    # Ingestion
    "load_connections",

    # Features
    "FeatureEncoder",
    "FeatureStage",
    "to_points",
    "validate_stages",
]
