"""
Feature engineering for connection records.

Turns typed DataFrames into immutable numeric points. The transformation is
described declaratively as an ordered list of stages and compiled into a
FeatureEncoder, which is fitted once on training data and then applied
unchanged to test data.

Stages:
- select_numeric: keep only numeric columns, drop categorical ones
- one_hot: keep numeric columns and one-hot encode categorical ones
  (every category kept, unseen categories encoded as all zeros)
- scale: divide every feature by its training standard deviation
  (no centring)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from netsentinel.anomaly.schema import Point
from netsentinel.core.exceptions import ConfigurationError, DataValidationError
from netsentinel.data.schema import CATEGORICAL_COLUMNS, NUMERIC_COLUMNS

logger = logging.getLogger(__name__)


class FeatureStage(str, Enum):
    """Named preprocessing stages a recipe can chain."""

    SELECT_NUMERIC = "select_numeric"
    ONE_HOT = "one_hot"
    SCALE = "scale"


def validate_stages(stages: Sequence[FeatureStage]) -> List[FeatureStage]:
    """
    Check that a stage list describes a valid transformation.

    Exactly one column stage (select_numeric or one_hot) must come first;
    scale is optional and must come last.

    Raises:
        ConfigurationError: If the stage list is invalid
    """
    try:
        stages = [FeatureStage(s) for s in stages]
    except ValueError as e:
        raise ConfigurationError(f"Unknown feature stage: {e}") from e

    if not stages:
        raise ConfigurationError("A recipe needs at least one feature stage")
    if stages[0] not in (FeatureStage.SELECT_NUMERIC, FeatureStage.ONE_HOT):
        raise ConfigurationError(f"First stage must select or encode columns, got {stages[0].value}")
    if len(set(stages)) != len(stages):
        raise ConfigurationError(f"Duplicate feature stages: {[s.value for s in stages]}")
    if FeatureStage.SELECT_NUMERIC in stages and FeatureStage.ONE_HOT in stages:
        raise ConfigurationError("select_numeric and one_hot are mutually exclusive")
    if FeatureStage.SCALE in stages and stages[-1] != FeatureStage.SCALE:
        raise ConfigurationError("scale must be the last feature stage")
    return stages


def to_points(matrix: np.ndarray) -> List[Point]:
    """Convert a 2-D feature matrix into immutable points."""
    return [tuple(row) for row in np.asarray(matrix, dtype=np.float64).tolist()]


class FeatureEncoder:
    """
    Fitted feature transformation built from a stage list.

    The encoder never mutates its input frame; transform returns a new
    matrix every time.
    """

    def __init__(self, stages: Sequence[FeatureStage]):
        self.stages = validate_stages(stages)
        self._one_hot: Optional[OneHotEncoder] = None
        self._scaler: Optional[StandardScaler] = None
        self._fitted = False

    @property
    def uses_categorical(self) -> bool:
        return FeatureStage.ONE_HOT in self.stages

    @property
    def dimension(self) -> int:
        if not self._fitted:
            raise RuntimeError("FeatureEncoder not fitted. Call fit() first.")
        width = len(NUMERIC_COLUMNS)
        if self._one_hot is not None:
            width += sum(len(c) for c in self._one_hot.categories_)
        return width

    def _check_columns(self, frame: pd.DataFrame) -> None:
        required = list(NUMERIC_COLUMNS)
        if self.uses_categorical:
            required += CATEGORICAL_COLUMNS
        missing = [c for c in required if c not in frame.columns]
        if missing:
            raise DataValidationError(f"Missing feature columns: {missing}")

    def _assemble(self, frame: pd.DataFrame) -> np.ndarray:
        numeric = frame[NUMERIC_COLUMNS].to_numpy(dtype=np.float64)
        if self._one_hot is None:
            return numeric
        categorical = frame[CATEGORICAL_COLUMNS].astype(str).to_numpy()
        encoded = self._one_hot.transform(categorical)
        return np.hstack([numeric, encoded])

    def fit(self, frame: pd.DataFrame) -> "FeatureEncoder":
        self._check_columns(frame)
        if frame.empty:
            raise DataValidationError("Cannot fit features on an empty dataset")

        if self.uses_categorical:
            self._one_hot = OneHotEncoder(handle_unknown="ignore", sparse_output=False)
            self._one_hot.fit(frame[CATEGORICAL_COLUMNS].astype(str).to_numpy())

        if FeatureStage.SCALE in self.stages:
            self._scaler = StandardScaler(with_mean=False, with_std=True)
            self._scaler.fit(self._assemble(frame))

        self._fitted = True
        logger.debug(f"Fitted features {[s.value for s in self.stages]} (dimension={self.dimension})")
        return self

    def transform(self, frame: pd.DataFrame) -> np.ndarray:
        if not self._fitted:
            raise RuntimeError("FeatureEncoder not fitted. Call fit() first.")
        self._check_columns(frame)
        matrix = self._assemble(frame)
        if self._scaler is not None:
            matrix = self._scaler.transform(matrix)
        return matrix

    def fit_transform(self, frame: pd.DataFrame) -> np.ndarray:
        return self.fit(frame).transform(frame)

    def transform_points(self, frame: pd.DataFrame) -> List[Point]:
        return to_points(self.transform(frame))
