"""
Connection record ingestion from CSV files.

Reads headerless KDD-style CSV files into pandas DataFrames typed against the
canonical schema. Malformed files are rejected as a whole: a wrong column
count or a non-numeric value in a numeric column raises DataValidationError
rather than silently producing shifted features.

Design:
- Optional deterministic sampling (fraction + seed) for slow algorithms
- Label column dropped before feature engineering
- Files with or without the trailing label column are accepted
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from netsentinel.core.exceptions import DataValidationError
from netsentinel.data.schema import COLUMN_NAMES, COLUMN_TYPES, FEATURE_COLUMNS, LABEL_COLUMN

logger = logging.getLogger(__name__)


def _apply_schema(frame: pd.DataFrame, source: str) -> pd.DataFrame:
    """
    Name and type the raw columns.

    Raises:
        DataValidationError: If the column count or a value type is wrong
    """
    if frame.shape[1] == len(COLUMN_NAMES):
        frame.columns = COLUMN_NAMES
    elif frame.shape[1] == len(FEATURE_COLUMNS):
        frame.columns = FEATURE_COLUMNS
    else:
        raise DataValidationError(
            f"{source}: expected {len(COLUMN_NAMES)} columns "
            f"(or {len(FEATURE_COLUMNS)} without label), got {frame.shape[1]}"
        )

    dtypes = {c: COLUMN_TYPES[c] for c in frame.columns}
    try:
        return frame.astype(dtypes)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"{source}: column type mismatch: {e}") from e


def load_connections(
    filepath: Union[str, Path],
    fraction: float = 1.0,
    seed: int = 42,
    drop_label: bool = True,
) -> pd.DataFrame:
    """
    Load connection records from a headerless CSV file.

    Args:
        filepath: Path to the CSV file
        fraction: Share of rows to keep, sampled without replacement
        seed: Random seed for the sample
        drop_label: Remove the label column (it must not reach clustering)

    Returns:
        Typed DataFrame with the schema columns

    Raises:
        DataValidationError: If the file is missing, empty or malformed
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise DataValidationError(f"Dataset file not found: {filepath}")
    if not 0.0 < fraction <= 1.0:
        raise DataValidationError(f"Sample fraction must be in (0, 1], got {fraction}")

    try:
        raw = pd.read_csv(filepath, header=None, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise DataValidationError(f"Dataset file is empty: {filepath}") from e
    except pd.errors.ParserError as e:
        raise DataValidationError(f"Failed to parse {filepath}: {e}") from e

    frame = _apply_schema(raw, str(filepath))
    total = len(frame)

    if fraction < 1.0:
        frame = frame.sample(frac=fraction, replace=False, random_state=seed)

    if drop_label and LABEL_COLUMN in frame.columns:
        frame = frame.drop(columns=[LABEL_COLUMN])

    frame = frame.reset_index(drop=True)
    logger.info(f"Loaded {filepath.name}: size of dataset={len(frame)} (total={total})")
    return frame

