"""
Unit tests for connection record ingestion.
"""

import pytest

from netsentinel.core.exceptions import DataValidationError
from netsentinel.data.ingestion import load_connections
from netsentinel.data.schema import COLUMN_NAMES, FEATURE_COLUMNS, LABEL_COLUMN


def test_load_applies_schema_and_drops_label(connections_factory, write_csv):
    path = write_csv(connections_factory(25), "train.csv")

    frame = load_connections(path)

    assert list(frame.columns) == FEATURE_COLUMNS
    assert len(frame) == 25
    assert str(frame["src_bytes"].dtype) == "int64"
    assert str(frame["serror_rate"].dtype) == "float64"


def test_load_can_keep_label(connections_factory, write_csv):
    path = write_csv(connections_factory(5), "train.csv")

    frame = load_connections(path, drop_label=False)

    assert list(frame.columns) == COLUMN_NAMES
    assert (frame[LABEL_COLUMN] == "normal.").all()


def test_load_accepts_unlabeled_files(connections_factory, write_csv):
    path = write_csv(connections_factory(5).drop(columns=[LABEL_COLUMN]), "capture.csv")

    frame = load_connections(path)

    assert list(frame.columns) == FEATURE_COLUMNS


def test_sampling_is_deterministic(connections_factory, write_csv):
    path = write_csv(connections_factory(200), "train.csv")

    first = load_connections(path, fraction=0.1, seed=42)
    second = load_connections(path, fraction=0.1, seed=42)

    assert len(first) == 20
    assert first.equals(second)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(DataValidationError, match="not found"):
        load_connections(tmp_path / "nope.csv")


def test_empty_file_rejected(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")

    with pytest.raises(DataValidationError, match="empty"):
        load_connections(path)


def test_wrong_column_count_rejected(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("0,tcp,http,SF,10\n")

    with pytest.raises(DataValidationError, match="expected"):
        load_connections(path)


def test_non_numeric_value_rejected(connections_factory, write_csv):
    frame = connections_factory(3)
    frame["src_bytes"] = frame["src_bytes"].astype(object)
    frame.loc[1, "src_bytes"] = "lots"
    path = write_csv(frame, "corrupt.csv")

    with pytest.raises(DataValidationError, match="type mismatch"):
        load_connections(path)


def test_invalid_fraction_rejected(connections_factory, write_csv):
    path = write_csv(connections_factory(3), "train.csv")

    with pytest.raises(DataValidationError):
        load_connections(path, fraction=0.0)
