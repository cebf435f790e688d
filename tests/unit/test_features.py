"""
Unit tests for feature engineering.

Tests stage validation and conversion of connection records into points.
"""

import numpy as np
import pytest

from netsentinel.core.exceptions import ConfigurationError, DataValidationError
from netsentinel.data.features import FeatureEncoder, FeatureStage, to_points, validate_stages
from netsentinel.data.schema import CATEGORICAL_COLUMNS, LABEL_COLUMN, NUMERIC_COLUMNS


class TestStageValidation:
    """Test recipe stage lists."""

    def test_accepts_builtin_shapes(self):
        assert validate_stages(["select_numeric"]) == [FeatureStage.SELECT_NUMERIC]
        assert validate_stages([FeatureStage.ONE_HOT, FeatureStage.SCALE]) == [
            FeatureStage.ONE_HOT,
            FeatureStage.SCALE,
        ]

    @pytest.mark.parametrize(
        "stages",
        [
            [],
            ["scale"],
            ["one_hot", "select_numeric"],
            ["one_hot", "scale", "scale"],
            ["select_numeric", "scale", "one_hot"],
            ["bogus"],
        ],
    )
    def test_rejects_invalid_stage_lists(self, stages):
        with pytest.raises(ConfigurationError):
            validate_stages(stages)


class TestFeatureEncoder:
    """Test fitted feature transformations."""

    def test_select_numeric_drops_categorical(self, connections_factory):
        frame = connections_factory(20).drop(columns=[LABEL_COLUMN])

        encoder = FeatureEncoder([FeatureStage.SELECT_NUMERIC])
        matrix = encoder.fit_transform(frame)

        assert matrix.shape == (20, len(NUMERIC_COLUMNS))
        assert encoder.dimension == len(NUMERIC_COLUMNS)
        np.testing.assert_array_equal(matrix[:, 1], frame["src_bytes"].to_numpy(dtype=float))

    def test_one_hot_keeps_every_category(self, connections_factory):
        frame = connections_factory(50).drop(columns=[LABEL_COLUMN])
        n_categories = sum(frame[c].nunique() for c in CATEGORICAL_COLUMNS)

        encoder = FeatureEncoder([FeatureStage.ONE_HOT])
        matrix = encoder.fit_transform(frame)

        assert matrix.shape == (50, len(NUMERIC_COLUMNS) + n_categories)
        # exactly one active level per categorical column
        one_hot = matrix[:, len(NUMERIC_COLUMNS):]
        assert (one_hot.sum(axis=1) == len(CATEGORICAL_COLUMNS)).all()

    def test_unseen_category_encoded_as_zeros(self, connections_factory):
        train = connections_factory(30).drop(columns=[LABEL_COLUMN])
        test = connections_factory(1, seed=3).drop(columns=[LABEL_COLUMN])
        test["service"] = "never_seen"

        encoder = FeatureEncoder([FeatureStage.ONE_HOT]).fit(train)
        row = encoder.transform(test)[0, len(NUMERIC_COLUMNS):]

        assert row.sum() == len(CATEGORICAL_COLUMNS) - 1

    def test_scale_divides_by_std_without_centering(self, connections_factory):
        frame = connections_factory(40).drop(columns=[LABEL_COLUMN])

        matrix = FeatureEncoder([FeatureStage.SELECT_NUMERIC, FeatureStage.SCALE]).fit_transform(frame)

        raw = frame["src_bytes"].to_numpy(dtype=float)
        np.testing.assert_allclose(matrix[:, 1], raw / raw.std())
        assert (matrix >= 0.0).all()

    def test_transform_before_fit_fails(self, connections_factory):
        with pytest.raises(RuntimeError):
            FeatureEncoder(["one_hot"]).transform(connections_factory(2))

    def test_missing_columns_rejected(self, connections_factory):
        frame = connections_factory(5).drop(columns=["service"])

        with pytest.raises(DataValidationError):
            FeatureEncoder(["one_hot"]).fit(frame)

        # numeric-only recipes never look at categorical columns
        FeatureEncoder(["select_numeric"]).fit(frame)

    def test_transform_points_are_tuples(self, connections_factory):
        frame = connections_factory(3)
        points = FeatureEncoder(["select_numeric"]).fit(frame).transform_points(frame)

        assert len(points) == 3
        assert all(isinstance(p, tuple) for p in points)
        assert all(isinstance(v, float) for v in points[0])


def test_to_points_converts_matrix():
    assert to_points(np.array([[1, 2], [3, 4]])) == [(1.0, 2.0), (3.0, 4.0)]
