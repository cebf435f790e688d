"""
Pytest configuration and shared fixtures.

Provides test configuration instances and synthetic connection records for
unit and integration tests.
"""

from pathlib import Path
from typing import Callable, Optional

import numpy as np
import pandas as pd
import pytest

from netsentinel.core.config import ClusteringConfig, Config, DataConfig, ReportingConfig
from netsentinel.data.schema import COLUMN_NAMES, COLUMN_TYPES, LABEL_COLUMN


def make_connections(n: int, seed: int = 0, src_bytes: Optional[int] = None) -> pd.DataFrame:
    """
    Generate n synthetic connection records in the raw column layout.

    Numeric fields are small random values; src_bytes can be forced to a
    fixed value to inject obvious outliers.
    """
    rng = np.random.RandomState(seed)
    data = {}
    for column in COLUMN_NAMES:
        dtype = COLUMN_TYPES[column]
        if column == LABEL_COLUMN:
            data[column] = ["normal."] * n
        elif column == "protocol_type":
            data[column] = rng.choice(["tcp", "udp"], size=n)
        elif column == "service":
            data[column] = rng.choice(["http", "smtp", "domain_u"], size=n)
        elif column == "flag":
            data[column] = rng.choice(["SF", "REJ"], size=n)
        elif dtype == "int64":
            data[column] = rng.randint(0, 10, size=n)
        else:
            data[column] = np.round(rng.uniform(0.0, 1.0, size=n), 2)
    frame = pd.DataFrame(data, columns=COLUMN_NAMES)
    if src_bytes is not None:
        frame["src_bytes"] = src_bytes
    return frame


@pytest.fixture
def connections_factory() -> Callable[..., pd.DataFrame]:
    """
    Fixture exposing the synthetic record generator.

    Returns:
        Callable: make_connections(n, seed=0, src_bytes=None)
    """
    return make_connections


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[pd.DataFrame, str], Path]:
    """
    Fixture writing a frame as a headerless CSV under tmp_path.

    Returns:
        Callable: (frame, filename) -> Path of the written file
    """

    def _write(frame: pd.DataFrame, name: str) -> Path:
        path = tmp_path / name
        frame.to_csv(path, header=False, index=False)
        return path

    return _write


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """
    Fixture providing test configuration with minimal values.

    Used to override environment-based config in unit tests.
    Ensures tests run consistently regardless of .env settings.

    Returns:
        Config: Test instance writing logs and results under tmp_path
    """
    return Config(
        log_level="WARNING",
        logs_dir=tmp_path / "logs",
        data=DataConfig(fraction=1.0, sample_seed=42),
        clustering=ClusteringConfig(seed=1, k_min=2, k_max=3, k_step=1, max_iter=50),
        reporting=ReportingConfig(results_dir=tmp_path / "results", console=False),
    )


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
