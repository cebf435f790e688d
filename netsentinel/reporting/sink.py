"""
Run reporting sinks.

Scores and anomalies are handed to reporters once a run has finished its
computation; nothing here feeds back into scoring or classification.

- Reporter: abstract interface (report_score / report_anomalies)
- ConsoleReporter: logs a summary line per run
- FileReporter: writes results<yyyyMMddHHmm>_<label>.txt score files and
  anomalies_<yyyyMMddHHmm>_<label>_<k>.json NDJSON anomaly files
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from netsentinel.anomaly.schema import AnomalyRecord
from netsentinel.core.config import Config

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M"


def _slug(label: str) -> str:
    return label.replace(" ", "_")


def anomaly_to_row(record: AnomalyRecord) -> Dict[str, Any]:
    """JSON-friendly view of an anomaly record."""
    return {
        "cluster_id": record.cluster_id,
        "distance": record.distance,
        "threshold": record.threshold,
        "anomaly": int(record.is_anomaly),
        "features": list(record.point),
    }


class Reporter(ABC):
    @abstractmethod
    def report_score(self, label: str, score: float, duration_seconds: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def report_anomalies(self, label: str, k: int, anomalies: Sequence[AnomalyRecord]) -> None:
        raise NotImplementedError


class ConsoleReporter(Reporter):
    def report_score(self, label: str, score: float, duration_seconds: float) -> None:
        logger.info(f"{label}: Score={score} Duration={duration_seconds:.3f}s")

    def report_anomalies(self, label: str, k: int, anomalies: Sequence[AnomalyRecord]) -> None:
        logger.info(f"{label}: {len(anomalies)} anomalies (k={k})")
        for record in anomalies[:10]:
            logger.debug(
                f"  cluster={record.cluster_id} distance={record.distance:.6f} "
                f"threshold={record.threshold:.6f}"
            )


class FileReporter(Reporter):
    """
    Writes one score file and one anomaly file per run.

    Filenames carry a minute-resolution timestamp plus the run label, so
    consecutive runs of different recipes or k never overwrite each other.
    """

    def __init__(
        self,
        results_dir: Union[str, Path],
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.results_dir = Path(results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock or datetime.now

    def _stamp(self) -> str:
        return self._clock().strftime(TIMESTAMP_FORMAT)

    def score_path(self, label: str) -> Path:
        return self.results_dir / f"results{self._stamp()}_{_slug(label)}.txt"

    def anomalies_path(self, label: str, k: int) -> Path:
        return self.results_dir / f"anomalies_{self._stamp()}_{_slug(label)}_{k}.json"

    def report_score(self, label: str, score: float, duration_seconds: float) -> None:
        path = self.score_path(label)
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"{label}\n")
            f.write(f"Score={score}\n")
            f.write(f"Duration={duration_seconds}\n")
        logger.debug(f"Wrote score to {path}")

    def report_anomalies(self, label: str, k: int, anomalies: Sequence[AnomalyRecord]) -> None:
        path = self.anomalies_path(label, k)
        with open(path, "w", encoding="utf-8") as f:
            for record in anomalies:
                f.write(json.dumps(anomaly_to_row(record)) + "\n")
        logger.debug(f"Wrote {len(anomalies)} anomalies to {path}")


def build_reporters(settings: Config) -> List[Reporter]:
    """
    Build the reporter list from configuration.
    """
    out: List[Reporter] = []
    if settings.reporting.console:
        out.append(ConsoleReporter())
    if settings.reporting.write_files:
        out.append(FileReporter(settings.reporting.results_dir))
    return out
