"""
Pipeline orchestration for one clustering configuration.

A run moves through a fixed sequence of states:

    UNTRAINED → TRAINED → SCORED → THRESHOLDS_ESTIMATED → CLASSIFIED → REPORTED

Scoring, threshold estimation, and classification all use the single model
trained by the run. Classification is skipped (THRESHOLDS_ESTIMATED →
REPORTED) when no test data is supplied.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Iterable, List, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, Field

from netsentinel.anomaly.classifier import AnomalyClassifier
from netsentinel.anomaly.schema import AnomalyRecord, Assignment, ClusterScore, ClusterThresholdTable
from netsentinel.anomaly.scoring import ClusterScorer
from netsentinel.anomaly.thresholds import ThresholdEstimator
from netsentinel.clustering.base import TrainedModel
from netsentinel.core.config import Config, config as default_config
from netsentinel.core.exceptions import PipelineStateError
from netsentinel.data.features import FeatureEncoder
from netsentinel.reporting.sink import Reporter

from .recipe import PipelineRecipe

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Lifecycle of a single pipeline run."""

    UNTRAINED = "untrained"
    TRAINED = "trained"
    SCORED = "scored"
    THRESHOLDS_ESTIMATED = "thresholds_estimated"
    CLASSIFIED = "classified"
    REPORTED = "reported"


class RunReport(BaseModel):
    """
    Summary of a finished run.

    Fields:
    - label: human-readable run label (recipe title with k)
    - recipe: recipe name
    - k: number of clusters
    - model_id: id of the trained model every result came from
    - score: clustering quality on the training data
    - thresholds: per-cluster thresholds used for classification (the estimated ones unless classify was given a table)
    - anomalies: anomalous test assignments (empty if not classified)
    - classified: True if test data was classified
    - test_size: number of classified test points
    - duration_seconds: time from run start to the end of scoring
    """

    label: str
    recipe: str
    k: int
    model_id: str
    score: ClusterScore
    thresholds: ClusterThresholdTable
    anomalies: List[AnomalyRecord] = Field(default_factory=list)
    classified: bool = False
    test_size: int = 0
    duration_seconds: float = Field(ge=0.0)

    @property
    def anomaly_count(self) -> int:
        return len(self.anomalies)


class PipelineRun:
    """
    Stateful driver for one (recipe, k) run.

    Each step checks the current state, so a run can neither skip training
    nor classify before its thresholds exist.
    """

    def __init__(
        self,
        recipe: PipelineRecipe,
        k: int,
        settings: Optional[Config] = None,
        scorer: Optional[ClusterScorer] = None,
        estimator: Optional[ThresholdEstimator] = None,
        classifier: Optional[AnomalyClassifier] = None,
    ):
        self.recipe = recipe
        self.k = k
        self.settings = settings or default_config
        self.scorer = scorer or ClusterScorer()
        self.estimator = estimator or ThresholdEstimator()
        self.classifier = classifier or AnomalyClassifier()

        self.state = RunState.UNTRAINED
        self.encoder: Optional[FeatureEncoder] = None
        self.model: Optional[TrainedModel] = None
        self.training_assignments: List[Assignment] = []
        self.cluster_score: Optional[ClusterScore] = None
        self.thresholds: Optional[ClusterThresholdTable] = None
        self.applied_thresholds: Optional[ClusterThresholdTable] = None
        self.anomalies: List[AnomalyRecord] = []
        self.test_size = 0
        self.duration_seconds = 0.0
        self._started = time.perf_counter()

    @property
    def label(self) -> str:
        return self.recipe.label(self.k)

    def _require(self, action: str, *allowed: RunState) -> None:
        if self.state not in allowed:
            expected = " or ".join(s.value for s in allowed)
            raise PipelineStateError(
                f"Cannot {action} {self.label}: run is {self.state.value}, expected {expected}"
            )

    def train(self, frame: pd.DataFrame) -> TrainedModel:
        """Fit features and the clustering model, then assign the training points."""
        self._require("train", RunState.UNTRAINED)
        logger.info(f"Running {self.label}")

        self.encoder = self.recipe.build_encoder()
        points = self.encoder.fit(frame).transform_points(frame)

        algorithm = self.recipe.build_algorithm(self.k, self.settings.clustering)
        self.model = algorithm.fit(points)
        self.training_assignments = self.model.assign(points)

        self.state = RunState.TRAINED
        return self.model

    def score(self) -> ClusterScore:
        self._require("score", RunState.TRAINED)
        self.cluster_score = self.scorer.evaluate(self.model.centroids(), self.training_assignments)
        self.duration_seconds = time.perf_counter() - self._started

        empty = self.cluster_score.empty_clusters
        if empty:
            logger.warning(f"{self.label}: {len(empty)} empty clusters {empty} count as 0 in the score")

        self.state = RunState.SCORED
        return self.cluster_score

    def estimate_thresholds(self) -> ClusterThresholdTable:
        self._require("estimate thresholds for", RunState.SCORED)
        self.thresholds = self.estimator.estimate(
            self.model.centroids(), self.training_assignments, model_id=self.model.model_id
        )
        self.state = RunState.THRESHOLDS_ESTIMATED
        return self.thresholds

    def classify(
        self, frame: pd.DataFrame, thresholds: Optional[ClusterThresholdTable] = None
    ) -> List[AnomalyRecord]:
        """
        Classify test records with the trained model and its thresholds.

        Raises:
            PipelineStateError: If thresholds are missing or come from another model
        """
        self._require("classify", RunState.THRESHOLDS_ESTIMATED)
        thresholds = thresholds if thresholds is not None else self.thresholds
        if thresholds.model_id != self.model.model_id:
            raise PipelineStateError(
                f"Thresholds from model {thresholds.model_id} cannot classify with model {self.model.model_id}"
            )

        points = self.encoder.transform_points(frame)
        assignments = self.model.assign(points)
        self.anomalies = self.classifier.classify(self.model.centroids(), thresholds, assignments)
        self.applied_thresholds = thresholds
        self.test_size = len(assignments)

        logger.info(f"{self.label}: {len(self.anomalies)}/{self.test_size} test records flagged")
        self.state = RunState.CLASSIFIED
        return self.anomalies

    def report(self, reporters: Iterable[Reporter] = ()) -> RunReport:
        self._require("report", RunState.THRESHOLDS_ESTIMATED, RunState.CLASSIFIED)
        classified = self.state == RunState.CLASSIFIED

        for reporter in reporters:
            reporter.report_score(self.label, self.cluster_score.score, self.duration_seconds)
            if classified:
                reporter.report_anomalies(self.label, self.k, self.anomalies)

        self.state = RunState.REPORTED
        return RunReport(
            label=self.label,
            recipe=self.recipe.name,
            k=self.k,
            model_id=self.model.model_id,
            score=self.cluster_score,
            thresholds=self.applied_thresholds if self.applied_thresholds is not None else self.thresholds,
            anomalies=self.anomalies,
            classified=classified,
            test_size=self.test_size,
            duration_seconds=self.duration_seconds,
        )


class AnomalyPipeline:
    """
    Runs recipes end to end and hands results to the reporters.
    """

    def __init__(self, settings: Optional[Config] = None, reporters: Optional[Sequence[Reporter]] = None):
        self.settings = settings or default_config
        self.reporters = list(reporters) if reporters is not None else []

    def run(
        self,
        recipe: PipelineRecipe,
        k: int,
        train_frame: pd.DataFrame,
        test_frame: Optional[pd.DataFrame] = None,
    ) -> RunReport:
        run = PipelineRun(recipe, k, settings=self.settings)
        run.train(train_frame)
        run.score()
        run.estimate_thresholds()
        if test_frame is not None:
            run.classify(test_frame)
        return run.report(self.reporters)

    def sweep(
        self,
        recipes: Sequence[PipelineRecipe],
        ks: Sequence[int],
        train_frame: pd.DataFrame,
        test_frame: Optional[pd.DataFrame] = None,
    ) -> List[RunReport]:
        reports: List[RunReport] = []
        for recipe in recipes:
            for k in ks:
                reports.append(self.run(recipe, k, train_frame, test_frame))
        return reports


def best_run(reports: Sequence[RunReport]) -> Optional[RunReport]:
    """Run with the lowest (best) clustering score, None if there are none."""
    if not reports:
        return None
    return min(reports, key=lambda r: r.score.score)
