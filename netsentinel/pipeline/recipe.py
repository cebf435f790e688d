"""
Declarative pipeline recipes.

A recipe names an ordered list of feature stages and one clustering
algorithm. The cluster count k is supplied per run, so one recipe drives a
whole k sweep.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from netsentinel.clustering.algorithms import ALGORITHMS, ClusteringAlgorithm, build_algorithm
from netsentinel.core.config import ClusteringConfig
from netsentinel.core.exceptions import ConfigurationError
from netsentinel.data.features import FeatureEncoder, FeatureStage, validate_stages


class PipelineRecipe(BaseModel):
    """
    Feature stages plus a clustering algorithm choice.

    Fields:
    - name: identifier used on the command line and in config
    - title: human-readable label, "{k}" is replaced by the cluster count
    - stages: ordered feature stages
    - algorithm: key of the clustering algorithm registry
    """

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    stages: Tuple[FeatureStage, ...]
    algorithm: str

    @field_validator("stages")
    @classmethod
    def _valid_stages(cls, value: Tuple[FeatureStage, ...]) -> Tuple[FeatureStage, ...]:
        try:
            return tuple(validate_stages(value))
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        if value not in ALGORITHMS:
            raise ValueError(f"Unknown clustering algorithm: {value}")
        return value

    def label(self, k: int) -> str:
        return self.title.format(k=k)

    def build_encoder(self) -> FeatureEncoder:
        return FeatureEncoder(self.stages)

    def build_algorithm(self, k: int, settings: ClusteringConfig) -> ClusteringAlgorithm:
        max_iter = settings.gmm_max_iter if self.algorithm == "gaussian_mixture" else settings.max_iter
        return build_algorithm(self.algorithm, k, seed=settings.seed, max_iter=max_iter)


_NORMALIZED = (FeatureStage.ONE_HOT, FeatureStage.SCALE)

BUILTIN_RECIPES: Dict[str, PipelineRecipe] = {
    recipe.name: recipe
    for recipe in [
        PipelineRecipe(
            name="kmeans_simple",
            title="K-means ({k}) simple",
            stages=(FeatureStage.SELECT_NUMERIC,),
            algorithm="kmeans",
        ),
        PipelineRecipe(
            name="kmeans_one_hot",
            title="K-means ({k}) with one-hot encoder",
            stages=(FeatureStage.ONE_HOT,),
            algorithm="kmeans",
        ),
        PipelineRecipe(
            name="kmeans_one_hot_normalized",
            title="K-means ({k}) with one-hot encoder with normalization",
            stages=_NORMALIZED,
            algorithm="kmeans",
        ),
        PipelineRecipe(
            name="bisecting_kmeans_one_hot_normalized",
            title="Bisecting K-means ({k}) with one-hot encoder with normalization",
            stages=_NORMALIZED,
            algorithm="bisecting_kmeans",
        ),
        PipelineRecipe(
            name="gaussian_mixture_one_hot_normalized",
            title="GaussianMixture ({k}) with one-hot encoder with normalization",
            stages=_NORMALIZED,
            algorithm="gaussian_mixture",
        ),
    ]
}


def get_recipe(name: str) -> PipelineRecipe:
    """
    Look up a built-in recipe.

    Raises:
        ConfigurationError: If no recipe has that name
    """
    try:
        return BUILTIN_RECIPES[name]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown recipe: {name} (available: {sorted(BUILTIN_RECIPES)})"
        ) from e


def get_recipes(names: List[str]) -> List[PipelineRecipe]:
    return [get_recipe(name) for name in names]
