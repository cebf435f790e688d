"""
Application configuration for NetSentinel.

Provides environment-aware settings with conservative defaults. Dataset paths,
sampling, and the clustering sweep are configurable to avoid hard-coded
"magic numbers" in the pipeline.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataConfig(BaseModel):
	"""
	Dataset locations and sampling.

	Notes:
	- fraction: share of the training set kept (1.0 keeps everything).
	- sample_seed: seed for the deterministic sample, so runs are comparable.
	"""

	train_path: Path = Field(Path("data/kddcup.data.corrected"))
	test_path: Path = Field(Path("data/test.data.corrected"))
	fraction: float = Field(1.0, gt=0.0, le=1.0)
	sample_seed: int = Field(42, ge=0)


class ClusteringConfig(BaseModel):
	"""
	Clustering sweep configuration.

	Notes:
	- k_min..k_max (inclusive) by k_step is the range of cluster counts tried.
	- seed is shared by every clustering algorithm for reproducibility.
	- max_iter bounds k-means iterations, gmm_max_iter bounds EM iterations.
	"""

	seed: int = Field(1, ge=0)
	k_min: int = Field(20, ge=1)
	k_max: int = Field(100, ge=1)
	k_step: int = Field(10, ge=1)
	max_iter: int = Field(20, ge=1)
	gmm_max_iter: int = Field(100, ge=1)
	recipes: List[str] = Field(
		default_factory=lambda: [
			"kmeans_simple",
			"kmeans_one_hot",
			"kmeans_one_hot_normalized",
			"bisecting_kmeans_one_hot_normalized",
			"gaussian_mixture_one_hot_normalized",
		]
	)

	@model_validator(mode="after")
	def _check_range(self) -> "ClusteringConfig":
		if self.k_max < self.k_min:
			raise ValueError(f"k_max ({self.k_max}) must be >= k_min ({self.k_min})")
		return self

	def k_values(self) -> List[int]:
		return list(range(self.k_min, self.k_max + 1, self.k_step))


class ReportingConfig(BaseModel):
	"""
	Output locations for run reports.
	"""

	results_dir: Path = Field(Path("results"), description="Directory for score and anomaly files")
	write_files: bool = True
	console: bool = True


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.

	Nested sections can be overridden with a double underscore, e.g.
	NETSENTINEL_DATA__FRACTION=0.01.
	"""

	model_config = SettingsConfigDict(
		env_prefix="NETSENTINEL_",
		env_file=".env",
		env_nested_delimiter="__",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	data: DataConfig = DataConfig()
	clustering: ClusteringConfig = ClusteringConfig()
	reporting: ReportingConfig = ReportingConfig()

	@field_validator("log_level")
	@classmethod
	def _known_level(cls, value: str) -> str:
		level = value.upper()
		if not isinstance(logging.getLevelName(level), int):
			raise ValueError(f"Unknown log level: {value}")
		return level

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


config = Config()
