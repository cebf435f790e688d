"""
Command-line entry point for NetSentinel.

Loads the training (and optional test) dataset, runs every requested recipe
over a range of cluster counts, and reports scores and anomalies.

Example:
    netsentinel --train data/kddcup.data.corrected --test data/test.data.corrected \
        --recipe kmeans_simple --k-min 20 --k-max 100 --k-step 10
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from netsentinel.core.config import Config
from netsentinel.core.exceptions import NetSentinelError
from netsentinel.core.logging_config import setup_logging
from netsentinel.data.ingestion import load_connections
from netsentinel.pipeline.orchestrator import AnomalyPipeline, best_run
from netsentinel.pipeline.recipe import BUILTIN_RECIPES, get_recipes
from netsentinel.reporting.sink import build_reporters

logger = logging.getLogger("netsentinel.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netsentinel",
        description="Clustering-based anomaly detection in network traffic",
    )
    parser.add_argument("--train", type=Path, help="Training CSV (default from config)")
    parser.add_argument("--test", type=Path, help="Test CSV to classify (default from config)")
    parser.add_argument("--no-test", action="store_true", help="Only score clusterings, skip anomaly detection")
    parser.add_argument(
        "--recipe",
        action="append",
        choices=sorted(BUILTIN_RECIPES),
        help="Recipe to run (repeatable, default: all configured recipes)",
    )
    parser.add_argument("--k-min", type=int)
    parser.add_argument("--k-max", type=int)
    parser.add_argument("--k-step", type=int)
    parser.add_argument("--fraction", type=float, help="Share of the training set to use")
    parser.add_argument("--results-dir", type=Path)
    parser.add_argument("--log-level")
    return parser


def _overlay(section, **updates):
    """Validated copy of a config section with the non-None updates applied."""
    updates = {k: v for k, v in updates.items() if v is not None}
    return type(section).model_validate({**section.model_dump(), **updates})


def settings_from_args(args: argparse.Namespace, base: Optional[Config] = None) -> Config:
    """Overlay command-line options on the environment configuration."""
    base = base or Config()
    data = _overlay(base.data, train_path=args.train, test_path=args.test, fraction=args.fraction)
    clustering = _overlay(
        base.clustering,
        k_min=args.k_min,
        k_max=args.k_max,
        k_step=args.k_step,
        recipes=list(args.recipe) if args.recipe else None,
    )
    reporting = _overlay(base.reporting, results_dir=args.results_dir)

    return _overlay(base, data=data, clustering=clustering, reporting=reporting, log_level=args.log_level)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        # pydantic validation errors subclass ValueError
        print(f"Invalid configuration: {e}")
        return 2

    setup_logging("netsentinel", settings)

    try:
        recipes = get_recipes(settings.clustering.recipes)
        train = load_connections(
            settings.data.train_path,
            fraction=settings.data.fraction,
            seed=settings.data.sample_seed,
        )
        test = None if args.no_test else load_connections(settings.data.test_path)

        pipeline = AnomalyPipeline(settings=settings, reporters=build_reporters(settings))
        reports = pipeline.sweep(recipes, settings.clustering.k_values(), train, test)
    except NetSentinelError as e:
        logger.error(f"Run failed: {e}")
        return 1

    best = best_run(reports)
    if best is not None:
        logger.info(f"Best configuration: {best.label} (score={best.score.score})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
