"""
Pipeline module: recipes and run orchestration.
"""

from .orchestrator import AnomalyPipeline, PipelineRun, RunReport, RunState, best_run
from .recipe import BUILTIN_RECIPES, PipelineRecipe, get_recipe, get_recipes

__all__ = [
    "AnomalyPipeline",
    "PipelineRun",
    "RunReport",
    "RunState",
    "best_run",
    "BUILTIN_RECIPES",
    "PipelineRecipe",
    "get_recipe",
    "get_recipes",
]
