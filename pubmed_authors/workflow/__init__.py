"""Pipeline entry points for the author harvest."""

from .harvest import HarvestState, run_pipeline

__all__ = ["HarvestState", "run_pipeline"]
