"""Diagnostics: grid refinement sweeps and plots of solved fields."""

from .refinement import RefinementRun, run_refinement_sweep

__all__ = ["RefinementRun", "run_refinement_sweep"]
