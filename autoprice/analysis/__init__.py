"""
The automobile price analysis: fixed models, pipeline, report, plots, CLI.

Public API:
    AnalysisConfig              - run settings
    run_analysis(config)        - load -> clean -> transform -> fit -> diagnose
    format_report(result)       - textual summary

Plots live in autoprice.analysis.plots (imports matplotlib) and are not
imported here.
"""

from autoprice.analysis.config import AnalysisConfig
from autoprice.analysis.models import (
    ADDED_VARIABLE_SPECS,
    CANDIDATE_MODELS,
    FULL_MODEL,
    REPORTED_CP,
    ModelSpec,
    get_model,
)
from autoprice.analysis.pipeline import (
    AnalysisResult,
    Diagnostics,
    clean,
    diagnose,
    fit_models,
    load,
    run_analysis,
    transform,
)
from autoprice.analysis.report import format_report

__all__ = [
    "AnalysisConfig",
    "ADDED_VARIABLE_SPECS",
    "CANDIDATE_MODELS",
    "FULL_MODEL",
    "REPORTED_CP",
    "ModelSpec",
    "get_model",
    "AnalysisResult",
    "Diagnostics",
    "clean",
    "diagnose",
    "fit_models",
    "load",
    "run_analysis",
    "transform",
    "format_report",
]
