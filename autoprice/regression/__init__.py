"""
Ordinary least squares regression.

Public API:
    fit(X, y, ...) -> LinearSolution
    fit_dataset(ds, predictors, ...) -> LinearSolution

Both entry points handle:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from autoprice.regression import fit
    >>> result = fit(X, y)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from autoprice.regression.design import Design, INTERCEPT_NAME
from autoprice.regression.solution import LinearSolution, LinearParams
from autoprice.regression.solvers import fit, fit_dataset
from autoprice.regression.selection import (
    ComparisonRow,
    ModelComparison,
    compare_models,
    mallows_cp,
)

__all__ = [
    "fit",
    "fit_dataset",
    "Design",
    "INTERCEPT_NAME",
    "LinearSolution",
    "LinearParams",
    "ComparisonRow",
    "ModelComparison",
    "compare_models",
    "mallows_cp",
]
