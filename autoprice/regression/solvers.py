"""
Solver dispatch for regression.

This module provides fit() and fit_dataset() (public API) and backend
selection.
"""

from typing import Literal, Sequence
from numpy.typing import ArrayLike

from autoprice.dataset.datasource import AutoDataset
from autoprice.regression.design import Design
from autoprice.regression.solution import LinearSolution
from autoprice.regression.backends.cpu import CPUQRBackend, CPUSVDBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_qr', 'cpu_svd']


def fit(
    X: ArrayLike | Design,
    y: ArrayLike | None = None,
    *,
    names: Sequence[str] | None = None,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model.

    Solves the ordinary least squares problem:
        min_β ||y - Xβ||²

    Args:
        X: Design matrix (n x p) or a prebuilt Design. X is used as
            given: include a column of ones for an intercept.
        y: Response vector (n,). Required unless X is a Design.
        names: Coefficient names for array input.
        backend: Computational backend to use:
            - 'auto', 'cpu', 'cpu_qr': pivoted QR, rank deficiency rejected
            - 'cpu_svd': SVD pseudo-inverse, rank deficiency tolerated

    Returns:
        LinearSolution with coefficients, diagnostics, and summary methods

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If X and y have inconsistent dimensions
        SingularMatrixError: If X is rank-deficient (QR backend)
        ValueError: If the backend name is unknown

    Example:
        >>> import numpy as np
        >>> from autoprice.regression import fit
        >>>
        >>> X = np.column_stack([np.ones(100), np.random.randn(100, 2)])
        >>> y = X @ [1, 2, 3] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y)
        >>> print(result.summary())
    """
    if isinstance(X, Design):
        design = X
    else:
        if y is None:
            raise ValueError("y required when X is not a Design")
        design = Design.from_arrays(X, y, names=names)

    return _solve(design, backend)


def fit_dataset(
    dataset: AutoDataset,
    predictors: Sequence[str],
    *,
    response: str = 'log_price',
    intercept: bool = True,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit `response ~ predictors` on named dataset columns.

    Raises:
        ColumnNotFoundError: If a named column is absent
        SingularMatrixError: If the predictors are collinear (QR backend)
    """
    design = Design.from_dataset(dataset, x=predictors, y=response, intercept=intercept)
    return _solve(design, backend)


def _solve(design: Design, backend: BackendChoice) -> LinearSolution:
    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)
    result.emit_warnings(stacklevel=4)
    return LinearSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_qr'):
        return CPUQRBackend()

    elif choice == 'cpu_svd':
        return CPUSVDBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
