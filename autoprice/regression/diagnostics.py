"""
Regression diagnostics.

Coordinates for the standard diagnostic plots (normal Q-Q, added-variable,
binned residuals) and influence screening. Everything here is computed
from fitted LinearSolution objects or plain arrays; nothing is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from autoprice.core.exceptions import ValidationError
from autoprice.core.validation import check_1d, check_array, check_consistent_length, check_finite
from autoprice.dataset.datasource import AutoDataset
from autoprice.regression.solution import LinearSolution
from autoprice.regression.solvers import BackendChoice, fit_dataset


def ppoints(n: int) -> NDArray[np.floating[Any]]:
    """Plotting positions (i - a)/(n + 1 - 2a), a = 3/8 if n <= 10 else 1/2."""
    if n <= 0:
        return np.empty(0, dtype=np.float64)
    a = 3.0 / 8.0 if n <= 10 else 0.5
    return (np.arange(1, n + 1) - a) / (n + 1 - 2 * a)


@dataclass(frozen=True)
class QQPoints:
    """Normal Q-Q coordinates plus the reference line through the quartiles."""
    theoretical: NDArray[np.floating[Any]]
    sample: NDArray[np.floating[Any]]
    line_intercept: float
    line_slope: float


def qq_points(values: ArrayLike) -> QQPoints:
    """
    Normal Q-Q coordinates, as R's qqnorm() + qqline().

    Non-finite values (e.g. NaN standardized residuals at leverage one)
    are dropped.
    """
    arr = check_array(values, 'values')
    check_1d(arr, 'values')
    arr = arr[np.isfinite(arr)]
    if arr.size < 2:
        raise ValidationError(f"values: need at least 2 finite values, got {arr.size}")

    sample = np.sort(arr)
    theoretical = stats.norm.ppf(ppoints(arr.size))

    y_q = np.quantile(arr, [0.25, 0.75])
    x_q = stats.norm.ppf([0.25, 0.75])
    slope = float((y_q[1] - y_q[0]) / (x_q[1] - x_q[0]))
    intercept = float(y_q[0] - slope * x_q[0])

    return QQPoints(
        theoretical=theoretical,
        sample=sample,
        line_intercept=intercept,
        line_slope=slope,
    )


@dataclass(frozen=True)
class AddedVariable:
    """
    Added-variable (partial regression) coordinates for one predictor.

    predictor_residuals: predictor regressed on the controls
    response_residuals: response regressed on the controls
    slope: least squares slope through the origin of response_residuals
        on predictor_residuals; equals the predictor's coefficient in the
        model response ~ controls + predictor
    """
    predictor: str
    response: str
    controls: tuple[str, ...]
    predictor_residuals: NDArray[np.floating[Any]]
    response_residuals: NDArray[np.floating[Any]]
    slope: float


def added_variable(
    dataset: AutoDataset,
    predictor: str,
    controls: Sequence[str],
    *,
    response: str = 'log_price',
    backend: BackendChoice = 'auto',
) -> AddedVariable:
    """
    Residual-on-residual coordinates isolating one predictor's effect.

    Both auxiliary regressions include an intercept.

    Raises:
        ColumnNotFoundError: If a named column is absent
        ValidationError: If the predictor is fully explained by the controls
    """
    controls = tuple(controls)
    y_res = fit_dataset(dataset, controls, response=response, backend=backend).residuals
    x_res = fit_dataset(dataset, controls, response=predictor, backend=backend).residuals

    denom = float(x_res @ x_res)
    if denom <= np.finfo(np.float64).eps * max(1.0, float(dataset[predictor] @ dataset[predictor])):
        raise ValidationError(
            f"{predictor}: fully explained by {list(controls)}, no partial variation left"
        )
    slope = float(x_res @ y_res) / denom

    return AddedVariable(
        predictor=predictor,
        response=response,
        controls=controls,
        predictor_residuals=x_res,
        response_residuals=y_res,
        slope=slope,
    )


@dataclass(frozen=True)
class ResidualBins:
    """Residuals grouped by equal-width bins of the fitted values."""
    edges: NDArray[np.floating[Any]]
    labels: tuple[str, ...]
    groups: tuple[NDArray[np.floating[Any]], ...]

    @property
    def counts(self) -> tuple[int, ...]:
        return tuple(len(g) for g in self.groups)


def bin_residuals(
    fitted: ArrayLike,
    residuals: ArrayLike,
    n_bins: int = 5,
) -> ResidualBins:
    """
    Group residuals by equal-width, right-closed bins of fitted values.

    Edges follow R's cut(x, breaks=n_bins): n_bins + 1 equally spaced
    points across the range, the outer ones pushed out by 0.1% of the
    range so the extremes fall inside.
    """
    if n_bins < 1:
        raise ValidationError(f"n_bins: must be >= 1, got {n_bins}")
    fitted = check_array(fitted, 'fitted')
    residuals = check_array(residuals, 'residuals')
    check_1d(fitted, 'fitted')
    check_1d(residuals, 'residuals')
    check_finite(fitted, 'fitted')
    check_consistent_length(fitted, residuals, names=('fitted', 'residuals'))
    if fitted.size == 0:
        raise ValidationError("fitted: empty")

    lo, hi = float(np.min(fitted)), float(np.max(fitted))
    dx = hi - lo
    if dx == 0:
        dx = abs(lo) or 1.0
        edges = np.linspace(lo - dx / 1000, hi + dx / 1000, n_bins + 1)
    else:
        edges = np.linspace(lo, hi, n_bins + 1)
        edges[0] -= dx / 1000
        edges[-1] += dx / 1000

    idx = np.clip(np.searchsorted(edges, fitted, side='left') - 1, 0, n_bins - 1)
    groups = tuple(residuals[idx == k] for k in range(n_bins))
    labels = tuple(f"({edges[k]:.3g},{edges[k + 1]:.3g}]" for k in range(n_bins))

    return ResidualBins(edges=edges, labels=labels, groups=groups)


@dataclass(frozen=True)
class Influence:
    """One observation flagged by Cook's distance."""
    index: int
    label: str
    cooks_distance: float
    leverage: float
    standardized_residual: float


def influential_observations(
    solution: LinearSolution,
    cutoff: float | None = None,
) -> tuple[Influence, ...]:
    """
    Observations whose Cook's distance exceeds the cutoff.

    Args:
        solution: Fitted model
        cutoff: Cook's distance threshold; defaults to 4/n

    Returns:
        Flagged observations, largest distance first
    """
    if cutoff is None:
        cutoff = 4.0 / solution.n
    cooks = solution.cooks_distance
    source = solution.design.source
    labels = source.labels if source is not None else tuple(
        f"row {i + 1}" for i in range(solution.n)
    )

    flagged = [int(i) for i in np.flatnonzero(np.nan_to_num(cooks) > cutoff)]
    flagged.sort(key=lambda i: -cooks[i])
    return tuple(
        Influence(
            index=i,
            label=labels[i],
            cooks_distance=float(cooks[i]),
            leverage=float(solution.leverage[i]),
            standardized_residual=float(solution.standardized_residuals[i]),
        )
        for i in flagged
    )
