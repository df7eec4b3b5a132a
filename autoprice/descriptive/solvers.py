"""
Descriptive statistics for exploratory analysis.

summary() matches R's summary() for a numeric vector; cor() is the
Pearson correlation matrix behind the scatterplot matrix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from autoprice.core.exceptions import ValidationError
from autoprice.core.validation import check_1d, check_2d, check_array, check_finite
from autoprice.dataset.datasource import AutoDataset


@dataclass(frozen=True)
class SixNumberSummary:
    """Min, Q1, median, mean, Q3, max (R summary())."""
    minimum: float
    q1: float
    median: float
    mean: float
    q3: float
    maximum: float
    n: int

    def as_dict(self) -> dict[str, float]:
        return {
            'Min.': self.minimum,
            '1st Qu.': self.q1,
            'Median': self.median,
            'Mean': self.mean,
            '3rd Qu.': self.q3,
            'Max.': self.maximum,
        }

    def format(self, digits: int = 6) -> str:
        items = self.as_dict()
        header = " ".join(f"{k:>10}" for k in items)
        values = " ".join(f"{v:>10.{digits}g}" for v in items.values())
        return f"{header}\n{values}"


def summary(x: ArrayLike) -> SixNumberSummary:
    """
    Six-number summary of a numeric vector.

    Parameters
    ----------
    x : array-like
        1D numeric data without missing values.

    Returns
    -------
    SixNumberSummary
        Quartiles use R's default type 7 (linear interpolation).

    Raises
    ------
    ValidationError
        If x is empty or contains NaN/Inf.
    """
    arr = check_array(x, 'x')
    check_1d(arr, 'x')
    if arr.size == 0:
        raise ValidationError("x: empty")
    check_finite(arr, 'x')

    q = np.quantile(arr, [0.0, 0.25, 0.5, 0.75, 1.0], method='linear')
    return SixNumberSummary(
        minimum=float(q[0]),
        q1=float(q[1]),
        median=float(q[2]),
        mean=float(np.mean(arr)),
        q3=float(q[3]),
        maximum=float(q[4]),
        n=int(arr.size),
    )


def cor(data: ArrayLike | AutoDataset, columns: Sequence[str] | None = None) -> NDArray[np.floating[Any]]:
    """
    Pearson correlation matrix of the columns.

    Parameters
    ----------
    data : array-like or AutoDataset
        2D matrix (columns are variables), or a dataset.
    columns : sequence of str, optional
        Dataset columns to use; required when data is an AutoDataset.

    Returns
    -------
    ndarray (k, k)
        Constant columns yield NaN correlations, as in R.
    """
    if isinstance(data, AutoDataset):
        if columns is None:
            raise ValueError("columns required when data is an AutoDataset")
        arr = data.matrix(list(columns))
    else:
        arr = check_array(data, 'data')
    check_2d(arr, 'data')
    check_finite(arr, 'data')
    if arr.shape[0] < 2:
        raise ValidationError(f"data: need at least 2 rows, got {arr.shape[0]}")

    centered = arr - arr.mean(axis=0)
    cross = centered.T @ centered
    scale = np.sqrt(np.diag(cross))
    with np.errstate(divide='ignore', invalid='ignore'):
        r = cross / np.outer(scale, scale)
    np.fill_diagonal(r, np.where(scale > 0, 1.0, np.nan))
    return r
