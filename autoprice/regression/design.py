"""
Regression Design.

Design wraps an AutoDataset (or raw arrays) and extracts X (design matrix)
and y (response). It knows it's building a regression; the dataset doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from autoprice.core.exceptions import ValidationError
from autoprice.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_more_rows_than_columns,
)
from autoprice.dataset.datasource import AutoDataset

INTERCEPT_NAME = '(Intercept)'


@dataclass(frozen=True, eq=False)
class Design:
    """
    Regression design matrix specification.

    Immutable after construction.

    Construction:
        Design.from_dataset(ds, x=['hp', 'curb_weight'], y='log_price')
        Design.from_arrays(X, y)                  # X used as given
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _names: tuple[str, ...]
    _response: str
    _has_intercept: bool
    _source: AutoDataset | None = None

    @classmethod
    def from_dataset(
        cls,
        source: AutoDataset,
        *,
        x: Sequence[str],
        y: str = 'log_price',
        intercept: bool = True,
    ) -> Design:
        """
        Build Design from named dataset columns.

        Args:
            source: The dataset
            x: Predictor column names, in coefficient order
            y: Response column name
            intercept: Prepend a column of ones named '(Intercept)'

        Raises:
            ColumnNotFoundError: If a named column is absent
        """
        if isinstance(x, str):
            x = [x]
        y_arr = np.asarray(source[y], dtype=np.float64)
        X_arr = source.matrix(list(x))
        names = tuple(x)
        if intercept:
            X_arr = np.column_stack([np.ones(source.n_observations), X_arr])
            names = (INTERCEPT_NAME,) + names
        return cls._build(X_arr, y_arr, names=names, response=y, source=source)

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        names: Sequence[str] | None = None,
        response: str = 'y',
    ) -> Design:
        """
        Build Design directly from arrays.

        X is used as given: include a column of ones for an intercept.
        Unnamed columns are called '(Intercept)' when constant one;
        the others are numbered 'x1', 'x2', ... in column order.
        """
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if names is None:
            names = _default_names(X_arr)
        return cls._build(X_arr, y_arr, names=tuple(names), response=response, source=None)

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        *,
        names: tuple[str, ...],
        response: str,
        source: AutoDataset | None,
    ) -> Design:
        """Internal builder with validation."""
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))
        if X.shape[1] == 0:
            raise ValidationError("X: design matrix has no columns")
        check_more_rows_than_columns(X, 'X')
        if len(names) != X.shape[1]:
            raise ValueError(
                f"Got {len(names)} coefficient names for {X.shape[1]} columns"
            )

        X = np.array(X, dtype=np.float64, copy=True)
        y = np.array(y, dtype=np.float64, copy=True)
        X.setflags(write=False)
        y.setflags(write=False)

        n, p = X.shape
        has_intercept = any(_is_ones(X[:, j]) for j in range(p))
        return cls(
            _X=X, _y=y, _n=n, _p=p,
            _names=names, _response=response,
            _has_intercept=has_intercept, _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of columns, intercept included."""
        return self._p

    @property
    def names(self) -> tuple[str, ...]:
        """Coefficient names, one per column of X."""
        return self._names

    @property
    def response(self) -> str:
        return self._response

    @property
    def has_intercept(self) -> bool:
        """True if some column of X is identically one."""
        return self._has_intercept

    @property
    def predictors(self) -> tuple[str, ...]:
        """Coefficient names other than the intercept."""
        return tuple(name for name in self._names if name != INTERCEPT_NAME)

    @property
    def source(self) -> AutoDataset | None:
        """Original dataset, if available."""
        return self._source

    def formula(self) -> str:
        """R-style formula string, e.g. 'log_price ~ hp + rear'."""
        rhs = " + ".join(self.predictors) or "1"
        if not self._has_intercept:
            rhs += " - 1"
        return f"{self._response} ~ {rhs}"

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y


def _is_ones(column: NDArray) -> bool:
    return bool(np.all(column == 1.0))


def _default_names(X: NDArray) -> tuple[str, ...]:
    names = []
    k = 0
    for j in range(X.shape[1]):
        if _is_ones(X[:, j]):
            names.append(INTERCEPT_NAME)
        else:
            k += 1
            names.append(f"x{k}")
    return tuple(names)
