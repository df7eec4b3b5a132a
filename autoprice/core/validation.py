"""
Input validation utilities for autoprice.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from autoprice.core.exceptions import ValidationError, DimensionError, DomainError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (mixed types or non-numeric data) and non-numeric dtypes.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # bool is accepted for indicator columns
    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_more_rows_than_columns(X: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a design matrix has strictly more rows than columns (n > p).

    Raises:
        ValidationError: If n <= p
    """
    n, p = X.shape
    if n <= p:
        raise ValidationError(
            f"{name}: requires more observations than columns, got n={n}, p={p}"
        )


def check_binary(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify an indicator array holds only 0 and 1.

    Raises:
        ValidationError: If any value is neither 0 nor 1
    """
    bad = ~np.isin(array, (0.0, 1.0))
    if np.any(bad):
        values = sorted(set(np.asarray(array)[bad].tolist()))[:5]
        raise ValidationError(
            f"{name}: indicator column must be 0/1, found {int(bad.sum())} "
            f"other values (e.g. {values})"
        )


def check_positive(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every value is strictly positive.

    Raises:
        DomainError: If any value is <= 0
    """
    n_invalid = int(np.sum(array <= 0))
    if n_invalid:
        raise DomainError(
            f"{name}: {n_invalid} value(s) <= 0, minimum is {float(np.min(array))}",
            column=name,
            n_invalid=n_invalid,
        )
