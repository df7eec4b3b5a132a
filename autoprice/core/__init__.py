"""
Core infrastructure for autoprice.

Shared abstractions used by every subpackage (dataset, descriptive,
regression, analysis).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and linear algebra kernels
"""

from autoprice.core.result import Result
from autoprice.core.exceptions import (
    AutoPriceError,
    ValidationError,
    DimensionError,
    ColumnNotFoundError,
    DomainError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "AutoPriceError",
    "ValidationError",
    "DimensionError",
    "ColumnNotFoundError",
    "DomainError",
    "NumericalError",
    "SingularMatrixError",
]
