"""
Exception hierarchy for autoprice.

All exceptions inherit from AutoPriceError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class AutoPriceError(Exception):
    """Base exception for all autoprice errors."""
    pass


class ValidationError(AutoPriceError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class ColumnNotFoundError(ValidationError):
    """
    Required column(s) missing from the input table.

    Attributes:
        missing: Column headers that were expected but not found
        available: Column headers actually present
    """

    def __init__(
        self,
        message: str,
        missing: tuple[str, ...] = (),
        available: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.missing = missing
        self.available = available


class DomainError(ValidationError):
    """
    Values fall outside the domain of a transformation.

    Raised e.g. when taking the logarithm of a non-positive price.

    Attributes:
        column: Name of the offending column
        n_invalid: Number of values outside the domain
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        n_invalid: int | None = None,
    ):
        super().__init__(message)
        self.column = column
        self.n_invalid = n_invalid


class NumericalError(AutoPriceError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
