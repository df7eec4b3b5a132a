"""
Generic result container for autoprice computations.

The Result class provides a standardized envelope that every fitted
computation uses. This enables shared tooling for timing, warnings and
reporting while allowing each backend to define its own parameter payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, pivot)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

import warnings
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Parameters (coefficients, residuals, etc.)
        info: Structured metadata (method, rank, pivot)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LinearParams(...),
        ...     info={'method': 'qr', 'rank': 5},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_qr'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def emit_warnings(self, stacklevel: int = 3) -> None:
        """Re-raise every recorded warning as a UserWarning."""
        for message in self.warnings:
            warnings.warn(
                f"[{self.backend_name}] {message}",
                UserWarning,
                stacklevel=stacklevel,
            )
