"""
Shared compute infrastructure for autoprice.

Timing utilities and linear algebra kernels used by the regression
backends. Domain backends live in {domain}/backends/, not here.

Submodules:
    timing: Execution timing utilities
    linalg: Linear algebra kernels (QR, SVD)
"""

from autoprice.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
