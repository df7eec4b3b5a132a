"""
Linear algebra kernels for autoprice.

All functions follow these conventions:
    - CPU only, NumPy/SciPy (LAPACK under the hood)
    - Each decomposition returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    qr: Pivoted QR decomposition and least squares solve
    svd: Thin SVD, minimum-norm solve, pseudo-inverse of X'X
"""

from autoprice.core.compute.linalg.qr import (
    QR_RANK_TOL,
    QRResult,
    hat_diagonal,
    qr_cpu,
    qr_solve_cpu,
)
from autoprice.core.compute.linalg.svd import (
    SVDResult,
    svd_cpu,
    svd_pinv_gram,
    svd_solve_cpu,
)

__all__ = [
    # QR decomposition
    "QR_RANK_TOL",
    "QRResult",
    "hat_diagonal",
    "qr_cpu",
    "qr_solve_cpu",
    # SVD
    "SVDResult",
    "svd_cpu",
    "svd_pinv_gram",
    "svd_solve_cpu",
]
