"""
QR decomposition with column pivoting.

Provides the least squares kernel behind the default regression backend.
Column pivoting (LAPACK geqp3 via SciPy) makes the numerical rank
decision reliable, the same way R's lm() detects aliased columns.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from autoprice.core.exceptions import SingularMatrixError

# Relative tolerance on the pivoted R diagonal; lm() uses 1e-7
QR_RANK_TOL = 1e-7


@dataclass(frozen=True)
class QRResult:
    """
    Result of a pivoted QR decomposition X[:, pivot] = QR.

    Attributes:
        Q: Orthonormal columns (n x k where k = min(n, p))
        R: Upper triangular matrix (k x p)
        pivot: Column permutation applied to X
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    pivot: NDArray[np.intp]
    rank: int


def qr_cpu(X: NDArray[np.floating[Any]], tol: float = QR_RANK_TOL) -> QRResult:
    """
    Economy QR decomposition with column pivoting.

    Args:
        X: Matrix to decompose (n x p)
        tol: Columns whose |R_jj| falls below tol * |R_11| are aliased

    Returns:
        QRResult with Q, R, pivot and numerical rank
    """
    Q, R, pivot = sp_linalg.qr(X, mode='economic', pivoting=True)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R[0] > 0:
        rank = int(np.sum(diag_R > tol * diag_R[0]))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, pivot=pivot, rank=rank)


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    qr_result: QRResult | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares via pivoted QR decomposition.

    Solves min_β ||y - Xβ||² as
        X[:, pivot] = QR
        β[pivot] = R⁻¹ Q'y

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)
        qr_result: Precomputed decomposition of X, if available

    Returns:
        Coefficient vector β (p,) in the original column order

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    n, p = X.shape
    if qr_result is None:
        qr_result = qr_cpu(X)

    if qr_result.rank < p:
        aliased = sorted(int(j) for j in qr_result.pivot[qr_result.rank:])
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"Columns {aliased} are linear combinations of the others "
            f"(perfect multicollinearity).",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    Qty = qr_result.Q.T @ y
    solution = sp_linalg.solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)

    beta = np.empty(p, dtype=np.float64)
    beta[qr_result.pivot] = solution
    return beta


def hat_diagonal(Q: NDArray[np.floating[Any]], rank: int) -> NDArray[np.floating[Any]]:
    """Diagonal of the hat matrix from the first `rank` orthonormal columns."""
    return np.sum(Q[:, :rank] ** 2, axis=1)
