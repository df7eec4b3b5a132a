"""
Singular value decomposition kernels.

Backs the pseudo-inverse regression backend: the minimum-norm least
squares solution is well defined even when X is rank-deficient.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class SVDResult:
    """
    Thin SVD X = U diag(s) Vt with numerical rank.

    Attributes:
        U: Left singular vectors (n x k)
        s: Singular values, descending (k,)
        Vt: Right singular vectors, transposed (k x p)
        rank: Number of singular values above the cutoff
    """
    U: NDArray[np.floating[Any]]
    s: NDArray[np.floating[Any]]
    Vt: NDArray[np.floating[Any]]
    rank: int

    @property
    def condition_number(self) -> float:
        if self.rank == 0 or self.s[-1] == 0:
            return float('inf')
        return float(self.s[0] / self.s[-1])


def svd_cpu(X: NDArray[np.floating[Any]], rcond: float | None = None) -> SVDResult:
    """
    Thin SVD with a rank cutoff.

    Args:
        X: Matrix to decompose (n x p)
        rcond: Relative cutoff on singular values. Defaults to
            max(n, p) * machine epsilon, the np.linalg.lstsq convention.
    """
    U, s, Vt = np.linalg.svd(X, full_matrices=False)
    if rcond is None:
        rcond = max(X.shape) * np.finfo(X.dtype).eps
    rank = int(np.sum(s > rcond * s[0])) if len(s) and s[0] > 0 else 0
    return SVDResult(U=U, s=s, Vt=Vt, rank=rank)


def svd_solve_cpu(
    y: NDArray[np.floating[Any]],
    svd_result: SVDResult,
) -> NDArray[np.floating[Any]]:
    """Minimum-norm least squares solution β = V S⁺ U'y."""
    r = svd_result.rank
    Uty = svd_result.U[:, :r].T @ y
    return svd_result.Vt[:r].T @ (Uty / svd_result.s[:r])


def svd_pinv_gram(svd_result: SVDResult) -> NDArray[np.floating[Any]]:
    """Moore-Penrose inverse of X'X, V S⁻² V'."""
    r = svd_result.rank
    V = svd_result.Vt[:r].T
    return (V / svd_result.s[:r] ** 2) @ V.T
