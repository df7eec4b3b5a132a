"""
CPU backends for linear regression.

CPUQRBackend is the reference implementation: pivoted QR via LAPACK,
rank deficiency rejected with SingularMatrixError, matching R's lm() on
full-rank designs. CPUSVDBackend implements the pseudo-inverse policy:
it returns the minimum-norm solution for rank-deficient designs and
records a warning instead of failing.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from autoprice.core.result import Result
from autoprice.core.compute.timing import Timer
from autoprice.core.compute.linalg.qr import hat_diagonal, qr_cpu, qr_solve_cpu
from autoprice.core.compute.linalg.svd import svd_cpu, svd_pinv_gram, svd_solve_cpu
from autoprice.regression.design import Design
from autoprice.regression.solution import LinearParams


def _sums_of_squares(
    y: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    has_intercept: bool,
) -> tuple[float, float]:
    """RSS and TSS; TSS is uncentered for models without intercept."""
    rss = float(residuals @ residuals)
    if has_intercept:
        tss = float(np.sum((y - np.mean(y)) ** 2))
    else:
        tss = float(y @ y)
    return rss, tss


class CPUQRBackend:
    """
    CPU backend using QR decomposition with column pivoting.

    Solves design -> Result[LinearParams]. Stateless.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve OLS via pivoted QR decomposition.

        Algorithm:
            1. Compute X[:, pivot] = QR
            2. Reject if numerical rank < p
            3. Solve β = R⁻¹ Q'y, un-pivot
            4. (X'X)⁻¹ = R⁻¹R⁻ᵀ, un-pivoted; leverage from Q

        Raises:
            SingularMatrixError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = design.n, design.p

        with timer.section('qr_decomposition'):
            qr_result = qr_cpu(X)

        with timer.section('solve'):
            coefficients = qr_solve_cpu(X, y, qr_result)

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss, tss = _sums_of_squares(y, residuals, design.has_intercept)
            R_inv = sp_linalg.solve_triangular(qr_result.R[:p, :p], np.eye(p), lower=False)
            cov_pivoted = R_inv @ R_inv.T
            unscaled_cov = np.empty((p, p), dtype=np.float64)
            piv = qr_result.pivot
            unscaled_cov[np.ix_(piv, piv)] = cov_pivoted
            leverage = hat_diagonal(qr_result.Q, qr_result.rank)

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            rank=qr_result.rank,
            df_residual=n - qr_result.rank,
            leverage=leverage,
            unscaled_covariance=unscaled_cov,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'pivot': qr_result.pivot.tolist(),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUSVDBackend:
    """
    CPU backend using the singular value decomposition.

    Accepts rank-deficient designs: coefficients are the minimum-norm
    least squares solution and standard errors use the pseudo-inverse
    of X'X. Those coefficients are not uniquely identified, which is
    recorded in Result.warnings.
    """

    def __init__(self, rcond: float | None = None):
        self._rcond = rcond

    @property
    def name(self) -> str:
        return 'cpu_svd'

    def solve(self, design: Design) -> Result[LinearParams]:
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = design.n, design.p

        with timer.section('svd'):
            svd_result = svd_cpu(X, rcond=self._rcond)

        with timer.section('solve'):
            coefficients = svd_solve_cpu(y, svd_result)

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss, tss = _sums_of_squares(y, residuals, design.has_intercept)
            unscaled_cov = svd_pinv_gram(svd_result)
            leverage = hat_diagonal(svd_result.U, svd_result.rank)

        timer.stop()

        warnings: tuple[str, ...] = ()
        if svd_result.rank < p:
            warnings = (
                f"design matrix is rank-deficient (rank={svd_result.rank}, "
                f"expected={p}); returned the minimum-norm solution, "
                f"coefficients are not uniquely identified",
            )

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            rank=svd_result.rank,
            df_residual=n - svd_result.rank,
            leverage=leverage,
            unscaled_covariance=unscaled_cov,
        )

        info: dict[str, Any] = {
            'method': 'svd',
            'rank': svd_result.rank,
            'singular_values': svd_result.s.tolist(),
            'condition_number': svd_result.condition_number,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings,
        )
