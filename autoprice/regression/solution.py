"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from autoprice.core.result import Result

if TYPE_CHECKING:
    from autoprice.regression.design import Design


def _read_only(arr: NDArray) -> NDArray:
    arr.setflags(write=False)
    return arr


def _significance_stars(p: float) -> str:
    """Return significance stars like R."""
    if np.isnan(p):
        return ' '
    if p < 0.001:
        return '***'
    elif p < 0.01:
        return '**'
    elif p < 0.05:
        return '*'
    elif p < 0.1:
        return '.'
    else:
        return ' '


def _format_pvalue(p: float) -> str:
    """Format p-value like R."""
    if np.isnan(p):
        return 'NA'
    if p < 2e-16:
        return '< 2e-16'
    if p < 1e-4:
        return f'{p:.2e}'
    return f'{p:.4f}'


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends; every array is
    made read-only on construction.

    unscaled_covariance is (X'X)⁻¹ (or its pseudo-inverse), so that
    Var(β) = σ² * unscaled_covariance.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rank: int
    df_residual: int
    leverage: NDArray[np.floating[Any]]
    unscaled_covariance: NDArray[np.floating[Any]]

    def __post_init__(self) -> None:
        for arr in (self.coefficients, self.residuals, self.fitted_values,
                    self.leverage, self.unscaled_covariance):
            arr.setflags(write=False)


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors
    for all regression outputs including standard errors, t-statistics,
    p-values and per-observation diagnostics.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    # Cached computations
    _standard_errors: NDArray[np.floating[Any]] | None = None
    _t_statistics: NDArray[np.floating[Any]] | None = None
    _p_values: NDArray[np.floating[Any]] | None = None

    @property
    def design(self) -> 'Design':
        return self._design

    @property
    def names(self) -> tuple[str, ...]:
        return self._design.names

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def p(self) -> int:
        """Number of coefficients, intercept included."""
        return self._design.p

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    def coef(self, name: str) -> float:
        """Coefficient estimate by name."""
        try:
            j = self.names.index(name)
        except ValueError:
            raise KeyError(f"No coefficient {name!r}. Available: {list(self.names)}") from None
        return float(self.coefficients[j])

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        """Total sum of squares; uncentered when the model has no intercept."""
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def adjusted_r_squared(self) -> float:
        """1 - (1 - R²)(n - 1)/df_residual, with n in place of n - 1 without intercept."""
        df = self.df_residual
        if df <= 0 or self.tss == 0:
            return self.r_squared
        n_total = self.n - (1 if self._design.has_intercept else 0)
        return 1.0 - (1.0 - self.r_squared) * n_total / df

    @property
    def sigma_squared(self) -> float:
        """Residual variance estimate RSS/df_residual (NaN if df_residual is 0)."""
        df = self.df_residual
        if df <= 0:
            return float('nan')
        return self.rss / df

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.sigma_squared))

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        Standard errors of coefficients.

        Computed as SE(β) = sqrt(diag(σ² (X'X)⁻¹)).
        """
        if self._standard_errors is not None:
            return self._standard_errors

        p = len(self.coefficients)
        if self.df_residual <= 0:
            self._standard_errors = _read_only(np.full(p, np.nan, dtype=np.float64))
            return self._standard_errors

        diag = np.diag(self._result.params.unscaled_covariance)
        with np.errstate(invalid='ignore'):
            self._standard_errors = _read_only(np.sqrt(self.sigma_squared * diag))
        return self._standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics for coefficients."""
        if self._t_statistics is not None:
            return self._t_statistics

        se = self.standard_errors
        with np.errstate(divide='ignore', invalid='ignore'):
            t = self.coefficients / se
            t = np.where(np.isfinite(t), t, np.nan)
        self._t_statistics = _read_only(t)
        return self._t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values from Student's t on df_residual degrees of freedom."""
        if self._p_values is not None:
            return self._p_values

        t = self.t_statistics
        if self.df_residual <= 0:
            self._p_values = _read_only(np.full(len(t), np.nan, dtype=np.float64))
        else:
            self._p_values = _read_only(2.0 * stats.t.sf(np.abs(t), self.df_residual))
        return self._p_values

    @property
    def df_model(self) -> int:
        """Degrees of freedom of the regression (rank minus intercept)."""
        return self.rank - (1 if self._design.has_intercept else 0)

    @property
    def f_statistic(self) -> float:
        """Overall F statistic against the intercept-only model."""
        df1, df2 = self.df_model, self.df_residual
        if df1 <= 0 or df2 <= 0 or self.rss == 0:
            return float('nan')
        return ((self.tss - self.rss) / df1) / (self.rss / df2)

    @property
    def f_p_value(self) -> float:
        f = self.f_statistic
        if np.isnan(f):
            return float('nan')
        return float(stats.f.sf(f, self.df_model, self.df_residual))

    # === Per-observation diagnostics ===

    @property
    def leverage(self) -> NDArray[np.floating[Any]]:
        """Diagonal of the hat matrix."""
        return self._result.params.leverage

    @property
    def standardized_residuals(self) -> NDArray[np.floating[Any]]:
        """Internally studentized residuals e / (σ sqrt(1 - h)), like R's rstandard()."""
        one_minus_h = 1.0 - self.leverage
        with np.errstate(divide='ignore', invalid='ignore'):
            r = self.residuals / (self.residual_std_error * np.sqrt(one_minus_h))
        return np.where(one_minus_h > 1e-10, r, np.nan)

    @property
    def cooks_distance(self) -> NDArray[np.floating[Any]]:
        """Cook's distance r² h / (rank (1 - h))."""
        h = self.leverage
        r = self.standardized_residuals
        with np.errstate(divide='ignore', invalid='ignore'):
            return r ** 2 * h / (self.rank * (1.0 - h))

    # === Metadata ===

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate R-style summary output."""
        q = np.quantile(self.residuals, [0.0, 0.25, 0.5, 0.75, 1.0])
        width = max(12, max(len(name) for name in self.names))
        lines = [
            "Call:",
            f"lm(formula = {self._design.formula()})",
            "",
            "Residuals:",
            f"{'Min':>10} {'1Q':>10} {'Median':>10} {'3Q':>10} {'Max':>10}",
            " ".join(f"{v:10.5f}" for v in q),
            "",
            "Coefficients:",
            f"{'':<{width}} {'Estimate':>12} {'Std. Error':>12} {'t value':>9} {'Pr(>|t|)':>10}",
        ]

        for name, coef, se, t, pv in zip(
            self.names, self.coefficients, self.standard_errors,
            self.t_statistics, self.p_values,
        ):
            se_str = f"{se:12.4e}" if not np.isnan(se) else f"{'NA':>12}"
            t_str = f"{t:9.3f}" if not np.isnan(t) else f"{'NA':>9}"
            lines.append(
                f"{name:<{width}} {coef:12.4e} {se_str} {t_str} "
                f"{_format_pvalue(pv):>10} {_significance_stars(pv)}"
            )

        lines.extend([
            "---",
            "Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1",
            "",
            f"Residual standard error: {self.residual_std_error:.4g} on "
            f"{self.df_residual} degrees of freedom",
            f"Multiple R-squared: {self.r_squared:.4f},\t"
            f"Adjusted R-squared: {self.adjusted_r_squared:.4f}",
        ])
        if not np.isnan(self.f_statistic):
            lines.append(
                f"F-statistic: {self.f_statistic:.4g} on {self.df_model} and "
                f"{self.df_residual} DF,  p-value: {_format_pvalue(self.f_p_value)}"
            )
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append(f"Backend: {self.backend_name}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n}, p={self.p}, "
            f"rank={self.rank}, r_squared={self.r_squared:.4f})"
        )
