"""
Model comparison: Mallows' Cp and a comparison table.

Only compares models the caller has already chosen. There is no search
over predictor subsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from autoprice.core.exceptions import DimensionError, NumericalError
from autoprice.regression.solution import LinearSolution

Criterion = Literal['adjusted_r_squared', 'cp']


def mallows_cp(candidate: LinearSolution, full: LinearSolution) -> float:
    """
    Mallows' Cp = RSS_p / σ²_full - n + 2p.

    p counts the candidate's coefficients, intercept included; σ²_full
    is the residual variance of the full reference model fit on the same
    rows. For the full model itself Cp equals p.

    Raises:
        DimensionError: If the two fits use different numbers of rows
        NumericalError: If the full model leaves no residual variance to
            estimate σ² from
    """
    if candidate.n != full.n:
        raise DimensionError(
            f"Inconsistent lengths: candidate n={candidate.n}, full n={full.n}"
        )
    sigma_sq = full.sigma_squared
    if not sigma_sq > 0:
        raise NumericalError(
            f"Full model residual variance is {sigma_sq}; Cp is undefined"
        )
    return candidate.rss / sigma_sq - candidate.n + 2 * candidate.rank


@dataclass(frozen=True)
class ComparisonRow:
    name: str
    formula: str
    n_params: int
    r_squared: float
    adjusted_r_squared: float
    cp: float


@dataclass(frozen=True)
class ModelComparison:
    """Comparison table of candidate models against a full reference model."""
    rows: tuple[ComparisonRow, ...]
    full_formula: str

    def __getitem__(self, name: str) -> ComparisonRow:
        for row in self.rows:
            if row.name == name:
                return row
        raise KeyError(f"No model {name!r}. Available: {[r.name for r in self.rows]}")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(row.name for row in self.rows)

    def best_by(self, criterion: Criterion = 'adjusted_r_squared') -> ComparisonRow:
        """Highest adjusted R², or lowest Cp."""
        if criterion == 'adjusted_r_squared':
            return max(self.rows, key=lambda r: r.adjusted_r_squared)
        elif criterion == 'cp':
            return min(self.rows, key=lambda r: r.cp)
        raise ValueError(f"Unknown criterion: {criterion!r}")

    def format(self) -> str:
        """Fixed-width text table."""
        width = max(8, max(len(r.name) for r in self.rows))
        lines = [
            f"{'Model':<{width}} {'p':>3} {'R-squared':>10} {'Adj. R-sq':>10} {'Cp':>10}",
            "-" * (width + 37),
        ]
        for r in self.rows:
            lines.append(
                f"{r.name:<{width}} {r.n_params:>3d} {r.r_squared:10.4f} "
                f"{r.adjusted_r_squared:10.4f} {r.cp:10.2f}"
            )
        lines.append(f"Cp reference model: {self.full_formula}")
        return "\n".join(lines)


def compare_models(
    models: Mapping[str, LinearSolution],
    full: LinearSolution,
) -> ModelComparison:
    """Tabulate R², adjusted R² and Cp for each named model."""
    if not models:
        raise ValueError("compare_models() needs at least one model")
    rows = tuple(
        ComparisonRow(
            name=name,
            formula=solution.design.formula(),
            n_params=solution.rank,
            r_squared=solution.r_squared,
            adjusted_r_squared=solution.adjusted_r_squared,
            cp=mallows_cp(solution, full),
        )
        for name, solution in models.items()
    )
    return ModelComparison(rows=rows, full_formula=full.design.formula())
