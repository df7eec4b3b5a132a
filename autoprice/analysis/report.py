"""
Plain-text report of an analysis run.
"""

from __future__ import annotations

import numpy as np

from autoprice.analysis.models import CANDIDATE_MODELS, REPORTED_CP, SCATTER_MATRIX_COLUMNS
from autoprice.analysis.pipeline import AnalysisResult
from autoprice.regression.design import INTERCEPT_NAME
from autoprice.regression.solution import LinearSolution

_OUTLIER_COLUMNS = ('price', 'hp', 'luxury', 'hybrid', 'rear')


def _heading(title: str) -> str:
    return f"\n=== {title} ==="


def format_equation(solution: LinearSolution, digits: int = 4) -> str:
    """'log_price = 9.1 + 0.0022*hp + ...' with fitted coefficients."""
    terms = []
    for name, coef in zip(solution.names, solution.coefficients):
        if name == INTERCEPT_NAME:
            terms.insert(0, f"{coef:.{digits}g}")
        else:
            sign = '-' if coef < 0 else '+'
            terms.append(f"{sign} {abs(coef):.{digits}g}*{name}")
    rhs = " ".join(terms).lstrip('+ ')
    return f"{solution.design.response} = {rhs}"


def format_outliers(result: AnalysisResult) -> str:
    outliers = result.outliers
    if outliers.n_observations == 0:
        return "None"
    width = max(5, max(len(label) for label in outliers.labels))
    lines = [f"{'Model':<{width}} " + " ".join(f"{c:>9}" for c in _OUTLIER_COLUMNS)]
    for i, label in enumerate(outliers.labels):
        values = " ".join(f"{outliers[c][i]:>9.0f}" for c in _OUTLIER_COLUMNS)
        lines.append(f"{label:<{width}} {values}")
    return "\n".join(lines)


def format_correlations(result: AnalysisResult) -> str:
    """Correlation of log(price) with each predictor, strongest first."""
    response_row = result.correlations[0]
    pairs = list(zip(SCATTER_MATRIX_COLUMNS[1:], response_row[1:]))
    pairs.sort(key=lambda pair: -np.nan_to_num(abs(pair[1]), nan=-1.0))
    return "\n".join(f"  {name:<14} {r:7.3f}" for name, r in pairs)


def format_comparison(result: AnalysisResult) -> str:
    lines = [
        f"{'Model':<8} {'p':>3} {'Adj. R-sq':>10} {'Cp':>10} {'Cp (report)':>12}  Formula",
    ]
    for row in result.comparison.rows:
        reported = REPORTED_CP.get(row.name)
        reported_str = f"{reported:12.2f}" if reported is not None else f"{'':>12}"
        marker = '  (recommended)' if row.name == result.config.recommended else ''
        lines.append(
            f"{row.name:<8} {row.n_params:>3d} {row.adjusted_r_squared:10.4f} "
            f"{row.cp:10.2f} {reported_str}  {row.formula}{marker}"
        )
    lines.append(f"Cp reference model: {result.comparison.full_formula}")
    return "\n".join(lines)


def format_diagnostics(result: AnalysisResult) -> str:
    diag = result.diagnostics
    lines = ["Added-variable checks (slope = coefficient given the controls):"]
    for av in diag.added_variables:
        lines.append(
            f"  {av.predictor} | {' + '.join(av.controls)}: slope {av.slope:.4g}"
        )

    lines.append("Residuals by fitted-value bin:")
    for label, group in zip(diag.residual_bins.labels, diag.residual_bins.groups):
        median = f"{np.median(group):9.4f}" if len(group) else f"{'-':>9}"
        lines.append(f"  {label:<20} n={len(group):<4d} median {median}")

    lines.append(f"Influential observations (Cook's distance > 4/n), {len(diag.influential)} found:")
    for obs in diag.influential:
        lines.append(
            f"  {obs.label}: D={obs.cooks_distance:.3f}, "
            f"h={obs.leverage:.3f}, r={obs.standardized_residual:.2f}"
        )
    return "\n".join(lines)


def format_report(result: AnalysisResult) -> str:
    """Render the full textual summary of a run."""
    config = result.config
    parts = [
        _heading("PRICE DISTRIBUTION"),
        f"Price, all rows (n={result.raw_price_summary.n}):",
        result.raw_price_summary.format(),
        f"log(price), price < {config.price_threshold:g} (n={result.log_price_summary.n}):",
        result.log_price_summary.format(),
        _heading(f"PRICE OUTLIERS (price >= {config.price_threshold:g}, removed)"),
        format_outliers(result),
        _heading("CORRELATION WITH log(price)"),
        format_correlations(result),
    ]

    for spec in CANDIDATE_MODELS:
        solution = result.models[spec.name]
        parts.append(_heading(f"{spec.name.upper()}: {spec.label}"))
        parts.append(solution.summary())

    parts.append(_heading("MODEL COMPARISON"))
    parts.append(format_comparison(result))

    parts.append(_heading(f"DIAGNOSTICS ({config.recommended})"))
    parts.append(format_diagnostics(result))

    recommended = result.recommended
    parts.extend([
        _heading("FINAL RECOMMENDED MODEL"),
        f"{result.recommended_spec.name}: {result.recommended_spec.label}",
        format_equation(recommended),
        "",
        f"Model explains {recommended.adjusted_r_squared * 100:.2f}% of the "
        f"variance in log(price) (adjusted R-squared).",
    ])

    return "\n".join(parts).lstrip("\n")
