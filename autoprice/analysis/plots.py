"""
Diagnostic figures for an analysis run.

Each make_* function returns a matplotlib Figure; save_plots() renders
the fixed set to PNG files and closes every figure it opened.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from pandas.plotting import scatter_matrix

from autoprice.analysis.models import RESPONSE, SCATTER_MATRIX_COLUMNS
from autoprice.analysis.pipeline import AnalysisResult
from autoprice.regression.diagnostics import AddedVariable, QQPoints, ResidualBins

logger = logging.getLogger(__name__)


def make_price_histograms(result: AnalysisResult) -> Figure:
    """Histogram of raw price next to histogram of log(price)."""
    bins = result.config.histogram_bins
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(11, 4.5))
    ax1.hist(result.raw['price'], bins=bins, color='lightblue', edgecolor='black')
    ax1.set_title("Histogram of price")
    ax1.set_xlabel("price")
    ax1.set_ylabel("Frequency")
    ax2.hist(result.clean[RESPONSE], bins=bins, color='lightgreen', edgecolor='black')
    ax2.set_title("Histogram of log(price)")
    ax2.set_xlabel("log(price)")
    fig.tight_layout()
    return fig


def make_scatter_matrix(result: AnalysisResult) -> Figure:
    """Scatterplot matrix of log(price) and every predictor."""
    df = result.clean.to_dataframe(SCATTER_MATRIX_COLUMNS)
    n = len(SCATTER_MATRIX_COLUMNS)
    fig, axes = plt.subplots(n, n, figsize=(1.4 * n, 1.4 * n))
    scatter_matrix(df, ax=axes, s=4, alpha=0.6, diagonal='hist')
    for ax in axes.ravel():
        ax.xaxis.label.set_size(6)
        ax.yaxis.label.set_size(6)
        ax.tick_params(labelsize=4)
    fig.suptitle("Scatterplot matrix of key variables")
    return fig


def make_qq_plot(qq: QQPoints, title: str = "Normal Q-Q Plot of Standardized Residuals") -> Figure:
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.scatter(qq.theoretical, qq.sample, facecolors='none', edgecolors='black', s=18)
    x = np.array([qq.theoretical.min(), qq.theoretical.max()])
    ax.plot(x, qq.line_intercept + qq.line_slope * x, color='red')
    ax.set_title(title)
    ax.set_xlabel("Theoretical Quantiles")
    ax.set_ylabel("Sample Quantiles")
    fig.tight_layout()
    return fig


def make_residuals_vs_fitted(result: AnalysisResult) -> Figure:
    solution = result.recommended
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.scatter(solution.fitted_values, solution.residuals,
               facecolors='none', edgecolors='black', s=18)
    ax.axhline(0.0, color='red', linestyle='--')
    ax.set_title("Residuals vs Fitted Values")
    ax.set_xlabel("Fitted Values")
    ax.set_ylabel("Residuals")
    fig.tight_layout()
    return fig


def make_added_variable_plot(av: AddedVariable) -> Figure:
    controls = " + ".join(av.controls) or "intercept"
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.scatter(av.predictor_residuals, av.response_residuals,
               facecolors='none', edgecolors='black', s=18)
    x = np.array([av.predictor_residuals.min(), av.predictor_residuals.max()])
    ax.plot(x, av.slope * x, color='blue')
    ax.set_title(f"Adjusted plot of {av.predictor} and {av.response}")
    ax.set_xlabel(f"{av.predictor} adjusted for {controls}")
    ax.set_ylabel(f"{av.response} adjusted for {controls}")
    fig.tight_layout()
    return fig


def make_pickup_vs_weight(result: AnalysisResult) -> Figure:
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.scatter(result.clean['pickup'], result.clean['curb_weight'],
               facecolors='none', edgecolors='black', s=18)
    ax.set_title("Pickup vs. Weight")
    ax.set_xlabel("pickup (binary)")
    ax.set_ylabel("weight")
    fig.tight_layout()
    return fig


def make_residual_boxplot(bins: ResidualBins) -> Figure:
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.boxplot(list(bins.groups))
    ax.set_xticks(range(1, len(bins.labels) + 1), bins.labels, rotation=20)
    ax.set_title("Boxplot of Residuals vs. Fitted Values (outliers removed)")
    ax.set_xlabel("Fitted Values")
    ax.set_ylabel("Residuals")
    fig.tight_layout()
    return fig


def save_plots(result: AnalysisResult, output_dir: str | Path) -> list[Path]:
    """
    Write the fixed set of diagnostic figures as PNG files.

    Returns:
        Paths written, in a stable order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    diag = result.diagnostics

    figures: list[tuple[str, Figure]] = [
        ("price_histograms", make_price_histograms(result)),
        ("scatter_matrix", make_scatter_matrix(result)),
        ("qq_standardized_residuals", make_qq_plot(diag.qq)),
        ("residuals_vs_fitted", make_residuals_vs_fitted(result)),
    ]
    for av in diag.added_variables:
        figures.append((f"added_variable_{av.predictor}", make_added_variable_plot(av)))
    figures.append(("pickup_vs_weight", make_pickup_vs_weight(result)))
    figures.append(("residual_boxplot", make_residual_boxplot(diag.residual_bins)))

    paths = []
    for name, fig in figures:
        path = output_dir / f"{name}.png"
        try:
            fig.savefig(path, dpi=120)
        finally:
            plt.close(fig)
        logger.info("Wrote %s", path)
        paths.append(path)
    return paths
