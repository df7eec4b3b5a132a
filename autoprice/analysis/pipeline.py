"""
The analysis pipeline: load -> clean -> transform -> fit -> diagnose.

Each stage is a pure function taking and returning immutable values;
run_analysis() chains them and bundles everything the report and the
plots need into one AnalysisResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from autoprice.analysis.config import AnalysisConfig
from autoprice.analysis.models import (
    ADDED_VARIABLE_SPECS,
    CANDIDATE_MODELS,
    FULL_MODEL,
    RESPONSE,
    SCATTER_MATRIX_COLUMNS,
    ModelSpec,
    get_model,
)
from autoprice.dataset.datasource import AutoDataset
from autoprice.dataset.prepare import (
    filter_price_outliers,
    find_price_outliers,
    log_transform_price,
)
from autoprice.descriptive.solvers import SixNumberSummary, cor, summary
from autoprice.regression.diagnostics import (
    AddedVariable,
    Influence,
    QQPoints,
    ResidualBins,
    added_variable,
    bin_residuals,
    influential_observations,
    qq_points,
)
from autoprice.regression.selection import ModelComparison, compare_models
from autoprice.regression.solution import LinearSolution
from autoprice.regression.solvers import BackendChoice, fit_dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Diagnostics:
    """Diagnostics of the recommended model."""
    qq: QQPoints
    residual_bins: ResidualBins
    added_variables: tuple[AddedVariable, ...]
    influential: tuple[Influence, ...]


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    """Everything one run produced. Read-only."""
    config: AnalysisConfig
    raw: AutoDataset
    clean: AutoDataset
    outliers: AutoDataset
    raw_price_summary: SixNumberSummary
    log_price_summary: SixNumberSummary
    correlations: NDArray[np.floating[Any]]  # over SCATTER_MATRIX_COLUMNS
    models: Mapping[str, LinearSolution]
    full_model: LinearSolution
    comparison: ModelComparison
    diagnostics: Diagnostics

    @property
    def recommended_spec(self) -> ModelSpec:
        return get_model(self.config.recommended)

    @property
    def recommended(self) -> LinearSolution:
        return self.models[self.config.recommended]


def load(config: AnalysisConfig) -> AutoDataset:
    """Read and schema-validate the input file."""
    logger.info("Loading %s", config.data_path)
    dataset = AutoDataset.from_file(config.data_path)
    logger.debug("Loaded %d rows", dataset.n_observations)
    return dataset


def clean(raw: AutoDataset, config: AnalysisConfig) -> tuple[AutoDataset, AutoDataset]:
    """Split raw rows into (kept, dropped) at the price threshold."""
    outliers = find_price_outliers(raw, config.price_threshold)
    for label, price in zip(outliers.labels, outliers['price']):
        logger.debug("Dropping %s (price %.0f)", label, price)
    return filter_price_outliers(raw, config.price_threshold), outliers


def transform(dataset: AutoDataset) -> AutoDataset:
    """Add log(price) as the response column."""
    return log_transform_price(dataset, target=RESPONSE)


def fit_models(
    dataset: AutoDataset,
    specs: Sequence[ModelSpec],
    backend: BackendChoice = 'auto',
) -> dict[str, LinearSolution]:
    """Fit each model spec on the same rows; insertion order follows specs."""
    fitted: dict[str, LinearSolution] = {}
    for spec in specs:
        solution = fit_dataset(
            dataset, spec.predictors, response=spec.response, backend=backend,
        )
        logger.info(
            "Fitted %s: %s (adj. R² %.4f)",
            spec.name, solution.design.formula(), solution.adjusted_r_squared,
        )
        fitted[spec.name] = solution
    return fitted


def diagnose(
    dataset: AutoDataset,
    solution: LinearSolution,
    config: AnalysisConfig,
) -> Diagnostics:
    """Q-Q coordinates, binned residuals, added-variable checks, influence."""
    added = tuple(
        added_variable(
            dataset, spec.predictor, spec.controls,
            response=RESPONSE, backend=config.backend,
        )
        for spec in ADDED_VARIABLE_SPECS
    )
    return Diagnostics(
        qq=qq_points(solution.standardized_residuals),
        residual_bins=bin_residuals(
            solution.fitted_values, solution.residuals, config.fitted_bins,
        ),
        added_variables=added,
        influential=influential_observations(solution),
    )


def run_analysis(config: AnalysisConfig) -> AnalysisResult:
    """
    Run the full analysis.

    Raises:
        OSError: If the input file cannot be read
        ColumnNotFoundError: If the input lacks a schema column
        ValidationError: If the input has invalid values
        DomainError: If a remaining price is <= 0
        SingularMatrixError: If a model's design is collinear (QR backend)
    """
    raw = load(config)
    kept, outliers = clean(raw, config)
    prepared = transform(kept)

    models = fit_models(prepared, CANDIDATE_MODELS, config.backend)
    full = fit_models(prepared, (FULL_MODEL,), config.backend)[FULL_MODEL.name]
    comparison = compare_models(models, full)

    return AnalysisResult(
        config=config,
        raw=raw,
        clean=prepared,
        outliers=outliers,
        raw_price_summary=summary(raw['price']),
        log_price_summary=summary(prepared[RESPONSE]),
        correlations=cor(prepared, SCATTER_MATRIX_COLUMNS),
        models=models,
        full_model=full,
        comparison=comparison,
        diagnostics=diagnose(prepared, models[config.recommended], config),
    )
