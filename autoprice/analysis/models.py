"""
The fixed set of models compared in the analysis.

Model choice is manual: three candidate specifications, a full reference
model for Cp, and the added-variable checks used to justify luxury and
hybrid in the recommended model.
"""

from __future__ import annotations

from dataclasses import dataclass

from autoprice.dataset.schema import PREDICTOR_NAMES

RESPONSE = 'log_price'


@dataclass(frozen=True)
class ModelSpec:
    """Named predictor list for log_price ~ predictors (with intercept)."""
    name: str
    label: str
    predictors: tuple[str, ...]
    response: str = RESPONSE


CANDIDATE_MODELS: tuple[ModelSpec, ...] = (
    ModelSpec(
        'model1',
        'Vehicle size: length + curb weight',
        ('length', 'curb_weight'),
    ),
    ModelSpec(
        'model2',
        'Power, weight, rear-wheel drive, luxury, hybrid',
        ('hp', 'curb_weight', 'rear', 'luxury', 'hybrid'),
    ),
    ModelSpec(
        'model3',
        'Power, weight, fuel economy, 7+ speed transmission',
        ('hp', 'curb_weight', 'mpg', 'seven_over'),
    ),
)

FULL_MODEL = ModelSpec('full', 'All fifteen predictors', PREDICTOR_NAMES)

# Cp values as printed in the written report, shown beside the computed ones
REPORTED_CP: dict[str, float] = {
    'model1': 120.71,
    'model2': 45.71,
    'model3': 84.59,
}


@dataclass(frozen=True)
class AddedVariableSpec:
    predictor: str
    controls: tuple[str, ...]


ADDED_VARIABLE_SPECS: tuple[AddedVariableSpec, ...] = (
    AddedVariableSpec('luxury', ('hp', 'curb_weight')),
    AddedVariableSpec('hybrid', ('hp', 'curb_weight', 'rear', 'luxury')),
)

SCATTER_MATRIX_COLUMNS: tuple[str, ...] = (RESPONSE,) + PREDICTOR_NAMES


def get_model(name: str) -> ModelSpec:
    """Look up a candidate model by name."""
    for spec in CANDIDATE_MODELS:
        if spec.name == name:
            return spec
    raise KeyError(
        f"No candidate model {name!r}. Available: {[s.name for s in CANDIDATE_MODELS]}"
    )
