"""
autoprice: OLS analysis of automobile prices.

Loads the Consumer Reports (April 2019) automobile table, filters price
outliers, fits candidate regressions of log(price) and reports the
recommended model with comparison statistics.

Submodules:
    core: Exceptions, result envelope, validation, linear algebra
    dataset: Schema, immutable dataset, preparation steps
    descriptive: Six-number summary, correlation
    regression: OLS fitter, diagnostics, model comparison
    analysis: Fixed pipeline, report, plots, command line
"""

__version__ = "0.1.0"

from autoprice import dataset
from autoprice import descriptive
from autoprice import regression
from autoprice.dataset import AutoDataset

__all__ = [
    "__version__",
    "AutoDataset",
    "dataset",
    "descriptive",
    "regression",
]
