"""
Automobile dataset: schema, loading and preparation.

Public API:
    AutoDataset                 - immutable table of named columns
    AUTO_SCHEMA                 - attribute -> CSV header mapping
    filter_price_outliers(ds)   - drop rows at or above a price threshold
    find_price_outliers(ds)     - the rows that filter would drop
    log_transform_price(ds)     - add log(price) as 'log_price'
"""

from autoprice.dataset.schema import AUTO_SCHEMA, PREDICTOR_NAMES, Attribute, Schema
from autoprice.dataset.datasource import AutoDataset
from autoprice.dataset.prepare import (
    DEFAULT_PRICE_THRESHOLD,
    filter_price_outliers,
    find_price_outliers,
    log_transform_price,
)

__all__ = [
    "AUTO_SCHEMA",
    "PREDICTOR_NAMES",
    "Attribute",
    "Schema",
    "AutoDataset",
    "DEFAULT_PRICE_THRESHOLD",
    "filter_price_outliers",
    "find_price_outliers",
    "log_transform_price",
]
