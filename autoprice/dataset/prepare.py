"""
Data preparation: outlier filter and log transform.

Both steps are pure functions AutoDataset -> AutoDataset. The price
threshold is a configuration value; no row identities are hard-coded.
"""

from __future__ import annotations

import logging
import numpy as np

from autoprice.core.exceptions import ValidationError
from autoprice.core.validation import check_positive
from autoprice.dataset.datasource import AutoDataset

logger = logging.getLogger(__name__)

DEFAULT_PRICE_THRESHOLD = 70000.0


def find_price_outliers(
    dataset: AutoDataset,
    threshold: float = DEFAULT_PRICE_THRESHOLD,
    *,
    column: str = 'price',
) -> AutoDataset:
    """Rows the outlier filter would drop (price >= threshold)."""
    return dataset.select(dataset[column] >= threshold)


def filter_price_outliers(
    dataset: AutoDataset,
    threshold: float = DEFAULT_PRICE_THRESHOLD,
    *,
    column: str = 'price',
) -> AutoDataset:
    """
    Drop rows whose price is at or above the threshold.

    Args:
        dataset: Input rows
        threshold: Rows with price >= threshold are excluded
        column: Price column name

    Returns:
        New dataset holding only rows with price < threshold

    Raises:
        ValidationError: If no row survives the filter
    """
    keep = dataset[column] < threshold
    n_kept = int(np.sum(keep))
    if n_kept == 0:
        raise ValidationError(
            f"Price filter at {threshold:g} removes all {dataset.n_observations} rows"
        )
    logger.info(
        "Price filter < %g kept %d of %d rows",
        threshold, n_kept, dataset.n_observations,
    )
    return dataset.select(keep)


def log_transform_price(
    dataset: AutoDataset,
    *,
    source: str = 'price',
    target: str = 'log_price',
) -> AutoDataset:
    """
    Add the natural log of price as a new column.

    The raw column stays in place so the raw-price distribution can
    still be reported.

    Raises:
        DomainError: If any price is <= 0
    """
    values = dataset[source]
    check_positive(values, source)
    return dataset.with_column(target, np.log(values))
