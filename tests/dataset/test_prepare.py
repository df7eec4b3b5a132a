"""
Tests for the outlier filter and log transform.
"""

import pytest
import numpy as np

from autoprice.core.exceptions import DomainError, ValidationError
from autoprice.dataset import (
    AutoDataset,
    filter_price_outliers,
    find_price_outliers,
    log_transform_price,
)


class TestOutlierFilter:

    def test_drops_planted_outliers(self, auto_dataset, planted_outlier_prices):
        clean = filter_price_outliers(auto_dataset, 70000)
        assert clean.n_observations == auto_dataset.n_observations - len(planted_outlier_prices)
        assert np.all(clean['price'] < 70000)

    def test_threshold_is_exclusive(self):
        ds = AutoDataset.from_columns(price=[69999.0, 70000.0, 70001.0])
        clean = filter_price_outliers(ds, 70000)
        np.testing.assert_array_equal(clean['price'], [69999.0])

    def test_find_is_complement(self, auto_dataset, planted_outlier_prices):
        outliers = find_price_outliers(auto_dataset, 70000)
        assert sorted(outliers['price']) == sorted(planted_outlier_prices)
        assert all(label.startswith("Outlier") for label in outliers.labels)

    def test_positional_labels_survive_selection(self, auto_frame):
        ds = AutoDataset.from_dataframe(auto_frame.drop(columns=['Model']))
        outliers = find_price_outliers(ds, 70000)
        assert outliers.labels == ('row 61', 'row 62', 'row 63')
        assert filter_price_outliers(ds, 70000).labels[-1] == 'row 60'

    def test_threshold_configurable(self, auto_dataset):
        strict = filter_price_outliers(auto_dataset, 90000)
        assert strict.n_observations == auto_dataset.n_observations - 2

    def test_input_untouched(self, auto_dataset):
        n = auto_dataset.n_observations
        filter_price_outliers(auto_dataset, 70000)
        assert auto_dataset.n_observations == n

    def test_everything_removed_raises(self):
        ds = AutoDataset.from_columns(price=[80000.0, 90000.0])
        with pytest.raises(ValidationError, match="removes all 2 rows"):
            filter_price_outliers(ds, 70000)


class TestLogTransform:

    def test_adds_log_price(self):
        ds = AutoDataset.from_columns(price=[1.0, np.e, 20000.0])
        out = log_transform_price(ds)
        np.testing.assert_allclose(out['log_price'], [0.0, 1.0, np.log(20000.0)])
        np.testing.assert_array_equal(out['price'], ds['price'])
        assert 'log_price' not in ds

    def test_non_positive_price_raises(self):
        ds = AutoDataset.from_columns(price=[20000.0, 0.0, -5.0])
        with pytest.raises(DomainError) as info:
            log_transform_price(ds)
        assert info.value.column == 'price'
        assert info.value.n_invalid == 2
