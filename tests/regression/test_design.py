"""
Tests for regression Design construction.
"""

import pytest
import numpy as np

from autoprice.core.exceptions import ColumnNotFoundError, ValidationError
from autoprice.dataset import AutoDataset
from autoprice.regression import INTERCEPT_NAME, Design


@pytest.fixture
def small_dataset():
    return AutoDataset.from_columns(
        hp=[150.0, 200.0, 250.0, 300.0, 180.0],
        rear=[0, 1, 1, 0, 1],
        log_price=[10.0, 10.4, 10.7, 10.9, 10.3],
    )


class TestFromDataset:

    def test_intercept_prepended(self, small_dataset):
        design = Design.from_dataset(small_dataset, x=['hp', 'rear'])
        assert design.names == (INTERCEPT_NAME, 'hp', 'rear')
        assert design.p == 3
        assert design.n == 5
        np.testing.assert_array_equal(design.X[:, 0], 1.0)
        np.testing.assert_array_equal(design.X[:, 2], small_dataset['rear'])
        assert design.has_intercept
        assert design.source is small_dataset

    def test_no_intercept(self, small_dataset):
        design = Design.from_dataset(small_dataset, x=['hp'], intercept=False)
        assert design.names == ('hp',)
        assert not design.has_intercept
        assert design.formula() == 'log_price ~ hp - 1'

    def test_single_name_string(self, small_dataset):
        design = Design.from_dataset(small_dataset, x='hp')
        assert design.predictors == ('hp',)

    def test_intercept_only_formula(self, small_dataset):
        design = Design.from_dataset(small_dataset, x=[])
        assert design.formula() == 'log_price ~ 1'

    def test_formula(self, small_dataset):
        design = Design.from_dataset(small_dataset, x=['hp', 'rear'])
        assert design.formula() == 'log_price ~ hp + rear'

    def test_missing_predictor(self, small_dataset):
        with pytest.raises(ColumnNotFoundError):
            Design.from_dataset(small_dataset, x=['hp', 'luxury'])

    def test_too_many_columns(self, small_dataset):
        ds = small_dataset.with_column('a', [1.0, 2.0, 4.0, 8.0, 16.0])
        ds = ds.with_column('b', [3.0, 1.0, 4.0, 1.0, 5.0])
        ds = ds.with_column('c', [2.0, 7.0, 1.0, 8.0, 2.0])
        with pytest.raises(ValidationError, match="n=5, p=5"):
            Design.from_dataset(ds, x=['hp', 'a', 'b', 'c'])


class TestFromArrays:

    def test_intercept_detected(self):
        X = np.column_stack([np.ones(4), [1.0, 2.0, 3.0, 5.0]])
        design = Design.from_arrays(X, [1.0, 2.0, 3.0, 4.0])
        assert design.has_intercept
        assert design.names == (INTERCEPT_NAME, 'x1')

    def test_one_dimensional_x(self):
        design = Design.from_arrays([1.0, 2.0, 3.0], [2.0, 4.0, 6.5])
        assert design.X.shape == (3, 1)
        assert not design.has_intercept

    def test_names_without_intercept_start_at_one(self):
        X = np.column_stack([[1.0, 2.0, 3.0, 5.0], [0.0, 1.0, 0.0, 1.0]])
        design = Design.from_arrays(X, [1.0, 2.0, 3.0, 4.0])
        assert design.names == ('x1', 'x2')

    def test_names_skip_intercept_position(self):
        X = np.column_stack([[1.0, 2.0, 3.0, 5.0], np.ones(4), [0.0, 1.0, 0.0, 1.0]])
        design = Design.from_arrays(X, [1.0, 2.0, 3.0, 4.0])
        assert design.names == ('x1', INTERCEPT_NAME, 'x2')

    def test_caller_arrays_copied(self):
        X = np.column_stack([np.ones(4), [1.0, 2.0, 3.0, 5.0]])
        y = np.array([1.0, 2.0, 3.0, 4.0])
        design = Design.from_arrays(X, y)
        y[0] = -1000.0
        X[0, 1] = -1000.0
        assert design.y[0] == 1.0
        assert design.X[0, 1] == 1.0

    def test_arrays_read_only(self):
        X = np.column_stack([np.ones(4), [1.0, 2.0, 3.0, 5.0]])
        design = Design.from_arrays(X, [1.0, 2.0, 3.0, 4.0])
        with pytest.raises(ValueError):
            design.X[0, 0] = 2.0
        with pytest.raises(ValueError):
            design.y[0] = 2.0

    def test_column_vector_y(self):
        design = Design.from_arrays(np.ones((3, 1)), [[1.0], [2.0], [3.0]])
        assert design.y.shape == (3,)

    def test_names_length_checked(self):
        with pytest.raises(ValueError, match="coefficient names"):
            Design.from_arrays(np.ones((4, 2)), np.ones(4), names=['a'])

    def test_zero_columns(self):
        with pytest.raises(ValidationError, match="no columns"):
            Design.from_arrays(np.empty((4, 0)), np.ones(4))

    def test_inf_rejected(self):
        X = np.column_stack([np.ones(4), [1.0, np.inf, 3.0, 4.0]])
        with pytest.raises(ValidationError, match="1 Inf"):
            Design.from_arrays(X, np.ones(4))

    def test_gram_products(self, simple_regression_data):
        X, y, _ = simple_regression_data
        design = Design.from_arrays(X, y)
        np.testing.assert_allclose(design.XtX(), X.T @ X)
        np.testing.assert_allclose(design.Xty(), X.T @ y)
