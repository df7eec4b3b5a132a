"""
Tests for summary() and cor().
"""

import pytest
import numpy as np

from autoprice.core.exceptions import ValidationError
from autoprice.dataset import AutoDataset
from autoprice.descriptive import cor, summary


class TestSummary:

    def test_matches_r_type7(self):
        # R: summary(c(1, 2, 3, 4, 10)) -> 1, 2, 3, 4, 4, 10
        s = summary([1, 2, 3, 4, 10])
        assert (s.minimum, s.q1, s.median, s.mean, s.q3, s.maximum) == (1, 2, 3, 4, 4, 10)
        assert s.n == 5

    def test_interpolated_quartiles(self):
        # R: quantile(1:4) -> 1.00 1.75 2.50 3.25 4.00
        s = summary([4, 1, 3, 2])
        assert s.q1 == pytest.approx(1.75)
        assert s.q3 == pytest.approx(3.25)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            summary([1.0, np.nan])

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            summary([])

    def test_format_has_r_labels(self):
        text = summary([1, 2, 3]).format()
        for label in ('Min.', '1st Qu.', 'Median', 'Mean', '3rd Qu.', 'Max.'):
            assert label in text


class TestCor:

    def test_matches_numpy(self, rng):
        X = rng.standard_normal((50, 3))
        np.testing.assert_allclose(cor(X), np.corrcoef(X, rowvar=False), atol=1e-12)

    def test_from_dataset(self):
        ds = AutoDataset.from_columns(a=[1, 2, 3, 4], b=[2, 4, 6, 8], c=[4, 3, 2, 1])
        r = cor(ds, ['a', 'b', 'c'])
        np.testing.assert_allclose(r, [[1, 1, -1], [1, 1, -1], [-1, -1, 1]])

    def test_dataset_requires_columns(self):
        ds = AutoDataset.from_columns(a=[1, 2, 3])
        with pytest.raises(ValueError, match="columns required"):
            cor(ds)

    def test_constant_column_is_nan(self):
        r = cor(np.column_stack([[1.0, 2.0, 3.0], [5.0, 5.0, 5.0]]))
        assert np.isnan(r[0, 1])
        assert np.isnan(r[1, 1])
        assert r[0, 0] == 1.0
