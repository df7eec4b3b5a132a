"""
Tests for the immutable AutoDataset.
"""

import pytest
import numpy as np

from autoprice.core.exceptions import ColumnNotFoundError, DimensionError, ValidationError
from autoprice.dataset import AutoDataset


class TestConstruction:

    def test_from_columns(self):
        ds = AutoDataset.from_columns(a=[1, 2, 3], b=[4.0, 5.0, 6.0])
        assert ds.n_observations == 3
        assert len(ds) == 3
        assert ds.keys() == frozenset({'a', 'b'})
        assert ds.columns == ('a', 'b')
        assert ds['a'].dtype == np.float64

    def test_from_columns_length_mismatch(self):
        with pytest.raises(DimensionError):
            AutoDataset.from_columns(a=[1, 2, 3], b=[1, 2])

    def test_labels_length_mismatch(self):
        with pytest.raises(DimensionError):
            AutoDataset.from_columns(a=[1, 2, 3], labels=['x', 'y'])

    def test_default_labels(self):
        ds = AutoDataset.from_columns(a=[1, 2])
        assert ds.labels == ('row 1', 'row 2')

    def test_default_labels_survive_select(self):
        ds = AutoDataset.from_columns(price=[1.0, 2.0, 3.0])
        assert ds.select(np.array([False, True, True])).labels == ('row 2', 'row 3')

    def test_from_dataframe_uses_attribute_names(self, auto_frame):
        ds = AutoDataset.from_dataframe(auto_frame)
        assert 'curb_weight' in ds
        assert 'Curb Weight(lb)' not in ds
        assert ds.labels[0] == 'Car 1'
        assert ds.metadata['n_observations'] == len(auto_frame)

    def test_from_file(self, auto_csv, auto_frame):
        ds = AutoDataset.from_file(auto_csv)
        assert ds.n_observations == len(auto_frame)
        assert ds.metadata['source_path'] == str(auto_csv)

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AutoDataset.from_file(tmp_path / "missing.csv")

    def test_from_file_unknown_suffix(self, tmp_path):
        path = tmp_path / "cars.xlsx"
        path.write_text("x")
        with pytest.raises(ValidationError, match="Unknown file format"):
            AutoDataset.from_file(path)


class TestImmutability:

    def test_columns_read_only(self, auto_dataset):
        with pytest.raises(ValueError):
            auto_dataset['price'][0] = 1.0

    def test_source_frame_changes_do_not_leak(self, auto_frame):
        ds = AutoDataset.from_dataframe(auto_frame)
        before = ds['hp'][0]
        auto_frame.loc[0, 'Hp'] = before + 100
        assert ds['hp'][0] == before

    def test_with_column_returns_new_dataset(self, auto_dataset):
        new = auto_dataset.with_column('double_hp', auto_dataset['hp'] * 2)
        assert 'double_hp' in new
        assert 'double_hp' not in auto_dataset
        with pytest.raises(ValueError):
            new['double_hp'][0] = 0.0

    def test_with_column_length_checked(self, auto_dataset):
        with pytest.raises(DimensionError):
            auto_dataset.with_column('bad', [1.0, 2.0])


class TestAccess:

    def test_missing_column(self, auto_dataset):
        with pytest.raises(ColumnNotFoundError, match="Column not found: 'torque'"):
            auto_dataset['torque']

    def test_matrix(self, auto_dataset):
        M = auto_dataset.matrix(['hp', 'rear'])
        assert M.shape == (auto_dataset.n_observations, 2)
        np.testing.assert_array_equal(M[:, 1], auto_dataset['rear'])

    def test_matrix_missing(self, auto_dataset):
        with pytest.raises(ColumnNotFoundError) as info:
            auto_dataset.matrix(['hp', 'torque', 'boost'])
        assert info.value.missing == ('torque', 'boost')

    def test_select(self, auto_dataset):
        mask = auto_dataset['luxury'] == 1
        sub = auto_dataset.select(mask)
        assert sub.n_observations == int(mask.sum())
        assert np.all(sub['luxury'] == 1)
        assert sub.labels == tuple(
            lab for lab, keep in zip(auto_dataset.labels, mask) if keep
        )

    def test_select_wrong_length(self, auto_dataset):
        with pytest.raises(DimensionError):
            auto_dataset.select([True, False])

    def test_to_dataframe(self, auto_dataset):
        df = auto_dataset.to_dataframe(['price', 'hp'])
        assert list(df.columns) == ['price', 'hp']
        assert df.index[0] == 'Car 1'
