"""
Immutable dataset container.

AutoDataset is the "I have data" abstraction: named float64 columns of
equal length plus optional row labels. It doesn't know what consumes it.
Every transformation returns a new AutoDataset; the column arrays are
flagged read-only so no stage can mutate another stage's data.

Usage:
    from autoprice.dataset import AutoDataset

    ds = AutoDataset.from_file("Consumer_Reports_April_2019.csv")
    ds = AutoDataset.from_columns(price=prices, hp=hp)

    ds.keys()        # frozenset({'price', 'hp', ...})
    hp = ds['hp']
    expensive = ds.select(ds['price'] >= 70000)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from autoprice.core.exceptions import ColumnNotFoundError, ValidationError
from autoprice.core.validation import check_1d, check_array, check_consistent_length
from autoprice.dataset.schema import AUTO_SCHEMA, Schema

if TYPE_CHECKING:
    import pandas as pd


def _frozen(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = np.array(check_array(values, name), dtype=np.float64, copy=True)
    check_1d(arr, name)
    arr.setflags(write=False)
    return arr


def _positional_labels(n: int) -> tuple[str, ...]:
    return tuple(f"row {i + 1}" for i in range(n))


@dataclass(frozen=True, eq=False)
class AutoDataset:
    """
    Immutable table of named numeric columns.

    Construct via factory classmethods, not directly.
    """
    _data: Mapping[str, NDArray[np.floating[Any]]]
    _labels: tuple[str, ...] | None = None
    _metadata: Mapping[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> frozenset[str]:
        """Names of all available columns."""
        return frozenset(self._data.keys())

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names in insertion order."""
        return tuple(self._data.keys())

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            ColumnNotFoundError: If key not found, listing available columns
        """
        if key not in self._data:
            raise ColumnNotFoundError(
                f"Column not found: {key!r}. Available: {sorted(self.keys())}",
                missing=(key,),
                available=self.columns,
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return self.n_observations

    def matrix(self, names: Sequence[str]) -> NDArray[np.floating[Any]]:
        """Stack the named columns into an (n x k) matrix."""
        missing = [name for name in names if name not in self._data]
        if missing:
            raise ColumnNotFoundError(
                f"Column not found: {missing}. Available: {sorted(self.keys())}",
                missing=tuple(missing),
                available=self.columns,
            )
        if not names:
            return np.empty((self.n_observations, 0), dtype=np.float64)
        return np.column_stack([self._data[name] for name in names])

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        if not self._data:
            return 0 if self._labels is None else len(self._labels)
        return int(next(iter(self._data.values())).shape[0])

    @property
    def labels(self) -> tuple[str, ...]:
        """Row labels; positional ('row 1', ...) from load time if the source had none."""
        if self._labels is not None:
            return self._labels
        return _positional_labels(self.n_observations)

    @property
    def metadata(self) -> dict[str, Any]:
        return dict(self._metadata)

    # === Transformations (each returns a new dataset) ===

    def select(self, mask: ArrayLike) -> AutoDataset:
        """
        Keep the rows where mask is True.

        Raises:
            DimensionError: If mask length differs from the row count
        """
        mask = np.asarray(mask, dtype=bool)
        check_consistent_length(
            mask, np.empty(self.n_observations), names=('mask', 'dataset')
        )
        data = {name: arr[mask] for name, arr in self._data.items()}
        labels = None
        if self._labels is not None:
            labels = tuple(lab for lab, keep in zip(self._labels, mask) if keep)
        return self._replace(data, labels)

    def with_column(self, name: str, values: ArrayLike) -> AutoDataset:
        """Return a copy with column `name` added or replaced."""
        arr = _frozen(values, name)
        if self._data:
            check_consistent_length(
                arr, np.empty(self.n_observations), names=(name, 'dataset')
            )
        data = dict(self._data)
        data[name] = arr
        return self._replace(data, self._labels)

    def to_dataframe(self, columns: Sequence[str] | None = None) -> 'pd.DataFrame':
        """Materialize (a subset of) the columns as a pandas DataFrame."""
        import pandas as pd
        names = list(columns) if columns is not None else list(self.columns)
        return pd.DataFrame(
            {name: self[name] for name in names},
            index=pd.Index(self.labels, name='label'),
        )

    def _replace(
        self,
        data: dict[str, NDArray[np.floating[Any]]],
        labels: tuple[str, ...] | None,
    ) -> AutoDataset:
        for arr in data.values():
            arr.setflags(write=False)
        metadata = dict(self._metadata)
        metadata['n_observations'] = (
            int(next(iter(data.values())).shape[0]) if data else 0
        )
        return AutoDataset(_data=data, _labels=labels, _metadata=metadata)

    # === Factory Methods ===

    @classmethod
    def from_columns(
        cls,
        *,
        labels: Sequence[str] | None = None,
        **columns: ArrayLike,
    ) -> AutoDataset:
        """
        Construct from named 1D arrays.

        Raises:
            ValidationError: If an array is non-numeric or not 1D
            DimensionError: If arrays (or labels) differ in length
        """
        data = {name: _frozen(values, name) for name, values in columns.items()}
        arrays = list(data.values())
        names = tuple(data.keys())
        if labels is not None:
            labels = tuple(str(lab) for lab in labels)
            arrays.append(np.empty(len(labels)))
            names = names + ('labels',)
        check_consistent_length(*arrays, names=names)

        n_obs = len(arrays[0]) if arrays else 0
        if labels is None:
            labels = _positional_labels(n_obs)
        return cls(
            _data=data,
            _labels=labels,
            _metadata={'n_observations': n_obs, 'source': 'arrays'},
        )

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        schema: Schema = AUTO_SCHEMA,
        source_path: str | None = None,
    ) -> AutoDataset:
        """
        Construct from a raw DataFrame, validating it against the schema.

        Only schema attributes are kept, under their attribute names.

        Raises:
            ColumnNotFoundError: If a schema column is missing
            ValidationError: If a schema column has invalid values
        """
        data = {name: _frozen(values, name) for name, values in schema.validate(df).items()}

        metadata: dict[str, Any] = {
            'n_observations': len(df),
            'source': 'dataframe',
            'raw_columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path

        labels = schema.labels(df)
        if labels is None:
            labels = _positional_labels(len(df))
        return cls(_data=data, _labels=labels, _metadata=metadata)

    @classmethod
    def from_file(cls, path: str | Path, *, schema: Schema = AUTO_SCHEMA) -> AutoDataset:
        """
        Read a CSV/TSV file once and validate it against the schema.

        I/O and parser errors (FileNotFoundError, pandas ParserError)
        propagate unchanged.
        """
        import pandas as pd

        path = Path(path)
        suffix = path.suffix.lower()
        if suffix == '.csv':
            df = pd.read_csv(path)
        elif suffix == '.tsv':
            df = pd.read_csv(path, sep='\t')
        else:
            raise ValidationError(f"Unknown file format: {suffix!r} (expected .csv or .tsv)")
        return cls.from_dataframe(df, schema=schema, source_path=str(path))
