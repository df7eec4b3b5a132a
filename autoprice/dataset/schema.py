"""
Explicit schema for the Consumer Reports automobile table.

Maps each attribute the analysis uses to the header it carries in the
source CSV and to its kind. The schema is the SINGLE SOURCE OF TRUTH for
column names: downstream code refers to attributes by name ('hp',
'curb_weight', ...), never by raw header.

Usage:
    from autoprice.dataset.schema import AUTO_SCHEMA

    columns = AUTO_SCHEMA.validate(df)   # dict attribute -> float64 array
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from autoprice.core.exceptions import ColumnNotFoundError, ValidationError
from autoprice.core.validation import check_array, check_binary, check_finite

if TYPE_CHECKING:
    import pandas as pd


AttributeKind = Literal['numeric', 'binary']


@dataclass(frozen=True)
class Attribute:
    """One schema entry: attribute name, source header, kind."""
    name: str
    column: str
    kind: AttributeKind
    description: str = ''


@dataclass(frozen=True)
class Schema:
    """
    Ordered, immutable collection of attributes.

    The optional label column holds a free-text row identifier (vehicle
    model name); it is carried along but never enters a regression.
    """
    attributes: tuple[Attribute, ...]
    label_column: str | None = None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(a.name for a in self.attributes)

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(a.column for a in self.attributes)

    def __contains__(self, name: str) -> bool:
        return name in self.names

    def attribute(self, name: str) -> Attribute:
        """Look up an attribute by name."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise ColumnNotFoundError(
            f"Column not found: schema has no attribute {name!r}. "
            f"Available: {list(self.names)}",
            missing=(name,),
            available=self.names,
        )

    def validate(self, df: 'pd.DataFrame') -> dict[str, NDArray[np.floating[Any]]]:
        """
        Check a raw table against the schema and extract its columns.

        Every header is checked before any values are, so a table with
        several renamed columns reports all of them at once.

        Returns:
            Mapping attribute name -> float64 array, in schema order

        Raises:
            ColumnNotFoundError: If any schema header is absent
            ValidationError: If a column is non-numeric, has missing
                values, or a binary column holds values other than 0/1
        """
        present = tuple(str(c) for c in df.columns)
        missing = tuple(c for c in self.columns if c not in present)
        if missing:
            raise ColumnNotFoundError(
                f"Column not found: {list(missing)}. Available: {list(present)}",
                missing=missing,
                available=present,
            )

        arrays: dict[str, NDArray[np.floating[Any]]] = {}
        for attr in self.attributes:
            label = f"column {attr.column!r}"
            values = check_array(df[attr.column].to_numpy(), label)
            check_finite(values, label)
            if attr.kind == 'binary':
                check_binary(values, label)
            arrays[attr.name] = values
        return arrays

    def labels(self, df: 'pd.DataFrame') -> tuple[str, ...] | None:
        """Row labels from the label column, or None if absent."""
        if self.label_column is None or self.label_column not in df.columns:
            return None
        return tuple(str(v) for v in df[self.label_column].tolist())


AUTO_SCHEMA = Schema(
    attributes=(
        Attribute('price', 'Price', 'numeric', 'Price in USD'),
        Attribute('hp', 'Hp', 'numeric', 'Horsepower'),
        Attribute('curb_weight', 'Curb Weight(lb)', 'numeric', 'Curb weight in lb'),
        Attribute('length', 'length(inch)', 'numeric', 'Overall length in inches'),
        Attribute('displacement', 'Disp', 'numeric', 'Engine displacement'),
        Attribute('mpg', 'MPG_ovarall', 'numeric', 'Overall fuel economy (MPG)'),
        Attribute('seven_over', '7over', 'binary', 'Seven or more transmission speeds'),
        Attribute('cvt', 'cvt', 'binary', 'Continuously variable transmission'),
        Attribute('awd', 'AWD', 'binary', 'All-wheel drive'),
        Attribute('rear', 'rear', 'binary', 'Rear-wheel drive'),
        Attribute('suv', 'SUV', 'binary', 'SUV body'),
        Attribute('pickup', 'Pickup', 'binary', 'Pickup body'),
        Attribute('minivan', 'Minivan', 'binary', 'Minivan body'),
        Attribute('sports', 'Sports', 'binary', 'Sports car'),
        Attribute('luxury', 'Luxuary', 'binary', 'Luxury brand'),
        Attribute('hybrid', 'Hybrid', 'binary', 'Hybrid powertrain'),
    ),
    label_column='Model',
)

PREDICTOR_NAMES: tuple[str, ...] = tuple(
    name for name in AUTO_SCHEMA.names if name != 'price'
)
