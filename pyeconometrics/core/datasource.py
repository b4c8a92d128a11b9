"""
Universal DataSource for pyeconometrics.

DataSource is the "I have data" abstraction. It doesn't know or care
which estimator consumes it. It just provides named numeric columns.

Usage:
    from pyeconometrics.core import DataSource

    ds = DataSource.from_rows([{'x': 1.0, 'y': 2.0}, {'x': 2.0, 'y': 4.1}])
    ds = DataSource.from_arrays(x=x, y=y)
    ds = DataSource.from_dataframe(df)
    ds = DataSource.from_file("data.csv")

    ds.keys()   # frozenset({'x', 'y'})
    x = ds['x']
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.exceptions import (
    DimensionError,
    EmptyDatasetError,
    MissingVariableError,
    ValidationError,
)

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class DataSource:
    """
    Immutable column store. Estimator-agnostic.

    Construct via factory classmethods, not directly. Every column is a
    1D float64 array and all columns share the same length.
    """
    _columns: dict[str, NDArray[np.floating[Any]]]
    _n: int

    # === Column Access ===

    def keys(self) -> frozenset[str]:
        """Return the names of all available columns."""
        return frozenset(self._columns)

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            MissingVariableError: If key not found, listing available columns
        """
        if key not in self._columns:
            raise MissingVariableError(key, available=tuple(self._columns))
        return self._columns[key]

    def __contains__(self, key: object) -> bool:
        return key in self._columns

    def __len__(self) -> int:
        return self._n

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of observation rows."""
        return self._n

    # === Factory Methods ===

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Mapping[str, float]],
        *,
        columns: Sequence[str] | None = None,
    ) -> DataSource:
        """
        Construct from a sequence of observation rows.

        Args:
            rows: Mappings from variable name to numeric value
            columns: Columns to extract. Defaults to the keys of the
                first row.

        Raises:
            EmptyDatasetError: If rows is empty
            MissingVariableError: If any row lacks one of the columns
            ValidationError: If a value is not numeric
        """
        if len(rows) == 0:
            raise EmptyDatasetError()
        names = list(columns) if columns is not None else list(rows[0].keys())

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for name in names:
            values = np.empty(len(rows), dtype=np.float64)
            for i, row in enumerate(rows):
                if name not in row:
                    raise MissingVariableError(
                        name,
                        available=tuple(row.keys()),
                        message=f"Variable '{name}' is missing from row {i}",
                    )
                try:
                    values[i] = float(row[name])
                except (TypeError, ValueError) as e:
                    raise ValidationError(
                        f"Variable '{name}' in row {i}: non-numeric value {row[name]!r}"
                    ) from e
            storage[name] = values

        return cls(_columns=storage, _n=len(rows))

    @classmethod
    def from_arrays(cls, **named_arrays: Any) -> DataSource:
        """Construct from 1D array-likes passed as keyword arguments."""
        storage: dict[str, NDArray[np.floating[Any]]] = {}
        n_obs: int | None = None

        for name, arr in named_arrays.items():
            arr = np.asarray(arr, dtype=np.float64)
            if arr.ndim != 1:
                raise DimensionError(
                    f"{name}: expected 1D array, got shape {arr.shape}",
                    expected=1,
                    actual=arr.ndim,
                )
            if n_obs is None:
                n_obs = arr.shape[0]
            elif arr.shape[0] != n_obs:
                raise DimensionError(
                    f"{name}: length {arr.shape[0]} does not match {n_obs}",
                    expected=n_obs,
                    actual=arr.shape[0],
                )
            storage[name] = arr

        if not n_obs:
            raise EmptyDatasetError()

        return cls(_columns=storage, _n=n_obs)

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame') -> DataSource:
        """Construct from a pandas DataFrame (all columns must be numeric)."""
        if len(df) == 0:
            raise EmptyDatasetError()

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for col in df.columns:
            try:
                storage[str(col)] = df[col].to_numpy(dtype=np.float64)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Column '{col}': non-numeric data") from e

        return cls(_columns=storage, _n=len(df))

    @classmethod
    def from_file(cls, path: str | Path, *, columns: list[str] | None = None) -> DataSource:
        """Construct from a CSV/TSV file via pandas."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, usecols=columns, sep=sep)
            return cls.from_dataframe(df)
        raise ValidationError(f"Unknown file format: {suffix}")

    @classmethod
    def build(cls, data: Any) -> DataSource:
        """
        Dispatch to the appropriate factory.

        Examples:
            DataSource.build(ds)            # passthrough
            DataSource.build([{...}, ...])  # from_rows
            DataSource.build("data.csv")    # from_file
        """
        if isinstance(data, DataSource):
            return data
        if isinstance(data, (str, Path)):
            return cls.from_file(data)
        if hasattr(data, 'to_numpy') and hasattr(data, 'columns'):
            return cls.from_dataframe(data)
        return cls.from_rows(data)
