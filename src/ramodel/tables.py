# src/ramodel/tables.py

from __future__ import annotations
from typing import Optional

import numpy as np
import pandas as pd

from .statespace import enumerate_states
from .variables import VariableList

__all__ = [
    "state_index",
    "frequency_table",
    "table_size",
]


def state_index(variables: VariableList, states: Optional[np.ndarray] = None) -> pd.MultiIndex:
    """MultiIndex over the enumerated states, one level per variable abbreviation."""
    if states is None:
        states = enumerate_states(variables)
    return pd.MultiIndex.from_arrays(
        [states[:, j] for j in range(states.shape[1])],
        names=list(variables.abbrevs),
    )


def _label_key(x):
    """Lookup key for a value or label; numeric spellings (``1``, ``1.0``, ``"1"``) coincide."""
    if isinstance(x, (bool, np.bool_)):
        return str(x)
    if isinstance(x, (int, float, np.integer, np.floating)):
        return float(x)
    try:
        return float(str(x))
    except ValueError:
        return str(x)


def _codes(s: pd.Series, v) -> pd.Series:
    """Map the (NA-free) column `s` to value indices of `v`, rejecting unknown values."""
    if v.values is not None:
        lookup = {_label_key(label): i for i, label in enumerate(v.values)}
        coded = s.map(lambda x: lookup.get(_label_key(x)))
        bad = coded.isna()
    else:
        num = pd.to_numeric(s, errors="coerce")
        bad = num.isna() | (num % 1 != 0) | ~num.between(0, v.cardinality - 1)
        coded = num
    if bad.any():
        unknown = sorted({str(x) for x in s[bad]})
        raise ValueError(f"column {v.name!r} has values not among its {v.cardinality} states: {unknown}")
    return coded.astype(np.int64)


def frequency_table(df: pd.DataFrame, variables: VariableList, *, normalize: bool = True) -> pd.Series:
    """
    Observed distribution of `df` over the full state space of `variables`.

    Each variable reads the column named like it; raw values are mapped to
    value indices through the variable's labels (or used directly when it
    has none). States never observed get 0. Rows with NA in any used column
    are dropped.

    Returns
    -------
    pandas.Series
        Indexed by :func:`state_index`, counts or (with `normalize`) relative
        frequencies summing to 1.

    Raises
    ------
    ValueError
        If a non-NA value matches none of its variable's labels (or, for an
        unlabelled variable, is not an integer in ``0..cardinality-1``), or
        if no complete row remains.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError("frequency_table requires a pandas DataFrame.")
    if len(variables) == 0:
        raise ValueError("frequency_table needs at least one variable")
    for v in variables:
        if v.name not in df.columns:
            raise KeyError(v.name)
    raw = df[[v.name for v in variables]].dropna()
    if raw.empty:
        raise ValueError("no complete rows to tabulate")
    coded = pd.DataFrame({v.abbrev: _codes(raw[v.name], v) for v in variables})
    # mixed-radix position of each row, matching the enumeration order
    cards = np.array(variables.cardinalities, dtype=np.int64)
    strides = np.concatenate([np.cumprod(cards[::-1])[::-1][1:], [1]])
    positions = coded.to_numpy(dtype=np.int64) @ strides
    n_states = int(np.prod(cards))
    counts = np.bincount(positions, minlength=n_states).astype(float)
    table = pd.Series(counts, index=state_index(variables))
    if normalize:
        table = table / table.sum()
    return table


def table_size(table: Optional[pd.Series]) -> int:
    """Approximate memory footprint of a table in bytes (0 for ``None``)."""
    if table is None:
        return 0
    return int(table.memory_usage(index=True, deep=False))
