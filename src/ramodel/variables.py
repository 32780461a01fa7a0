# src/ramodel/variables.py

"""
Categorical variables and their bit-packed key layout.

A :class:`VariableList` is the universe every relation and model is defined
over. Besides holding names and cardinalities, it assigns each variable a
slice of a multi-segment integer key:

- ``bits``    : width of the slice, large enough for every value plus the
                all-ones wildcard pattern,
- ``segment`` : which key segment the slice lives in,
- ``shift``   : offset of the slice inside its segment,
- ``mask``    : ``((1 << bits) - 1) << shift``.

Variables are packed in order and never straddle a segment boundary.

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> vl = VariableList([Variable("gender", "G", 2), Variable("age", "A", 3)])
>>> vl.get_var_count(), vl.cardinalities
(2, (2, 3))
>>> [(v.bits, v.shift, v.segment) for v in vl]
[(2, 0, 0), (2, 2, 0)]
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .config import DEFAULT_CONFIG

__all__ = [
    "Variable",
    "VariableList",
]


@dataclass(eq=False)
class Variable:
    """
    One categorical variable.

    Parameters
    ----------
    name : str
        Full variable name (e.g. a DataFrame column).
    abbrev : str
        Short label used in relation and model names.
    cardinality : int
        Number of distinct values; values are the integers ``0..cardinality-1``.
    is_dependent : bool, default=False
        Marks the dependent variable of a directed system.
    values : sequence of str, optional
        Display labels for the values, in value order.
    """
    name: str
    abbrev: str
    cardinality: int
    is_dependent: bool = False
    values: Optional[Tuple[str, ...]] = None

    bits: int = field(init=False, default=0)
    shift: int = field(init=False, default=0)
    segment: int = field(init=False, default=0)
    mask: int = field(init=False, default=0)

    def __post_init__(self):
        if self.cardinality < 1:
            raise ValueError(f"variable {self.name!r} must have cardinality ≥ 1")
        if self.values is not None:
            self.values = tuple(str(v) for v in self.values)
            if len(self.values) != self.cardinality:
                raise ValueError(
                    f"variable {self.name!r}: {len(self.values)} labels for cardinality {self.cardinality}"
                )
        # all-ones is reserved for the wildcard, so it must exceed every value
        self.bits = int(self.cardinality).bit_length()

    def label(self, value: int) -> str:
        """Display label for `value` (the integer itself when no labels are set)."""
        if self.values is None:
            return str(value)
        return self.values[value]

    def __repr__(self) -> str:
        dv = ", dv" if self.is_dependent else ""
        return f"Variable({self.abbrev}:{self.name}, card={self.cardinality}{dv})"


class VariableList:
    """
    Ordered variable universe with a packed key layout.

    Parameters
    ----------
    variables : iterable of Variable
        The variables, in canonical order. Abbreviations must be unique.
    segment_bits : int, optional
        Width of one key segment; defaults to ``DEFAULT_CONFIG.segment_bits``.

    Notes
    -----
    - The list takes ownership of the layout fields (``bits``, ``shift``,
      ``segment``, ``mask``) of its variables; do not share a ``Variable``
      between two lists with different segment widths.
    """

    def __init__(self, variables: Iterable[Variable], segment_bits: Optional[int] = None) -> None:
        self._vars: List[Variable] = list(variables)
        self.segment_bits = int(segment_bits if segment_bits is not None else DEFAULT_CONFIG.segment_bits)
        abbrevs = [v.abbrev for v in self._vars]
        if len(set(abbrevs)) != len(abbrevs):
            raise ValueError("variable abbreviations must be unique")
        self._pack()

    def _pack(self) -> None:
        segment, used = 0, 0
        for var in self._vars:
            if var.bits > self.segment_bits:
                raise ValueError(
                    f"variable {var.name!r} needs {var.bits} bits; segments hold {self.segment_bits}"
                )
            if used + var.bits > self.segment_bits:
                segment, used = segment + 1, 0
            var.segment = segment
            var.shift = used
            var.mask = ((1 << var.bits) - 1) << used
            used += var.bits
        self.key_size = segment + 1 if self._vars else 0

    # --- constructors ---

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        *,
        dependent: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        segment_bits: Optional[int] = None,
    ) -> "VariableList":
        """
        Build a variable list from categorical columns of a DataFrame.

        Each column becomes one variable whose cardinality is its number of
        distinct non-NA values; the sorted distinct values become the value
        labels. The abbreviation is the column name.

        Parameters
        ----------
        df : pandas.DataFrame
            Source data.
        dependent : str, optional
            Column to mark as the dependent variable (makes the system directed).
        columns : sequence of str, optional
            Subset/order of columns to use; defaults to all columns.
        segment_bits : int, optional
            Passed through to the constructor.
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError("VariableList.from_frame requires a pandas DataFrame.")
        cols = list(columns) if columns is not None else [str(c) for c in df.columns]
        if dependent is not None and dependent not in cols:
            raise ValueError(f"dependent column {dependent!r} is not among the selected columns")
        out: List[Variable] = []
        for c in cols:
            s = df[c].dropna()
            if s.empty:
                raise ValueError(f"column {c!r} has no values")
            labels = sorted(pd.unique(s).tolist(), key=str)
            out.append(Variable(
                name=str(c),
                abbrev=str(c),
                cardinality=len(labels),
                is_dependent=(c == dependent),
                values=tuple(str(v) for v in labels),
            ))
        return cls(out, segment_bits=segment_bits)

    # --- accessors ---

    def get_var_count(self) -> int:
        return len(self._vars)

    def get_variable(self, index: int) -> Variable:
        return self._vars[index]

    def index_of(self, name: str) -> int:
        """Position of the variable whose abbreviation or name is `name`."""
        for i, v in enumerate(self._vars):
            if v.abbrev == name or v.name == name:
                return i
        raise KeyError(name)

    def indices(self, names: Iterable[Union[str, int]]) -> Tuple[int, ...]:
        """Resolve a mix of names, abbreviations and positions to positions."""
        out = []
        for n in names:
            out.append(self.index_of(n) if isinstance(n, str) else int(n))
        return tuple(out)

    def is_directed(self) -> bool:
        return any(v.is_dependent for v in self._vars)

    @property
    def cardinalities(self) -> Tuple[int, ...]:
        return tuple(v.cardinality for v in self._vars)

    @property
    def abbrevs(self) -> Tuple[str, ...]:
        return tuple(v.abbrev for v in self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._vars)

    def __getitem__(self, index: int) -> Variable:
        return self._vars[index]

    def __repr__(self) -> str:
        return f"VariableList({', '.join(repr(v) for v in self._vars)})"
