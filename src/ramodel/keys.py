# src/ramodel/keys.py

"""
Bit-packed keys over a :class:`~ramodel.variables.VariableList`.

A key is a tuple of non-negative integers, one per key segment. Each variable
owns the bits under its ``mask`` in segment ``segment``; the stored value is
shifted left by ``shift``. When every bit under the mask is set, the variable
is a wildcard ("don't care").

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.keys import make_key, key_values, DONT_CARE
>>> vl = VariableList([Variable("x", "X", 2), Variable("y", "Y", 3)])
>>> k = make_key(vl, {1: 2})
>>> key_values(k, vl).tolist()
[-1, 2]
"""

from __future__ import annotations
from typing import Mapping, Sequence, Tuple

import numpy as np

from .errors import KeyLayoutError
from .variables import Variable, VariableList

__all__ = [
    "DONT_CARE",
    "Key",
    "make_key",
    "key_value",
    "key_values",
    "key_to_string",
]

DONT_CARE = -1

Key = Tuple[int, ...]


def make_key(variables: VariableList, assignment: Mapping[int, int]) -> Key:
    """
    Build a key that pins the variables in `assignment` and wildcards the rest.

    Parameters
    ----------
    variables : VariableList
        Layout to pack against.
    assignment : mapping int -> int
        Variable position -> value. A value of :data:`DONT_CARE` leaves the
        variable wildcarded.
    """
    segments = [0] * variables.key_size
    for i, var in enumerate(variables):
        value = assignment.get(i, DONT_CARE)
        if value == DONT_CARE:
            segments[var.segment] |= var.mask
            continue
        if not 0 <= value < var.cardinality:
            raise KeyLayoutError(
                f"value {value} out of range for variable {var.abbrev} (cardinality {var.cardinality})"
            )
        segments[var.segment] |= (int(value) << var.shift) & var.mask
    unknown = set(assignment) - set(range(len(variables)))
    if unknown:
        raise KeyLayoutError(f"unknown variable positions {sorted(unknown)}")
    return tuple(segments)


def _check(key: Sequence[int], variables: VariableList) -> None:
    if len(key) != variables.key_size:
        raise KeyLayoutError(
            f"key has {len(key)} segments; the variable list uses {variables.key_size}"
        )


def key_value(key: Sequence[int], var: Variable) -> int:
    """Value of `var` in `key`, or :data:`DONT_CARE` when its bits are all set."""
    bits = key[var.segment] & var.mask
    if bits == var.mask:
        return DONT_CARE
    return bits >> var.shift


def key_values(key: Sequence[int], variables: VariableList) -> np.ndarray:
    """Vector of per-variable values (``DONT_CARE`` for wildcards)."""
    _check(key, variables)
    return np.array([key_value(key, v) for v in variables], dtype=int)


def key_to_string(key: Sequence[int], variables: VariableList, *, wildcard: str = ".") -> str:
    """Render `key` as one character group per variable, e.g. ``"0.2"``."""
    _check(key, variables)
    parts = []
    for v in variables:
        value = key_value(key, v)
        parts.append(wildcard if value == DONT_CARE else str(value))
    return "".join(parts)
