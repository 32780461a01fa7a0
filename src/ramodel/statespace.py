# src/ramodel/statespace.py

"""
Enumeration of the joint state space of a variable list.

The state table lists every combination of variable values exactly once, as
a mixed-radix counter whose radices are the variable cardinalities: the
first variable is the most significant digit and the last variable varies
fastest.

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.statespace import enumerate_states
>>> vl = VariableList([Variable("a", "A", 2), Variable("b", "B", 3)])
>>> enumerate_states(vl).tolist()
[[0, 0], [0, 1], [0, 2], [1, 0], [1, 1], [1, 2]]
"""

from __future__ import annotations
import logging
from typing import Optional

import numpy as np
import pandas as pd

from .config import DEFAULT_CONFIG, RAConfig
from .variables import VariableList

__all__ = [
    "state_space_size",
    "enumerate_states",
    "states_frame",
]

logger = logging.getLogger(__name__)


def state_space_size(variables: VariableList) -> int:
    """Product of all cardinalities (1 for an empty list)."""
    size = 1
    for v in variables:
        if v.cardinality < 1:
            raise ValueError(f"variable {v.abbrev} has cardinality {v.cardinality}")
        size *= int(v.cardinality)
    return size


def enumerate_states(variables: VariableList, *, config: Optional[RAConfig] = None) -> np.ndarray:
    """
    Return the ordered table of all joint states.

    Parameters
    ----------
    variables : VariableList
        Variables to enumerate, in order.
    config : RAConfig, optional
        Supplies ``max_state_space``; defaults to :data:`DEFAULT_CONFIG`.

    Returns
    -------
    numpy.ndarray
        Integer array of shape ``(n_states, n_vars)``. Row ``i + 1`` is row
        ``i`` advanced by one on the last variable, carrying leftward.

    Raises
    ------
    ValueError
        If a cardinality is below 1 or the state space exceeds
        ``config.max_state_space``.

    Notes
    -----
    - An empty variable list yields one empty state (shape ``(1, 0)``).
    """
    cfg = config or DEFAULT_CONFIG
    n_states = state_space_size(variables)
    if n_states > cfg.max_state_space:
        raise ValueError(
            f"state space of {n_states} states exceeds max_state_space={cfg.max_state_space}"
        )
    cards = variables.cardinalities
    n_vars = len(cards)
    states = np.zeros((n_states, n_vars), dtype=int)
    for i in range(1, n_states):
        row = states[i]
        row[:] = states[i - 1]
        pos = n_vars - 1
        while pos >= 0:
            if row[pos] == cards[pos] - 1:
                row[pos] = 0
                pos -= 1
            else:
                row[pos] += 1
                break
    logger.debug("enumerated %d states over %d variables", n_states, n_vars)
    return states


def states_frame(variables: VariableList, states: Optional[np.ndarray] = None) -> pd.DataFrame:
    """
    State table as a DataFrame with one column per variable abbreviation.

    Values are replaced by the variables' display labels.
    """
    if states is None:
        states = enumerate_states(variables)
    data = {}
    for j, v in enumerate(variables):
        data[v.abbrev] = [v.label(int(x)) for x in states[:, j]]
    return pd.DataFrame(data, columns=list(variables.abbrevs))
