# src/ramodel/structure.py

"""
Structure matrices of (state-based) models.

A structure matrix has one row per state constraint of every relation of a
model, plus a final default row of ones, and one column per joint state of
the variable universe. Entry ``[r, k]`` is 1 when state ``k`` satisfies
constraint ``r``.

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.relations import Relation
>>> from ramodel.structure import build_structure_matrix
>>> vl = VariableList([Variable("x", "X", 2), Variable("y", "Y", 2)])
>>> build_structure_matrix([Relation(vl, ["X"])], vl).tolist()
[[1, 1, 0, 0], [0, 0, 1, 1], [1, 1, 1, 1]]
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import RAConfig
from .errors import ModelStructureError
from .keys import DONT_CARE, Key, key_to_string, key_values
from .statespace import enumerate_states
from .variables import VariableList

__all__ = [
    "indices_from_key",
    "build_structure_matrix",
    "structure_frame",
]

logger = logging.getLogger(__name__)


def indices_from_key(key: Key, variables: VariableList, states: np.ndarray) -> np.ndarray:
    """
    Positions of the enumerated states matching `key`.

    Wildcarded variables match anything; every other variable must equal the
    value extracted from the key.
    """
    values = key_values(key, variables)
    pinned = values != DONT_CARE
    match = np.all(states[:, pinned] == values[pinned], axis=1)
    return np.flatnonzero(match)


def _relation_keys(relations: Sequence) -> List[List[Key]]:
    if len(relations) == 0:
        raise ModelStructureError("cannot build a structure matrix: model contains no relations")
    out = []
    for rel in relations:
        sc = rel.get_state_constraints()
        if sc is None:
            raise ModelStructureError(f"relation {rel.get_print_name()} has no state constraints")
        count = sc.get_constraint_count()
        if count <= 0:
            raise ModelStructureError(f"relation {rel.get_print_name()} has {count} state constraints")
        keys = []
        for j in range(count):
            key = sc.get_constraint(j)
            if key is None:
                raise ModelStructureError(
                    f"relation {rel.get_print_name()}: constraint {j} of {count} is missing"
                )
            keys.append(key)
        out.append(keys)
    return out


def build_structure_matrix(
    relations: Sequence,
    variables: Optional[VariableList] = None,
    states: Optional[np.ndarray] = None,
    *,
    config: Optional[RAConfig] = None,
) -> np.ndarray:
    """
    Build the constraint × state matrix for `relations`.

    Parameters
    ----------
    relations : sequence of Relation
        Relations of one model, all over the same variable universe.
    variables : VariableList, optional
        The universe; defaults to the first relation's variable list.
    states : numpy.ndarray, optional
        Pre-enumerated state table for `variables`.
    config : RAConfig, optional
        Passed to :func:`~ramodel.statespace.enumerate_states`.

    Returns
    -------
    numpy.ndarray
        ``int8`` array of shape ``(sum of constraint counts + 1, n_states)``;
        the last row is all ones.

    Raises
    ------
    ModelStructureError
        If there are no relations, or a relation exposes no constraints.
    """
    all_keys = _relation_keys(relations)
    if variables is None:
        variables = relations[0].get_variable_list()
    if states is None:
        states = enumerate_states(variables, config=config)
    total = sum(len(keys) for keys in all_keys) + 1
    matrix = np.zeros((total, states.shape[0]), dtype=np.int8)
    matrix[-1, :] = 1
    row = 0
    for keys in all_keys:
        for key in keys:
            matrix[row, indices_from_key(key, variables, states)] = 1
            row += 1
    logger.debug("built structure matrix %dx%d for %d relations", total, states.shape[0], len(relations))
    return matrix


def structure_frame(model) -> pd.DataFrame:
    """
    Labelled view of a model's structure matrix.

    Rows are ``"<relation>:<key>"`` labels plus ``"default"``; columns are the
    states rendered as value strings.
    """
    matrix, _, _ = model.get_structure_matrix()
    variables = model.get_relation(0).get_variable_list()
    states = enumerate_states(variables)
    columns = ["".join(str(x) for x in row) for row in states]
    index = []
    for rel in model:
        for key in rel.get_state_constraints():
            index.append(f"{rel.get_print_name()}:{key_to_string(key, variables)}")
    index.append("default")
    return pd.DataFrame(matrix, index=index, columns=columns)
