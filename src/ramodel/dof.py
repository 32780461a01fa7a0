# src/ramodel/dof.py

from __future__ import annotations
import logging

import numpy as np

from .variables import VariableList

__all__ = [
    "ATTRIBUTE_DF",
    "degrees_of_freedom",
    "sb_degrees_of_freedom",
]

logger = logging.getLogger(__name__)

ATTRIBUTE_DF = "df"


def degrees_of_freedom(variables: VariableList) -> float:
    """Degrees of freedom of the full joint distribution: ``prod(cardinality) - 1``."""
    size = 1
    for v in variables:
        size *= int(v.cardinality)
    return float(size - 1)


def sb_degrees_of_freedom(model) -> float:
    """
    Degrees of freedom of a state-based model.

    The rank of the structure matrix counts the independent linear constraints
    the model places on the state probabilities; one of them is the
    normalization row, hence the ``- 1``.
    """
    matrix, _, _ = model.get_structure_matrix()
    rank = int(np.linalg.matrix_rank(matrix.astype(float)))
    logger.debug("rank %d for structure matrix of shape %s", rank, matrix.shape)
    return float(rank - 1)
