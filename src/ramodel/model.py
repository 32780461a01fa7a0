# src/ramodel/model.py

"""
Models: canonically ordered, minimal sets of relations.

A :class:`Model` keeps its relations sorted by the canonical relation order
and, for variable-based models, free of redundancy (no relation is contained
in another). Everything derived from the relation set is computed lazily and
dropped whenever the set changes:

- the structure matrix (see :mod:`ramodel.structure`),
- the print name and inverse print name (see :mod:`ramodel.naming`),
- the fit table (a fitted distribution supplied by a fitting routine),
- the attribute store (named floats such as ``"df"``).

Relations are shared, not owned: a model holds references to relations that
live in a :class:`~ramodel.cache.RelationCache` (or with the caller) and
never mutates them.

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.relations import Relation
>>> from ramodel.model import Model
>>> vl = VariableList([Variable(n, n, 2) for n in "ABC"])
>>> m = Model(2)
>>> _ = m.add_relation(Relation(vl, ["A"]), True)
>>> _ = m.add_relation(Relation(vl, ["A", "B"]), True)   # absorbs A
>>> _ = m.add_relation(Relation(vl, ["C"]), True)
>>> m.get_print_name(), m.get_relation_count()
('AB:C', 2)
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from .config import DEFAULT_CONFIG, RAConfig
from .errors import ModelStructureError
from .naming import print_name
from .oracle import model_contains, models_equivalent, relation_contained_in
from .statespace import enumerate_states
from .structure import build_structure_matrix
from .tables import table_size

__all__ = [
    "UNSET",
    "Model",
]

logger = logging.getLogger(__name__)

# Returned by get_attribute for names never set.
UNSET = -1.0


class Model:
    """
    A set of relations describing one structural hypothesis.

    Parameters
    ----------
    capacity : int, optional
        Initial number of relation slots; defaults to
        ``config.initial_relation_capacity``. Storage grows by
        ``config.growth_factor`` when full.
    config : RAConfig, optional
        Defaults to :data:`~ramodel.config.DEFAULT_CONFIG`.

    Notes
    -----
    - Not thread-safe; do not mutate one model from several threads.
    """

    def __init__(self, capacity: Optional[int] = None, *, config: Optional[RAConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        cap = self.config.initial_relation_capacity if capacity is None else int(capacity)
        if cap < 1:
            raise ValueError("capacity must be ≥ 1")
        self._capacity = cap
        self._relations: List = []
        self._attributes: Dict[str, float] = {}
        self._fit_table: Optional[pd.Series] = None
        self._struct_matrix: Optional[np.ndarray] = None
        self._state_space_size = 0
        self._total_constraints = 0
        self._print_name: Optional[str] = None
        self._inverse_name: Optional[str] = None

    # ──────────────────────────────────────────────────────────────────────
    # Relation set
    # ──────────────────────────────────────────────────────────────────────

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def relation_count(self) -> int:
        return len(self._relations)

    def get_relation_count(self) -> int:
        return len(self._relations)

    def get_relation(self, index: int):
        """Relation at `index`, or ``None`` when out of range."""
        if 0 <= index < len(self._relations):
            return self._relations[index]
        return None

    def get_relations(self, max_relations: Optional[int] = None) -> List:
        """Copy of the first `max_relations` relations (all by default)."""
        if max_relations is None:
            return list(self._relations)
        return self._relations[:max(0, int(max_relations))]

    def __iter__(self) -> Iterator:
        return iter(list(self._relations))

    def __len__(self) -> int:
        return len(self._relations)

    def is_state_based(self) -> bool:
        return any(rel.is_state_based() for rel in self._relations)

    def add_relation(self, relation, normalize: bool = False, cache=None) -> bool:
        """
        Insert `relation` at its canonical position.

        Parameters
        ----------
        relation : Relation or None
            ``None`` is ignored.
        normalize : bool, default=False
            Skip relations already implied by the model. For variable-based
            models, also drop existing relations the new one contains.
        cache : ModelCache, optional
            Passed to the containment oracle for state-based models.

        Returns
        -------
        bool
            True when the relation was inserted.
        """
        if relation is None:
            return False
        if normalize and self._relations:
            if self.is_state_based() or relation.is_state_based():
                if relation_contained_in(self, relation, cache):
                    return False
            else:
                kept = []
                for rel in self._relations:
                    if rel.contains(relation):
                        return False
                    if relation.contains(rel):
                        logger.debug("%s absorbs %s", relation.get_print_name(), rel.get_print_name())
                        continue
                    kept.append(rel)
                self._relations = kept

        while len(self._relations) >= self._capacity:
            self._capacity *= self.config.growth_factor
        pos = len(self._relations)
        for i, rel in enumerate(self._relations):
            if relation.compare(rel) < 0:
                pos = i
                break
        self._relations.insert(pos, relation)
        self._invalidate()
        return True

    def copy_relations(self, other: "Model", skip1: int = -1, skip2: int = -1) -> None:
        """Add `other`'s relations without normalization, skipping two positions."""
        for i in range(other.get_relation_count()):
            if i != skip1 and i != skip2:
                self.add_relation(other.get_relation(i), False)

    def _invalidate(self) -> None:
        self._print_name = None
        self._inverse_name = None
        self.delete_structure_matrix()
        self._fit_table = None
        self._attributes = {}

    # ──────────────────────────────────────────────────────────────────────
    # Derived state
    # ──────────────────────────────────────────────────────────────────────

    def get_print_name(self, use_inverse: bool = False) -> str:
        if use_inverse:
            if self._inverse_name is None:
                self._inverse_name = print_name(self, True)
            return self._inverse_name
        if self._print_name is None:
            self._print_name = print_name(self, False)
        return self._print_name

    def set_attribute(self, name: str, value: float) -> None:
        self._attributes[name] = float(value)

    def get_attribute(self, name: str) -> float:
        """Stored value, or :data:`UNSET` (negative) when never set."""
        return self._attributes.get(name, UNSET)

    @property
    def attributes(self) -> Dict[str, float]:
        return dict(self._attributes)

    def get_fit_table(self) -> Optional[pd.Series]:
        return self._fit_table

    def set_fit_table(self, table: Optional[pd.Series]) -> None:
        self._fit_table = table

    def delete_fit_table(self) -> None:
        self._fit_table = None

    def complete_sb_model(self) -> None:
        """Build the structure matrix if it is not built yet."""
        if not self._relations:
            raise ModelStructureError("complete_sb_model(): model contains no relations")
        if self._struct_matrix is not None:
            return
        variables = self._relations[0].get_variable_list()
        states = enumerate_states(variables, config=self.config)
        matrix = build_structure_matrix(self._relations, variables, states, config=self.config)
        self._state_space_size = states.shape[0]
        self._total_constraints = matrix.shape[0]
        self._struct_matrix = matrix

    def get_structure_matrix(self) -> Tuple[np.ndarray, int, int]:
        """``(matrix, state_space_size, total_constraints)``, building on first use."""
        if self._struct_matrix is None:
            self.complete_sb_model()
        return self._struct_matrix, self._state_space_size, self._total_constraints

    def delete_structure_matrix(self) -> None:
        self._struct_matrix = None
        self._state_space_size = 0
        self._total_constraints = 0

    # ──────────────────────────────────────────────────────────────────────
    # Containment / equivalence
    # ──────────────────────────────────────────────────────────────────────

    def contains_relation(self, relation, cache=None) -> bool:
        return relation_contained_in(self, relation, cache)

    def contains_model(self, other: "Model", cache=None) -> bool:
        return model_contains(self, other, cache)

    def is_equivalent_to(self, other: "Model", cache=None) -> bool:
        return models_equivalent(self, other, cache)

    # ──────────────────────────────────────────────────────────────────────
    # Lifecycle / diagnostics
    # ──────────────────────────────────────────────────────────────────────

    def release(self) -> None:
        """Drop owned substructures; the relations themselves are left alone."""
        self.delete_structure_matrix()
        self._fit_table = None
        self._attributes = {}
        self._relations = []
        self._print_name = None
        self._inverse_name = None

    def size(self) -> int:
        """Approximate memory footprint in bytes."""
        # one pointer-sized slot per relation capacity
        size = 64 + 8 * self._capacity
        size += table_size(self._fit_table)
        size += 64 * len(self._attributes)
        if self._struct_matrix is not None:
            size += int(self._struct_matrix.nbytes)
        return size

    def dump(self, detail: bool = False) -> str:
        lines = []
        attrs = ", ".join(f"{k}={v:g}" for k, v in self._attributes.items())
        lines.append(f"\tModel: {self.get_print_name()}")
        lines.append(f"\t\tAttributes: {attrs or '(none)'}")
        lines.append(
            f"\t\tSize: {self.size()},\tRelCount: {self.get_relation_count()},\tMaxRel: {self._capacity}"
        )
        if detail:
            if self._fit_table is not None:
                lines.append(f"\t\tFitTable: {table_size(self._fit_table)}")
            for rel in self._relations:
                lines.append(f"\t\t{rel.dump()}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Model({self.get_print_name()!r})"
