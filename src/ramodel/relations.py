# src/ramodel/relations.py

"""
Relations: the structural components of a model.

A relation is a subset of the variables of a :class:`VariableList`. It is
either

- **variable-based**: it constrains the full joint distribution of its
  variables, or
- **state-based**: it carries an explicit :class:`StateConstraints` set,
  each constraint pinning specific values of (some of) its variables.

Variable-based relations still expose a constraint set, generated on demand
with one key per joint state of their own variables, so that models mixing
both kinds can build a single structure matrix.

Relations are immutable after construction and are shared by reference
between many models (see :class:`~ramodel.cache.RelationCache`).

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.relations import Relation, StateConstraints
>>> vl = VariableList([Variable("x", "X", 2), Variable("y", "Y", 2)])
>>> ab = Relation(vl, ["X", "Y"])
>>> ab.get_print_name(), ab.is_state_based()
('XY', False)
>>> sc = StateConstraints.from_states(vl, [0, 1], [(0, 1)])
>>> Relation(vl, ["X", "Y"], sc).get_print_name()
'XY.X0Y1'
"""

from __future__ import annotations
from itertools import product
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .errors import KeyLayoutError
from .keys import DONT_CARE, Key, key_value, make_key
from .variables import VariableList

__all__ = [
    "StateConstraints",
    "Relation",
]


class StateConstraints:
    """
    Ordered set of constraint keys over a variable list.

    Parameters
    ----------
    variables : VariableList
        Layout the keys are packed against.
    keys : iterable of Key, optional
        Initial constraints; duplicates are dropped, order is kept.
    """

    def __init__(self, variables: VariableList, keys: Iterable[Key] = ()) -> None:
        self.variables = variables
        self._keys: List[Key] = []
        for k in keys:
            self.add_constraint(k)

    @classmethod
    def from_states(
        cls,
        variables: VariableList,
        indices: Sequence[int],
        states: Iterable[Sequence[int]],
    ) -> "StateConstraints":
        """
        Build constraints from value tuples over the variables at `indices`.

        A value of :data:`~ramodel.keys.DONT_CARE` wildcards that variable.
        """
        idx = list(indices)
        keys = []
        for st in states:
            st = list(st)
            if len(st) != len(idx):
                raise ValueError(f"state {st} does not match {len(idx)} variables")
            keys.append(make_key(variables, dict(zip(idx, st))))
        return cls(variables, keys)

    def add_constraint(self, key: Key) -> bool:
        key = tuple(int(s) for s in key)
        if len(key) != self.variables.key_size:
            raise KeyLayoutError(
                f"key has {len(key)} segments; the variable list uses {self.variables.key_size}"
            )
        if key in self._keys:
            return False
        self._keys.append(key)
        return True

    def get_constraint_count(self) -> int:
        return len(self._keys)

    def get_constraint(self, index: int) -> Optional[Key]:
        if 0 <= index < len(self._keys):
            return self._keys[index]
        return None

    @property
    def keys(self) -> Tuple[Key, ...]:
        return tuple(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)


class Relation:
    """
    A subset of variables, optionally restricted to explicit state constraints.

    Parameters
    ----------
    variables : VariableList
        The full variable universe (shared by every relation of a model).
    indices : iterable of int or str
        Member variables, as positions, names or abbreviations. Stored sorted
        and de-duplicated.
    constraints : StateConstraints, optional
        When given, the relation is state-based. Every key must wildcard the
        variables outside the relation.

    Notes
    -----
    - Equality is identity; two relations with the same content built
      separately are distinct objects. Use a ``RelationCache`` to share them.
    """

    def __init__(
        self,
        variables: VariableList,
        indices: Iterable[Union[int, str]],
        constraints: Optional[StateConstraints] = None,
    ) -> None:
        self.variables = variables
        self.indices: Tuple[int, ...] = tuple(sorted(set(variables.indices(indices))))
        for i in self.indices:
            if not 0 <= i < len(variables):
                raise IndexError(f"variable position {i} out of range")
        if constraints is not None:
            if constraints.variables is not variables:
                raise ValueError("constraints must use the relation's variable list")
            outside = [v for i, v in enumerate(variables) if i not in self.indices]
            for k in constraints:
                if any(key_value(k, v) != DONT_CARE for v in outside):
                    raise KeyLayoutError("constraint pins a variable outside the relation")
        self._constraints = constraints
        self._implicit: Optional[StateConstraints] = None
        self._names: dict = {}

    # --- collaborator contract ---

    def is_state_based(self) -> bool:
        return self._constraints is not None

    def get_variable_list(self) -> VariableList:
        return self.variables

    def get_variable_count(self) -> int:
        return len(self.indices)

    def is_independent_only(self) -> bool:
        """True in a directed system when no member variable is dependent."""
        if not self.variables.is_directed():
            return False
        return not any(self.variables[i].is_dependent for i in self.indices)

    def contains(self, other: "Relation") -> bool:
        """Variable-set containment: every variable of `other` is in `self`."""
        return set(other.indices) <= set(self.indices)

    def sort_key(self) -> tuple:
        keys = self._constraints.keys if self._constraints is not None else ()
        return (self.indices, self.is_state_based(), keys)

    def compare(self, other: "Relation") -> int:
        """Canonical order: -1, 0 or 1."""
        a, b = self.sort_key(), other.sort_key()
        return (a > b) - (a < b)

    def get_state_constraints(self) -> StateConstraints:
        """
        Explicit constraints for state-based relations; otherwise one key per
        joint state of the relation's own variables (built once).
        """
        if self._constraints is not None:
            return self._constraints
        if self._implicit is None:
            cards = [range(self.variables[i].cardinality) for i in self.indices]
            self._implicit = StateConstraints.from_states(self.variables, self.indices, product(*cards))
        return self._implicit

    # --- naming ---

    def _constraint_name(self, key: Key) -> str:
        parts = []
        for i in self.indices:
            v = self.variables[i]
            value = key_value(key, v)
            if value != DONT_CARE:
                parts.append(f"{v.abbrev}{value}")
        return "".join(parts) or "*"

    def get_print_name(self, use_inverse: bool = False) -> str:
        """
        Variable-based: member abbreviations (inverse: the complementary
        abbreviations). State-based: the member abbreviations, a ``.``, then the
        constraints like ``X0Y1`` joined by ``+`` (e.g. ``XY.X0Y1+X1Y0``).
        """
        use_inverse = bool(use_inverse)
        name = self._names.get(use_inverse)
        if name is not None:
            return name
        if self._constraints is not None:
            members = "".join(self.variables[i].abbrev for i in self.indices)
            name = members + "." + "+".join(self._constraint_name(k) for k in self._constraints)
        elif use_inverse:
            name = "".join(v.abbrev for i, v in enumerate(self.variables) if i not in self.indices)
        else:
            name = "".join(self.variables[i].abbrev for i in self.indices)
        self._names[use_inverse] = name
        return name

    def dump(self) -> str:
        kind = "state-based" if self.is_state_based() else "variable-based"
        return (
            f"Relation {self.get_print_name()} ({kind}): vars={list(self.indices)}, "
            f"constraints={self.get_state_constraints().get_constraint_count()}"
        )

    def __repr__(self) -> str:
        return f"Relation({self.get_print_name()!r})"
