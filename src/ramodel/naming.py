# src/ramodel/naming.py

"""
Canonical model names.

A model name lists its relations' names in canonical order, joined by
``":"``. Two abbreviations keep names short:

- ``IV``  : in a directed system, the relation holding only independent
            variables, placed first.
- ``IVI`` : in an undirected system, the group of single-variable,
            variable-based relations, placed first when there are at least
            two of them.

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.relations import Relation
>>> from ramodel.model import Model
>>> vl = VariableList([Variable(n, n, 2) for n in "ABC"])
>>> m = Model()
>>> for r in (["A", "B"], ["C"]):
...     _ = m.add_relation(Relation(vl, r))
>>> print_name(m)
'AB:C'
"""

from __future__ import annotations

__all__ = ["print_name"]


def print_name(model, use_inverse: bool = False) -> str:
    """Build the name of `model` (no memoization; see ``Model.get_print_name``)."""
    count = model.get_relation_count()
    if count == 0:
        return ""
    relations = [model.get_relation(i) for i in range(count)]
    directed = relations[0].get_variable_list().is_directed()

    def _single_iv(rel) -> bool:
        return not directed and rel.get_variable_count() == 1 and not rel.is_state_based()

    prefix = None
    skip = set()
    if directed:
        for i, rel in enumerate(relations):
            if rel.is_independent_only():
                prefix = "IV"
                skip = {i}
    else:
        singles = {i for i, rel in enumerate(relations) if _single_iv(rel)}
        if len(singles) > 1:
            prefix = "IVI"
            skip = singles

    parts = [prefix] if prefix else []
    parts.extend(rel.get_print_name(use_inverse) for i, rel in enumerate(relations) if i not in skip)
    return ":".join(parts)
