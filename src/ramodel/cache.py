# src/ramodel/cache.py

"""
Registries of shared relations and previously built models.

Both caches key their entries by print name. Relations are registered once
in a :class:`RelationCache` and shared by reference by every model that
uses them; models never own their relations. A :class:`ModelCache` lets the
containment oracle reuse degrees of freedom already computed for a model of
the same name.

Neither cache is thread-safe.

Examples
--------
>>> from ramodel.variables import Variable, VariableList
>>> from ramodel.cache import RelationCache
>>> vl = VariableList([Variable("x", "X", 2), Variable("y", "Y", 2)])
>>> rc = RelationCache()
>>> rc.get_relation(vl, ["X"]) is rc.get_relation(vl, [0])
True
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, Optional, Union

from .relations import Relation, StateConstraints
from .variables import VariableList

__all__ = [
    "RelationCache",
    "ModelCache",
]

logger = logging.getLogger(__name__)


class RelationCache:
    """Arena of shared relations keyed by print name."""

    def __init__(self) -> None:
        self._relations: Dict[str, Relation] = {}

    def add_relation(self, relation: Relation) -> bool:
        """Register `relation`; False when a relation of that name is already present."""
        name = relation.get_print_name()
        if name in self._relations:
            return False
        self._relations[name] = relation
        return True

    def find_relation(self, name: str) -> Optional[Relation]:
        return self._relations.get(name)

    def get_relation(
        self,
        variables: VariableList,
        indices: Iterable[Union[int, str]],
        constraints: Optional[StateConstraints] = None,
    ) -> Relation:
        """Return the registered relation equal to the requested one, creating it if needed."""
        rel = Relation(variables, indices, constraints)
        found = self._relations.get(rel.get_print_name())
        if found is not None:
            return found
        self._relations[rel.get_print_name()] = rel
        return rel

    def __contains__(self, name: str) -> bool:
        return name in self._relations

    def __len__(self) -> int:
        return len(self._relations)

    def __iter__(self) -> Iterator[Relation]:
        return iter(self._relations.values())


class ModelCache:
    """Models keyed by print name."""

    def __init__(self) -> None:
        self._models: Dict[str, object] = {}

    def add_model(self, model) -> bool:
        """Store `model`; False when a model of the same name is already cached."""
        name = model.get_print_name()
        if name in self._models:
            return False
        self._models[name] = model
        logger.debug("cached model %s", name)
        return True

    def find_model(self, name: str):
        return self._models.get(name)

    def delete_model(self, model) -> bool:
        name = model.get_print_name()
        if self._models.get(name) is model:
            del self._models[name]
            return True
        return False

    def clear(self) -> None:
        self._models.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)
